from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

from podmetrics.services.statistics import StatisticsReporter


def _pool() -> MagicMock:
    pool = MagicMock()
    pool.fetch = AsyncMock(return_value=[])
    pool.fetchval = AsyncMock()
    pool.execute = AsyncMock()
    return pool


async def test_snapshot_collects_counts(fake_ledger, now):
    pool = _pool()
    last = datetime(2026, 10, 13, 8, 0, tzinfo=UTC)
    pool.fetchval.side_effect = [4, 17, last]
    reporter = StatisticsReporter(pool, fake_ledger(12.25), clock=lambda: now)

    stats = await reporter.snapshot()

    assert stats.tracked_podcasts == 4
    assert stats.metrics_this_week == 17
    assert stats.cost_this_week == 12.25
    assert stats.last_refresh == last
    _, start, end = pool.fetchval.await_args_list[1].args
    assert start == datetime(2026, 10, 12, tzinfo=UTC)
    assert end == datetime(2026, 10, 19, tzinfo=UTC)


async def test_snapshot_with_empty_tables(fake_ledger, now):
    pool = _pool()
    pool.fetchval.side_effect = [0, 0, None]
    reporter = StatisticsReporter(pool, fake_ledger(0.0), clock=lambda: now)

    stats = await reporter.snapshot()

    assert stats.tracked_podcasts == 0
    assert stats.last_refresh is None
    pool.execute.assert_not_called()


async def test_due_podcasts_keep_query_order(fake_ledger, now):
    pool = _pool()
    pool.fetch.return_value = [
        {"podcast_id": 7, "title": "Newest", "updated_at": now, "platforms_count": 0},
        {"podcast_id": 3, "title": "Older", "updated_at": datetime(2026, 9, 1, tzinfo=UTC), "platforms_count": 2},
    ]
    reporter = StatisticsReporter(pool, fake_ledger(), clock=lambda: now)

    due = await reporter.podcasts_due_for_refresh()

    assert [p.podcast_id for p in due] == [7, 3]
    sql, passed_now = pool.fetch.await_args.args
    assert "ORDER BY p.updated_at DESC" in sql
    assert passed_now == now
