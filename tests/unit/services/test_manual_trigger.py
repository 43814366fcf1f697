from unittest.mock import AsyncMock, patch

from podmetrics.config.constants import MANUAL_REFRESH_PRIORITY
from podmetrics.models.job import JobType
from podmetrics.services.manual_trigger import ManualTrigger
from podmetrics.services.refresh_scheduler import RefreshScheduler
from podmetrics.utils.errors import JobQueueError


async def test_unknown_podcast_returns_none(repository, fake_queue):
    trigger = ManualTrigger(repository, fake_queue)

    assert await trigger.trigger(404) is None
    assert fake_queue.jobs == []


async def test_empty_platforms_resolve_to_all_declared(repository, fake_queue, now):
    repository.add_podcast(1, ["twitter", "youtube"])
    trigger = ManualTrigger(repository, fake_queue)

    job_id = await trigger.trigger(1)

    assert job_id == fake_queue.jobs[0]["id"]
    assert sorted(fake_queue.jobs[0]["platforms"]) == ["twitter", "youtube"]


async def test_fresh_platforms_are_refreshed_anyway(repository, fake_queue, now, fresh_until):
    repository.add_podcast(1, ["twitter"])
    repository.add_metric(1, "twitter", fetched_at=now, expires_at=fresh_until)

    await ManualTrigger(repository, fake_queue).trigger(1, [])

    assert fake_queue.jobs[0]["platforms"] == ["twitter"]


async def test_explicit_platforms_are_used_as_given(repository, fake_queue):
    repository.add_podcast(1, ["twitter", "youtube", "instagram"])

    await ManualTrigger(repository, fake_queue).trigger(1, ["instagram"])

    job = fake_queue.jobs[0]
    assert job["platforms"] == ["instagram"]
    assert job["job_type"] is JobType.MANUAL_REFRESH
    assert job["priority"] == MANUAL_REFRESH_PRIORITY == 80


async def test_manual_refresh_ignores_exhausted_budget(
    repository, fake_queue, fake_settings, fake_ledger, now
):
    """The background run stops at the cap; a manual trigger still queues."""
    repository.add_podcast(1, ["twitter"])
    scheduler = RefreshScheduler(
        repository=repository,
        settings=fake_settings(weekly_budget=50.0),
        ledger=fake_ledger(75.0),
        freshness=AsyncMock(),
        queue=fake_queue,
        sleep=AsyncMock(),
    )

    await scheduler.run()
    assert fake_queue.jobs == []

    job_id = await ManualTrigger(repository, fake_queue).trigger(1)

    assert job_id is not None
    assert fake_queue.podcast_ids == [1]


async def test_queue_rejection_returns_none(repository, fake_queue):
    repository.add_podcast(1, ["twitter"])
    fake_queue.rejected = {1}

    with patch("podmetrics.services.manual_trigger.log") as log:
        assert await ManualTrigger(repository, fake_queue).trigger(1) is None

    log.warning.assert_called_once_with("manual_refresh_rejected", podcast_id=1)
    log.info.assert_not_called()


async def test_queue_error_returns_none(repository):
    repository.add_podcast(1, ["twitter"])
    queue = AsyncMock()
    queue.queue_job.side_effect = JobQueueError("insert failed", podcast_id=1)

    assert await ManualTrigger(repository, queue).trigger(1) is None
