from datetime import timedelta

import pytest

from podmetrics.services.freshness import FreshnessEvaluator, latest_by_platform


@pytest.fixture
def evaluator(repository, now) -> FreshnessEvaluator:
    return FreshnessEvaluator(repository, clock=lambda: now)


async def test_only_unmetered_platform_is_due(repository, evaluator, now):
    repository.add_podcast(1, ["a", "b"])
    repository.add_metric(1, "a", fetched_at=now - timedelta(days=1), expires_at=now + timedelta(days=1))

    assert await evaluator.due_platforms(1) == {"b"}


async def test_no_metrics_means_every_platform_is_due(repository, evaluator):
    repository.add_podcast(1, ["a", "b"])

    assert await evaluator.due_platforms(1) == {"a", "b"}


async def test_expired_metric_is_due(repository, evaluator, now):
    repository.add_podcast(1, ["a"])
    repository.add_metric(1, "a", fetched_at=now - timedelta(days=8), expires_at=now - timedelta(days=1))

    assert await evaluator.due_platforms(1) == {"a"}


async def test_metric_expiring_right_now_is_not_yet_due(repository, evaluator, now):
    repository.add_podcast(1, ["a"])
    repository.add_metric(1, "a", fetched_at=now - timedelta(days=7), expires_at=now)

    assert await evaluator.due_platforms(1) == set()


async def test_only_latest_metric_per_platform_counts(repository, evaluator, now):
    repository.add_podcast(1, ["a", "b"])
    # a: old row still unexpired, newer row already expired -> due
    repository.add_metric(1, "a", fetched_at=now - timedelta(days=20), expires_at=now + timedelta(days=5))
    repository.add_metric(1, "a", fetched_at=now - timedelta(days=3), expires_at=now - timedelta(hours=1))
    # b: old row expired, newer row fresh -> not due
    repository.add_metric(1, "b", fetched_at=now - timedelta(days=20), expires_at=now - timedelta(days=13))
    repository.add_metric(1, "b", fetched_at=now - timedelta(days=1), expires_at=now + timedelta(days=6))

    assert await evaluator.due_platforms(1) == {"a"}


async def test_metrics_for_undeclared_platforms_are_ignored(repository, evaluator, now):
    repository.add_podcast(1, ["a"])
    repository.add_metric(1, "z", fetched_at=now - timedelta(days=9), expires_at=now - timedelta(days=2))

    assert await evaluator.due_platforms(1) == {"a"}


async def test_podcast_without_links_has_nothing_due(repository, evaluator):
    repository.add_podcast(1, [])

    assert await evaluator.due_platforms(1) == set()


def test_latest_by_platform_picks_max_fetched_at(repository, now):
    repository.add_metric(1, "a", fetched_at=now - timedelta(days=2), expires_at=now + timedelta(days=1))
    repository.add_metric(1, "a", fetched_at=now - timedelta(days=1), expires_at=now + timedelta(days=2))

    latest = latest_by_platform(repository.metrics)

    assert latest["a"].fetched_at == now - timedelta(days=1)
