from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

import pytest

from podmetrics.models.job import JobType
from podmetrics.models.metric import Metric
from podmetrics.models.podcast import Podcast, TrackingStatus

NOW = datetime(2026, 10, 14, 12, 0, tzinfo=UTC)


class FakeRepository:
    """In-memory stand-in for PodcastRepository."""

    def __init__(self) -> None:
        self.podcasts: dict[int, Podcast] = {}
        self.links: dict[int, list[str]] = {}
        self.metrics: list[Metric] = []

    def add_podcast(self, podcast_id: int, platforms: list[str], *, tracked: bool = True) -> Podcast:
        podcast = Podcast(
            id=podcast_id,
            title=f"Podcast {podcast_id}",
            is_tracked=tracked,
            tracking_status=TrackingStatus.TRACKED if tracked else TrackingStatus.UNTRACKED,
            updated_at=NOW,
        )
        self.podcasts[podcast_id] = podcast
        self.links[podcast_id] = list(platforms)
        return podcast

    def add_metric(
        self,
        podcast_id: int,
        platform: str,
        *,
        fetched_at: datetime,
        expires_at: datetime,
    ) -> None:
        self.metrics.append(
            Metric(
                podcast_id=podcast_id,
                platform=platform,
                fetched_at=fetched_at,
                expires_at=expires_at,
            )
        )

    async def get_tracked_podcasts(self) -> list[Podcast]:
        return [
            p
            for _, p in sorted(self.podcasts.items())
            if p.is_tracked and p.tracking_status == TrackingStatus.TRACKED
        ]

    async def get_podcast(self, podcast_id: int) -> Podcast | None:
        return self.podcasts.get(podcast_id)

    async def get_social_links(self, podcast_id: int) -> list[str]:
        return list(self.links.get(podcast_id, []))

    async def get_latest_metrics(self, podcast_id: int) -> list[Metric]:
        return [m for m in self.metrics if m.podcast_id == podcast_id]


class FakeSettings:
    def __init__(self, **values: Any) -> None:
        self.values = {"weekly_budget": 50.0, "refresh_throttle_ms": 100, **values}

    async def get_all(self) -> dict[str, Any]:
        return dict(self.values)


class FakeLedger:
    def __init__(self, spent: float = 0.0) -> None:
        self.spent = spent
        self.calls = 0

    async def current_window_cost(self) -> float:
        self.calls += 1
        return self.spent


class FakeQueue:
    """Records submissions; prices platforms from a fixed table."""

    def __init__(self, costs: dict[str, float] | None = None) -> None:
        self.costs = costs or {}
        self.jobs: list[dict[str, Any]] = []
        self.rejected: set[int] = set()
        self.on_submit = None

    def estimate_cost(self, platforms) -> float:
        return sum(self.costs.get(p, 1.0) for p in platforms)

    async def queue_job(
        self, podcast_id: int, job_type: JobType, platforms: list[str], priority: int
    ) -> UUID | None:
        if podcast_id in self.rejected:
            return None
        job = {
            "id": uuid4(),
            "podcast_id": podcast_id,
            "job_type": job_type,
            "platforms": list(platforms),
            "priority": priority,
        }
        self.jobs.append(job)
        if self.on_submit is not None:
            self.on_submit(job)
        return job["id"]

    @property
    def podcast_ids(self) -> list[int]:
        return [job["podcast_id"] for job in self.jobs]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def fake_queue() -> FakeQueue:
    return FakeQueue()


@pytest.fixture
def fresh_until() -> datetime:
    return NOW + timedelta(days=30)


@pytest.fixture
def fake_settings():
    return FakeSettings


@pytest.fixture
def fake_ledger():
    return FakeLedger
