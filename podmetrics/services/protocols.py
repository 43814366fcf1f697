"""Collaborator interfaces consumed by the refresh services."""

from typing import Any, Protocol
from uuid import UUID

from podmetrics.models.job import JobType
from podmetrics.models.metric import Metric
from podmetrics.models.podcast import Podcast


class Repository(Protocol):
    async def get_tracked_podcasts(self) -> list[Podcast]: ...

    async def get_podcast(self, podcast_id: int) -> Podcast | None: ...

    async def get_social_links(self, podcast_id: int) -> list[str]: ...

    async def get_latest_metrics(self, podcast_id: int) -> list[Metric]: ...


class SettingsSource(Protocol):
    async def get_all(self) -> dict[str, Any]: ...


class Ledger(Protocol):
    async def current_window_cost(self) -> float: ...


class Freshness(Protocol):
    async def due_platforms(self, podcast_id: int) -> set[str]: ...


class Queue(Protocol):
    def estimate_cost(self, platforms: list[str] | set[str]) -> float: ...

    async def queue_job(
        self,
        podcast_id: int,
        job_type: JobType,
        platforms: list[str],
        priority: int,
    ) -> UUID | None: ...


class RunLock(Protocol):
    async def acquire(self) -> bool: ...

    async def release(self) -> None: ...
