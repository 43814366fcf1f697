from collections.abc import Callable
from datetime import datetime

from podmetrics.models.metric import Metric
from podmetrics.services.protocols import Repository
from podmetrics.utils.timeutils import utcnow


class FreshnessEvaluator:
    """Decides which of a podcast's declared platforms need a refresh."""

    def __init__(self, repository: Repository, clock: Callable[[], datetime] = utcnow) -> None:
        self.repository = repository
        self._clock = clock

    async def due_platforms(self, podcast_id: int) -> set[str]:
        """Declared platforms with no metric, or whose latest metric expired before now."""
        declared = set(await self.repository.get_social_links(podcast_id))
        if not declared:
            return set()

        latest = latest_by_platform(await self.repository.get_latest_metrics(podcast_id))
        now = self._clock()
        fresh = {
            platform for platform, metric in latest.items() if not metric.is_expired(now)
        }
        return declared - fresh


def latest_by_platform(metrics: list[Metric]) -> dict[str, Metric]:
    """Keep only the most recently fetched metric for each platform."""
    latest: dict[str, Metric] = {}
    for metric in metrics:
        current = latest.get(metric.platform)
        if current is None or metric.fetched_at > current.fetched_at:
            latest[metric.platform] = metric
    return latest
