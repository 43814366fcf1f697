from collections.abc import Callable
from datetime import datetime

import asyncpg

from podmetrics.db.queries import metrics as metric_queries
from podmetrics.db.queries import podcasts as podcast_queries
from podmetrics.models.refresh import DuePodcast, RefreshStatistics
from podmetrics.services.protocols import Ledger
from podmetrics.utils.timeutils import iso_week_bounds, utcnow


class StatisticsReporter:
    """Read-only refresh statistics. Never writes to any table."""

    def __init__(
        self,
        pool: asyncpg.Pool,
        ledger: Ledger,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.pool = pool
        self.ledger = ledger
        self._clock = clock

    async def snapshot(self) -> RefreshStatistics:
        start, end = iso_week_bounds(self._clock())
        return RefreshStatistics(
            tracked_podcasts=await podcast_queries.count_tracked_podcasts(self.pool),
            metrics_this_week=await metric_queries.count_metrics_fetched_between(
                self.pool, start, end
            ),
            cost_this_week=await self.ledger.current_window_cost(),
            last_refresh=await metric_queries.get_last_fetched_at(self.pool),
        )

    async def podcasts_due_for_refresh(self) -> list[DuePodcast]:
        """Most recently updated podcasts first."""
        return await podcast_queries.get_podcasts_due_for_refresh(self.pool, self._clock())
