"""asyncpg-backed repository handed to the refresh services."""

import asyncpg

from podmetrics.db.queries import metrics as metric_queries
from podmetrics.db.queries import podcasts as podcast_queries
from podmetrics.models.metric import Metric
from podmetrics.models.podcast import Podcast


class PodcastRepository:
    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def get_tracked_podcasts(self) -> list[Podcast]:
        return await podcast_queries.get_tracked_podcasts(self.pool)

    async def get_podcast(self, podcast_id: int) -> Podcast | None:
        return await podcast_queries.get_podcast(self.pool, podcast_id)

    async def get_social_links(self, podcast_id: int) -> list[str]:
        """Platforms declared for a podcast."""
        links = await podcast_queries.get_social_links(self.pool, podcast_id)
        return [link.platform for link in links]

    async def get_latest_metrics(self, podcast_id: int) -> list[Metric]:
        return await metric_queries.get_latest_metrics(self.pool, podcast_id)
