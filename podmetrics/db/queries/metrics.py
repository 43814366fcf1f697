"""Read queries for the metrics table."""

from datetime import datetime

import asyncpg

from podmetrics.models.metric import Metric


async def get_latest_metrics(pool: asyncpg.Pool, podcast_id: int) -> list[Metric]:
    """Most recent metric row per platform for a podcast."""
    rows = await pool.fetch(
        """
        SELECT DISTINCT ON (platform)
            podcast_id, platform, fetched_at, expires_at, cost, followers_count
        FROM metrics
        WHERE podcast_id = $1
        ORDER BY platform, fetched_at DESC
        """,
        podcast_id,
    )
    return [Metric(**dict(row)) for row in rows]


async def count_metrics_fetched_between(
    pool: asyncpg.Pool, start: datetime, end: datetime
) -> int:
    count = await pool.fetchval(
        "SELECT COUNT(*) FROM metrics WHERE fetched_at >= $1 AND fetched_at < $2",
        start,
        end,
    )
    return int(count or 0)


async def get_last_fetched_at(pool: asyncpg.Pool) -> datetime | None:
    return await pool.fetchval("SELECT MAX(fetched_at) FROM metrics")
