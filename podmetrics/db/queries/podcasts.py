"""Read queries for the podcasts and social_links tables."""

from datetime import datetime

import asyncpg

from podmetrics.models.podcast import Podcast, SocialLink, TrackingStatus
from podmetrics.models.refresh import DuePodcast


async def get_tracked_podcasts(pool: asyncpg.Pool) -> list[Podcast]:
    """Podcasts flagged for ongoing metric collection, in ascending id order."""
    rows = await pool.fetch(
        "SELECT * FROM podcasts WHERE is_tracked = true AND tracking_status = $1 "
        "ORDER BY id ASC",
        TrackingStatus.TRACKED.value,
    )
    return [Podcast(**dict(row)) for row in rows]


async def get_podcast(pool: asyncpg.Pool, podcast_id: int) -> Podcast | None:
    row = await pool.fetchrow("SELECT * FROM podcasts WHERE id = $1", podcast_id)
    return Podcast(**dict(row)) if row else None


async def get_social_links(pool: asyncpg.Pool, podcast_id: int) -> list[SocialLink]:
    rows = await pool.fetch(
        "SELECT podcast_id, platform, url, created_at FROM social_links "
        "WHERE podcast_id = $1 ORDER BY platform ASC",
        podcast_id,
    )
    return [SocialLink(**dict(row)) for row in rows]


async def count_tracked_podcasts(pool: asyncpg.Pool) -> int:
    count = await pool.fetchval("SELECT COUNT(*) FROM podcasts WHERE is_tracked = true")
    return int(count or 0)


async def get_podcasts_due_for_refresh(pool: asyncpg.Pool, now: datetime) -> list[DuePodcast]:
    """Tracked podcasts with no metrics or at least one expired latest metric."""
    rows = await pool.fetch(
        """
        WITH latest AS (
            SELECT DISTINCT ON (podcast_id, platform) podcast_id, platform, expires_at
            FROM metrics
            ORDER BY podcast_id, platform, fetched_at DESC
        )
        SELECT p.id AS podcast_id, p.title, p.updated_at,
               COUNT(l.platform) AS platforms_count
        FROM podcasts p
        LEFT JOIN latest l ON l.podcast_id = p.id
        WHERE p.is_tracked = true
        GROUP BY p.id
        HAVING COUNT(l.platform) = 0 OR bool_or(l.expires_at < $1)
        ORDER BY p.updated_at DESC
        """,
        now,
    )
    return [DuePodcast(**dict(row)) for row in rows]
