from datetime import datetime
from uuid import uuid4

import asyncpg

from podmetrics.models.job import JobStatus, JobType, RefreshJob


async def create_refresh_job(
    pool: asyncpg.Pool,
    podcast_id: int,
    job_type: JobType,
    platforms: list[str],
    priority: int,
    estimated_cost_usd: float,
) -> RefreshJob:
    row = await pool.fetchrow(
        """
        INSERT INTO refresh_jobs
            (id, podcast_id, job_type, platforms, priority, status, estimated_cost_usd)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        RETURNING *
        """,
        uuid4(),
        podcast_id,
        job_type.value,
        platforms,
        priority,
        JobStatus.QUEUED.value,
        estimated_cost_usd,
    )
    assert row is not None
    return RefreshJob(**dict(row))


async def count_queued_jobs(pool: asyncpg.Pool) -> int:
    count = await pool.fetchval(
        "SELECT COUNT(*) FROM refresh_jobs WHERE status = $1", JobStatus.QUEUED.value
    )
    return int(count or 0)


async def count_pending_jobs(pool: asyncpg.Pool, podcast_id: int) -> int:
    """Jobs for a podcast that are waiting for or being handled by a worker."""
    count = await pool.fetchval(
        "SELECT COUNT(*) FROM refresh_jobs WHERE podcast_id = $1 AND status = ANY($2::text[])",
        podcast_id,
        [JobStatus.QUEUED.value, JobStatus.PROCESSING.value],
    )
    return int(count or 0)


async def list_podcast_jobs(
    pool: asyncpg.Pool, podcast_id: int, *, limit: int = 10
) -> list[RefreshJob]:
    rows = await pool.fetch(
        "SELECT * FROM refresh_jobs WHERE podcast_id = $1 ORDER BY created_at DESC LIMIT $2",
        podcast_id,
        limit,
    )
    return [RefreshJob(**dict(row)) for row in rows]


async def get_latest_job_created_at(pool: asyncpg.Pool, job_type: JobType) -> datetime | None:
    return await pool.fetchval(
        "SELECT MAX(created_at) FROM refresh_jobs WHERE job_type = $1", job_type.value
    )
