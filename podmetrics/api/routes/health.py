import structlog
from arq.connections import RedisSettings
from arq.connections import create_pool as create_arq_pool
from fastapi import APIRouter

from podmetrics.config.settings import get_settings
from podmetrics.db.pool import get_pool
from podmetrics.db.queries import jobs as job_queries
from podmetrics.models.api import HealthResponse
from podmetrics.models.job import JobType

log = structlog.get_logger()

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Database and redis reachability, plus when the cron last queued work.

    A stale ``last_background_refresh`` means the worker is down or every
    run since has stopped on the weekly budget.
    """
    db_status = "disconnected"
    redis_status = "disconnected"
    last_refresh = None
    settings = get_settings()

    try:
        pool = await get_pool()
        if await pool.fetchval("SELECT 1") == 1:
            db_status = "connected"
            last_refresh = await job_queries.get_latest_job_created_at(
                pool, JobType.BACKGROUND_REFRESH
            )
    except Exception as e:
        log.warning("health_database_unreachable", error=str(e))

    try:
        redis = await create_arq_pool(RedisSettings.from_dsn(settings.redis_url))
        await redis.ping()
        redis_status = "connected"
        await redis.aclose()
    except Exception as e:
        log.warning("health_redis_unreachable", error=str(e))

    return HealthResponse(
        status="ok" if db_status == "connected" else "degraded",
        database=db_status,
        redis=redis_status,
        last_background_refresh=last_refresh,
    )
