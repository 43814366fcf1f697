from arq.connections import RedisSettings
from arq.cron import cron

from podmetrics.config.constants import DEFAULT_JOB_TIMEOUT, QUEUE_NAMES
from podmetrics.config.settings import get_settings
from podmetrics.workers.background_refresh import run_background_refresh


async def startup(ctx: dict) -> None:
    from podmetrics.db.pool import get_pool
    from podmetrics.utils.logger import setup_logging

    setup_logging()
    ctx["pool"] = await get_pool()


async def shutdown(ctx: dict) -> None:
    from podmetrics.db.pool import close_pool

    await close_pool()


class WorkerSettings:
    functions = [run_background_refresh]
    on_startup = startup
    on_shutdown = shutdown

    _settings = get_settings()

    # Daily background refresh; the advisory lock keeps overlapping runs out
    cron_jobs = [
        cron(
            run_background_refresh,
            hour=_settings.refresh_cron_hour,
            minute=0,
            unique=True,
            timeout=DEFAULT_JOB_TIMEOUT,
        ),
    ]

    queue_name = QUEUE_NAMES["refresh"]
    redis_settings = RedisSettings.from_dsn(_settings.redis_url)
    job_timeout = DEFAULT_JOB_TIMEOUT
