"""arq cron job running the budget-constrained background refresh."""

import structlog

log = structlog.get_logger()


async def run_background_refresh(ctx: dict) -> dict:
    """Queue refresh jobs for tracked podcasts whose metrics are due."""
    from podmetrics.db.pool import get_pool
    from podmetrics.services.factory import build_scheduler

    pool = ctx.get("pool") or await get_pool()
    scheduler = build_scheduler(pool)
    summary = await scheduler.run()
    return summary.model_dump(mode="json")
