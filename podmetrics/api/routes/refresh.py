"""API routes for metric refresh: manual trigger, statistics, budget."""

from fastapi import APIRouter, HTTPException

from podmetrics.models.job import ManualRefreshInput, ManualRefreshResponse, RefreshJob
from podmetrics.models.refresh import BudgetStatus, DuePodcast, RefreshStatistics

router = APIRouter(prefix="/refresh", tags=["refresh"])


@router.post("/podcasts/{podcast_id}", response_model=ManualRefreshResponse)
async def trigger_refresh(podcast_id: int, input_data: ManualRefreshInput | None = None):
    """Force a high-priority refresh. Ignores freshness and the weekly budget."""
    from podmetrics.db.pool import get_pool
    from podmetrics.db.queries.podcasts import get_podcast
    from podmetrics.services.factory import build_manual_trigger

    pool = await get_pool()
    if await get_podcast(pool, podcast_id) is None:
        raise HTTPException(status_code=404, detail="Podcast not found")

    platforms = input_data.platforms if input_data else []
    job_id = await build_manual_trigger(pool).trigger(podcast_id, platforms)
    if job_id is None:
        raise HTTPException(status_code=409, detail="Refresh could not be queued")

    return ManualRefreshResponse(job_id=job_id, podcast_id=podcast_id, status="queued")


@router.get("/podcasts/{podcast_id}/jobs", response_model=list[RefreshJob])
async def list_refresh_jobs(podcast_id: int):
    """Most recent refresh jobs for a podcast."""
    from podmetrics.db.pool import get_pool
    from podmetrics.db.queries.jobs import list_podcast_jobs

    pool = await get_pool()
    return await list_podcast_jobs(pool, podcast_id)


@router.get("/stats", response_model=RefreshStatistics)
async def refresh_stats():
    from podmetrics.db.pool import get_pool
    from podmetrics.services.factory import build_statistics

    pool = await get_pool()
    return await build_statistics(pool).snapshot()


@router.get("/due", response_model=list[DuePodcast])
async def podcasts_due():
    from podmetrics.db.pool import get_pool
    from podmetrics.services.factory import build_statistics

    pool = await get_pool()
    return await build_statistics(pool).podcasts_due_for_refresh()


@router.get("/budget", response_model=dict[str, BudgetStatus])
async def budget_status():
    """Weekly and monthly spend against the configured budgets."""
    from podmetrics.db.pool import get_pool
    from podmetrics.services.cost_ledger import CostLedger
    from podmetrics.services.settings_provider import SettingsProvider

    pool = await get_pool()
    config = await SettingsProvider(pool).get_all()
    ledger = CostLedger(pool)
    return {
        "weekly": await ledger.budget_status(config["weekly_budget"], "week"),
        "monthly": await ledger.budget_status(config["monthly_budget"], "month"),
    }
