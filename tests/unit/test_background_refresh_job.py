from unittest.mock import AsyncMock, MagicMock, patch

from podmetrics.models.refresh import RunState, RunSummary
from podmetrics.workers.background_refresh import run_background_refresh


async def test_cron_job_runs_scheduler_with_worker_pool():
    pool = MagicMock()
    scheduler = MagicMock()
    scheduler.run = AsyncMock(return_value=RunSummary(state=RunState.COMPLETED, jobs_queued=2))

    with patch("podmetrics.services.factory.build_scheduler", return_value=scheduler) as build:
        result = await run_background_refresh({"pool": pool})

    build.assert_called_once_with(pool)
    assert result["state"] == "completed"
    assert result["jobs_queued"] == 2
