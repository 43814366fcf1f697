"""Budget-constrained background refresh.

A run walks the tracked podcasts in repository order and moves through a
small state machine per podcast::

    EVALUATING -> STOPPED                  spent >= budget, end the run
    EVALUATING -> SKIPPING -> EVALUATING   this podcast would overshoot
    EVALUATING -> SUBMITTING -> EVALUATING job handed to the queue

STOPPED is a hard circuit breaker: no further podcast is looked at. SKIPPING
only passes over the current podcast so cheaper ones later in the list can
still fit under the cap.

Spend is read from the ledger once at the start of the run and then tracked
locally. Background runs are serialized by the run lock, but manual refreshes
bypass the budget entirely and are not reflected mid-run, so the weekly
budget is a soft limit with respect to them.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from podmetrics.config.constants import BACKGROUND_REFRESH_PRIORITY
from podmetrics.models.job import JobType
from podmetrics.models.podcast import Podcast
from podmetrics.models.refresh import RunState, RunSummary
from podmetrics.services.protocols import (
    Freshness,
    Ledger,
    Queue,
    Repository,
    RunLock,
    SettingsSource,
)
from podmetrics.utils.errors import JobQueueError, RunAbortedError

log = structlog.get_logger()

DEFAULT_THROTTLE_MS = 100


class RefreshScheduler:
    def __init__(
        self,
        repository: Repository,
        settings: SettingsSource,
        ledger: Ledger,
        freshness: Freshness,
        queue: Queue,
        lock: RunLock | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.repository = repository
        self.settings = settings
        self.ledger = ledger
        self.freshness = freshness
        self.queue = queue
        self.lock = lock
        self._sleep = sleep

    async def run(self) -> RunSummary:
        """Run one background refresh pass. Safe to call repeatedly."""
        if self.lock is not None and not await self.lock.acquire():
            log.info("background_refresh_locked")
            return RunSummary(state=RunState.LOCKED)

        try:
            return await self._run()
        finally:
            if self.lock is not None:
                await self.lock.release()

    async def _run(self) -> RunSummary:
        try:
            podcasts = await self.repository.get_tracked_podcasts()
        except Exception as e:
            log.exception("background_refresh_aborted")
            raise RunAbortedError("Could not load tracked podcasts") from e

        if not podcasts:
            log.info("background_refresh_nothing_tracked")
            return RunSummary(state=RunState.COMPLETED)

        config = await self.settings.get_all()
        budget_limit = float(config["weekly_budget"])
        throttle = int(config.get("refresh_throttle_ms", DEFAULT_THROTTLE_MS)) / 1000.0
        spent = await self.ledger.current_window_cost()

        summary = RunSummary(
            state=RunState.EVALUATING,
            budget_limit=budget_limit,
            spent_at_start=spent,
            spent=spent,
            podcasts_total=len(podcasts),
        )
        log.info(
            "background_refresh_started",
            podcasts=len(podcasts),
            budget_limit=budget_limit,
            spent=spent,
        )

        for podcast in podcasts:
            state = await self._step(podcast, summary)

            if state is RunState.STOPPED:
                summary.state = RunState.STOPPED
                break
            if state is RunState.SUBMITTING and throttle > 0:
                await self._sleep(throttle)
        else:
            summary.state = RunState.COMPLETED

        log.info(
            "background_refresh_completed",
            state=summary.state.value,
            jobs_queued=summary.jobs_queued,
            evaluated=summary.podcasts_evaluated,
            skipped=len(summary.skipped_over_budget),
            failed=len(summary.failed),
            spent=summary.spent,
            budget_limit=budget_limit,
        )
        return summary

    async def _step(self, podcast: Podcast, summary: RunSummary) -> RunState:
        """Decide one podcast. Returns the state the run moved through."""
        if summary.spent >= summary.budget_limit:
            log.info(
                "background_refresh_budget_reached",
                podcast_id=podcast.id,
                spent=summary.spent,
                budget_limit=summary.budget_limit,
            )
            return RunState.STOPPED

        summary.podcasts_evaluated += 1
        try:
            due = await self.freshness.due_platforms(podcast.id)
            if not due:
                return RunState.EVALUATING

            estimated = self.queue.estimate_cost(due)
            if summary.spent + estimated > summary.budget_limit:
                log.info(
                    "background_refresh_podcast_skipped",
                    podcast_id=podcast.id,
                    estimated=estimated,
                    spent=summary.spent,
                    budget_limit=summary.budget_limit,
                )
                summary.skipped_over_budget.append(podcast.id)
                return RunState.SKIPPING

            return await self._submit(podcast.id, sorted(due), estimated, summary)
        except Exception:
            log.exception("background_refresh_podcast_failed", podcast_id=podcast.id)
            summary.failed.append(podcast.id)
            return RunState.EVALUATING

    async def _submit(
        self,
        podcast_id: int,
        platforms: list[str],
        estimated: float,
        summary: RunSummary,
    ) -> RunState:
        try:
            job_id = await self.queue.queue_job(
                podcast_id,
                JobType.BACKGROUND_REFRESH,
                platforms,
                BACKGROUND_REFRESH_PRIORITY,
            )
        except JobQueueError as e:
            log.warning("background_refresh_submit_error", podcast_id=podcast_id, error=str(e))
            job_id = None

        if job_id is None:
            summary.failed.append(podcast_id)
            return RunState.EVALUATING

        summary.jobs_queued += 1
        summary.spent += estimated
        return RunState.SUBMITTING
