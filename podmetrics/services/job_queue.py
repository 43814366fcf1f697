from uuid import UUID

import asyncpg
import structlog

from podmetrics.db.queries import jobs as job_queries
from podmetrics.models.job import JobType
from podmetrics.services.cost_estimator import CostEstimator
from podmetrics.services.protocols import Repository
from podmetrics.utils.errors import JobQueueError

log = structlog.get_logger()


class JobQueue:
    """Persists refresh jobs to refresh_jobs for the fetch workers to pick up.

    Dispatch order (priority DESC, created_at ASC) and execution belong to
    the consumers of the table; this class only admits or rejects jobs.
    """

    def __init__(
        self,
        pool: asyncpg.Pool,
        repository: Repository,
        estimator: CostEstimator | None = None,
        max_queued_jobs: int = 500,
    ) -> None:
        self.pool = pool
        self.repository = repository
        self.estimator = estimator or CostEstimator()
        self.max_queued_jobs = max_queued_jobs

    def estimate_cost(self, platforms: list[str] | set[str]) -> float:
        return self.estimator.estimate(platforms)

    async def queue_job(
        self,
        podcast_id: int,
        job_type: JobType,
        platforms: list[str],
        priority: int,
    ) -> UUID | None:
        """Queue a refresh job. Returns the job id, or None if rejected."""
        podcast = await self.repository.get_podcast(podcast_id)
        if podcast is None:
            log.warning("job_rejected_unknown_podcast", podcast_id=podcast_id)
            return None

        if not platforms:
            platforms = await self.repository.get_social_links(podcast_id)
        platforms = sorted(set(platforms))
        if not platforms:
            log.info("job_rejected_no_platforms", podcast_id=podcast_id)
            return None

        try:
            # Manual refreshes may stack on a pending job; background runs may not
            if job_type is JobType.BACKGROUND_REFRESH:
                pending = await job_queries.count_pending_jobs(self.pool, podcast_id)
                if pending > 0:
                    log.info(
                        "job_rejected_already_queued", podcast_id=podcast_id, pending=pending
                    )
                    return None

            queued = await job_queries.count_queued_jobs(self.pool)
            if queued >= self.max_queued_jobs:
                log.warning(
                    "job_rejected_queue_full",
                    podcast_id=podcast_id,
                    queued=queued,
                    max_queued=self.max_queued_jobs,
                )
                return None

            job = await job_queries.create_refresh_job(
                self.pool,
                podcast_id,
                job_type,
                platforms,
                priority,
                self.estimate_cost(platforms),
            )
        except asyncpg.PostgresError as e:
            raise JobQueueError(f"Failed to queue job: {e}", podcast_id=podcast_id) from e

        log.info(
            "job_queued",
            job_id=str(job.id),
            podcast_id=podcast_id,
            job_type=job_type.value,
            platforms=platforms,
            priority=priority,
            estimated_cost=job.estimated_cost_usd,
        )
        return job.id
