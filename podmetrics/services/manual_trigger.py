from uuid import UUID

import structlog

from podmetrics.config.constants import MANUAL_REFRESH_PRIORITY
from podmetrics.models.job import JobType
from podmetrics.services.protocols import Queue, Repository
from podmetrics.utils.errors import JobQueueError

log = structlog.get_logger()


class ManualTrigger:
    """Operator-initiated refresh of one podcast.

    Deliberately skips both the freshness check and the weekly budget: an
    operator can always force a refresh, even after background runs have
    stopped for the week. Spend from manual refreshes still lands in the
    cost log and counts against later background runs.
    """

    def __init__(self, repository: Repository, queue: Queue) -> None:
        self.repository = repository
        self.queue = queue

    async def trigger(self, podcast_id: int, platforms: list[str] | None = None) -> UUID | None:
        """Queue a high-priority refresh. Returns the job id, or None on failure."""
        podcast = await self.repository.get_podcast(podcast_id)
        if podcast is None:
            log.warning("manual_refresh_unknown_podcast", podcast_id=podcast_id)
            return None

        if not platforms:
            platforms = await self.repository.get_social_links(podcast_id)

        try:
            job_id = await self.queue.queue_job(
                podcast_id,
                JobType.MANUAL_REFRESH,
                list(platforms),
                MANUAL_REFRESH_PRIORITY,
            )
        except JobQueueError as e:
            log.warning("manual_refresh_submit_error", podcast_id=podcast_id, error=str(e))
            return None

        if job_id is None:
            log.warning("manual_refresh_rejected", podcast_id=podcast_id)
            return None

        log.info(
            "manual_refresh_queued",
            podcast_id=podcast_id,
            job_id=str(job_id),
            platforms=sorted(platforms),
        )
        return job_id
