"""Wires the refresh services to a Postgres pool."""

import asyncpg

from podmetrics.config.settings import Settings, get_settings
from podmetrics.db.repository import PodcastRepository
from podmetrics.services.cost_ledger import CostLedger
from podmetrics.services.freshness import FreshnessEvaluator
from podmetrics.services.job_queue import JobQueue
from podmetrics.services.manual_trigger import ManualTrigger
from podmetrics.services.refresh_scheduler import RefreshScheduler
from podmetrics.services.run_lock import AdvisoryRunLock
from podmetrics.services.settings_provider import SettingsProvider
from podmetrics.services.statistics import StatisticsReporter


def build_job_queue(pool: asyncpg.Pool, settings: Settings | None = None) -> JobQueue:
    settings = settings or get_settings()
    return JobQueue(pool, PodcastRepository(pool), max_queued_jobs=settings.max_queued_jobs)


def build_scheduler(pool: asyncpg.Pool, settings: Settings | None = None) -> RefreshScheduler:
    settings = settings or get_settings()
    repository = PodcastRepository(pool)
    return RefreshScheduler(
        repository=repository,
        settings=SettingsProvider(pool, settings),
        ledger=CostLedger(pool),
        freshness=FreshnessEvaluator(repository),
        queue=build_job_queue(pool, settings),
        lock=AdvisoryRunLock(pool),
    )


def build_manual_trigger(pool: asyncpg.Pool, settings: Settings | None = None) -> ManualTrigger:
    return ManualTrigger(PodcastRepository(pool), build_job_queue(pool, settings))


def build_statistics(pool: asyncpg.Pool) -> StatisticsReporter:
    return StatisticsReporter(pool, CostLedger(pool))
