from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class RunState(StrEnum):
    EVALUATING = "evaluating"
    SKIPPING = "skipping"
    SUBMITTING = "submitting"
    STOPPED = "stopped"
    COMPLETED = "completed"
    LOCKED = "locked"


class RunSummary(BaseModel):
    state: RunState
    budget_limit: float = 0.0
    spent_at_start: float = 0.0
    spent: float = 0.0
    podcasts_total: int = 0
    podcasts_evaluated: int = 0
    jobs_queued: int = 0
    skipped_over_budget: list[int] = []
    failed: list[int] = []


class BudgetHealth(StrEnum):
    UNLIMITED = "unlimited"
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    EXCEEDED = "exceeded"


class BudgetStatus(BaseModel):
    budget: float
    spent: float
    remaining: float
    percentage: float
    status: BudgetHealth


class RefreshStatistics(BaseModel):
    tracked_podcasts: int
    metrics_this_week: int
    cost_this_week: float
    last_refresh: datetime | None = None


class DuePodcast(BaseModel):
    podcast_id: int
    title: str | None = None
    updated_at: datetime | None = None
    platforms_count: int = 0
