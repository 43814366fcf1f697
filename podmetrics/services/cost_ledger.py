from collections.abc import Callable
from datetime import datetime

import asyncpg
import structlog

from podmetrics.config.constants import BUDGET_CRITICAL_PERCENT, BUDGET_WARNING_PERCENT
from podmetrics.db.queries.cost_log import sum_cost_between
from podmetrics.models.refresh import BudgetHealth, BudgetStatus
from podmetrics.utils.timeutils import iso_week_bounds, iso_week_key, period_bounds, utcnow

log = structlog.get_logger()


class CostLedger:
    """Read-only spend totals over the append-only cost_log.

    Totals are summed from cost_log on every call. Other processes (job
    execution, manual corrections) append to the log concurrently, so a
    cached counter would drift.
    """

    def __init__(self, pool: asyncpg.Pool, clock: Callable[[], datetime] = utcnow) -> None:
        self.pool = pool
        self._clock = clock

    async def current_window_cost(self) -> float:
        """Spend in the current ISO week (UTC)."""
        now = self._clock()
        start, end = iso_week_bounds(now)
        total = await sum_cost_between(self.pool, start, end)
        log.debug("window_cost_computed", week=iso_week_key(now), total=total)
        return total

    async def period_cost(self, period: str) -> float:
        start, end = period_bounds(period, self._clock())
        return await sum_cost_between(self.pool, start, end)

    async def budget_status(self, budget: float, period: str = "week") -> BudgetStatus:
        spent = await self.period_cost(period)
        return build_budget_status(spent, budget)


def budget_health(spent: float, budget: float) -> BudgetHealth:
    if budget <= 0:
        return BudgetHealth.UNLIMITED

    percentage = spent / budget * 100
    if percentage >= 100:
        return BudgetHealth.EXCEEDED
    if percentage >= BUDGET_CRITICAL_PERCENT:
        return BudgetHealth.CRITICAL
    if percentage >= BUDGET_WARNING_PERCENT:
        return BudgetHealth.WARNING
    return BudgetHealth.HEALTHY


def build_budget_status(spent: float, budget: float) -> BudgetStatus:
    return BudgetStatus(
        budget=budget,
        spent=spent,
        remaining=max(0.0, budget - spent),
        percentage=round(spent / budget * 100, 2) if budget > 0 else 0.0,
        status=budget_health(spent, budget),
    )
