"""Aggregate queries over the append-only cost_log table."""

from datetime import datetime

import asyncpg


async def sum_cost_between(pool: asyncpg.Pool, start: datetime, end: datetime) -> float:
    """Total cost_usd logged in the half-open range [start, end)."""
    total = await pool.fetchval(
        "SELECT COALESCE(SUM(cost_usd), 0) FROM cost_log "
        "WHERE logged_at >= $1 AND logged_at < $2",
        start,
        end,
    )
    return float(total or 0)
