"""Budget window arithmetic.

The budgeting week is the ISO week in UTC: it starts Monday 00:00:00 UTC
(inclusive) and ends the following Monday 00:00:00 UTC (exclusive). Every
window is a half-open ``[start, end)`` range so a timestamp belongs to
exactly one window, including across year boundaries where ISO week 1 or
week 52/53 straddles two calendar years.
"""

from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    return datetime.now(UTC)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def iso_week_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Return the [start, end) range of the ISO week containing ``moment``."""
    moment = _as_utc(moment)
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    start = midnight - timedelta(days=moment.isoweekday() - 1)
    return start, start + timedelta(weeks=1)


def iso_week_key(moment: datetime) -> str:
    """ISO year-week label, e.g. ``2026-W53``."""
    year, week, _ = _as_utc(moment).isocalendar()
    return f"{year}-W{week:02d}"


def period_bounds(period: str, moment: datetime) -> tuple[datetime, datetime]:
    """[start, end) range for ``day``, ``week``, ``month`` or ``year``."""
    moment = _as_utc(moment)
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)

    if period == "day":
        return midnight, midnight + timedelta(days=1)
    if period == "week":
        return iso_week_bounds(moment)
    if period == "month":
        start = midnight.replace(day=1)
        if start.month == 12:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
        return start, end
    if period == "year":
        start = midnight.replace(month=1, day=1)
        return start, start.replace(year=start.year + 1)

    raise ValueError(f"Unknown budget period: {period}")
