from typing import Any

import asyncpg
import structlog

from podmetrics.config.settings import Settings, get_settings
from podmetrics.db.queries.settings import get_setting_overrides, upsert_setting
from podmetrics.utils.errors import SettingsValidationError

log = structlog.get_logger()

# Runtime settings an operator may override without redeploying
RUNTIME_KEYS = ("weekly_budget", "monthly_budget", "refresh_throttle_ms")
BUDGET_KEYS = ("weekly_budget", "monthly_budget")


class SettingsProvider:
    """Environment defaults merged with operator overrides from app_settings."""

    def __init__(self, pool: asyncpg.Pool, settings: Settings | None = None) -> None:
        self.pool = pool
        self.settings = settings or get_settings()

    def defaults(self) -> dict[str, Any]:
        return {key: getattr(self.settings, key) for key in RUNTIME_KEYS}

    async def get_all(self) -> dict[str, Any]:
        values = self.defaults()
        overrides = await get_setting_overrides(self.pool)
        values.update({k: v for k, v in overrides.items() if k in RUNTIME_KEYS})
        return validate_settings(values)

    async def update(self, changes: dict[str, Any]) -> dict[str, Any]:
        unknown = sorted(set(changes) - set(RUNTIME_KEYS))
        if unknown:
            raise SettingsValidationError(
                "Unknown settings", errors={key: "Unknown setting" for key in unknown}
            )
        validated = validate_settings(dict(changes))
        for key, value in validated.items():
            await upsert_setting(self.pool, key, value)
        log.info("settings_updated", keys=sorted(validated))
        return await self.get_all()


def validate_settings(values: dict[str, Any]) -> dict[str, Any]:
    errors: dict[str, str] = {}

    for key in BUDGET_KEYS:
        if key not in values:
            continue
        try:
            values[key] = float(values[key])
        except (TypeError, ValueError):
            errors[key] = "Budget must be a number"
            continue
        if values[key] < 0:
            errors[key] = "Budget must be positive"

    if "refresh_throttle_ms" in values:
        try:
            values["refresh_throttle_ms"] = int(values["refresh_throttle_ms"])
        except (TypeError, ValueError):
            errors["refresh_throttle_ms"] = "Throttle must be an integer"
        else:
            if values["refresh_throttle_ms"] < 0:
                errors["refresh_throttle_ms"] = "Throttle must not be negative"

    if errors:
        raise SettingsValidationError("Invalid settings", errors=errors)
    return values
