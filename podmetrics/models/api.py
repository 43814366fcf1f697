from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    database: str
    redis: str
    last_background_refresh: datetime | None = None


class SettingsUpdate(BaseModel):
    weekly_budget: float | None = None
    monthly_budget: float | None = None
    refresh_throttle_ms: int | None = None
