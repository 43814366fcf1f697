from datetime import datetime

from pydantic import BaseModel, model_validator


class Metric(BaseModel):
    """Result of one successful metrics fetch for a (podcast, platform) pair."""

    podcast_id: int
    platform: str
    fetched_at: datetime
    expires_at: datetime
    cost: float = 0.0
    followers_count: int | None = None

    @model_validator(mode="after")
    def check_expiry_after_fetch(self) -> "Metric":
        if self.expires_at <= self.fetched_at:
            raise ValueError("expires_at must be later than fetched_at")
        return self

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now
