from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class TrackingStatus(StrEnum):
    UNTRACKED = "untracked"
    TRACKED = "tracked"
    QUEUED = "queued"
    PAUSED = "paused"


class Podcast(BaseModel):
    id: int
    title: str | None = None
    is_tracked: bool = False
    tracking_status: TrackingStatus = TrackingStatus.UNTRACKED
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SocialLink(BaseModel):
    podcast_id: int
    platform: str
    url: str | None = None
    created_at: datetime | None = None
