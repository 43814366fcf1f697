from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class JobType(StrEnum):
    BACKGROUND_REFRESH = "background_refresh"
    MANUAL_REFRESH = "manual_refresh"


class JobStatus(StrEnum):
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class RefreshJob(BaseModel):
    id: UUID
    podcast_id: int
    job_type: JobType
    platforms: list[str]
    priority: int = Field(ge=0, le=100)
    status: JobStatus = JobStatus.QUEUED
    estimated_cost_usd: float = 0.0
    created_at: datetime | None = None


class ManualRefreshInput(BaseModel):
    platforms: list[str] = Field(default_factory=list)


class ManualRefreshResponse(BaseModel):
    job_id: UUID
    podcast_id: int
    status: str
