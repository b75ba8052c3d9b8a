from datetime import datetime, timezone

from pydantic import BaseModel, Field, ConfigDict


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VideoRecord(BaseModel):
    video_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    duration: int = Field(default=0, ge=0, description="Duration in seconds")
    upload_date: datetime = Field(default_factory=utc_now)
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)

    model_config = ConfigDict(from_attributes=True)


class CategoryBreakdown(BaseModel):
    category: str
    count: int = Field(..., ge=0)
    total_views: int = Field(..., ge=0)
