from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, ConfigDict

from streamstats.schemas.video import CategoryBreakdown, utc_now


class VideoStatsRecord(BaseModel):
    video_id: str = Field(..., min_length=1)
    total_views: int = Field(..., ge=0)
    avg_duration: float = Field(..., ge=0)
    unique_viewers: int = Field(..., ge=0)
    last_updated: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(from_attributes=True)


class StatsReport(BaseModel):
    created: int = Field(..., ge=0, description="Rows written to video_stats")
    top_n: int = Field(default=5, ge=1)
    top_videos: List[VideoStatsRecord] = Field(default_factory=list)
    categories: List[CategoryBreakdown] = Field(default_factory=list)
