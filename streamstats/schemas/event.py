from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class EventAction(str, Enum):
    WATCH = "WATCH"
    PAUSE = "PAUSE"
    STOP = "STOP"
    RESUME = "RESUME"
    SEEK = "SEEK"


class EventRecord(BaseModel):
    id: str = Field(..., min_length=1, description="Event ID")
    user_id: str = Field(..., min_length=1)
    video_id: str = Field(..., min_length=1)
    action: EventAction
    duration: int = Field(default=0, ge=0, description="Duration in seconds")
    quality: Optional[str] = None
    device_type: Optional[str] = None
    timestamp: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
