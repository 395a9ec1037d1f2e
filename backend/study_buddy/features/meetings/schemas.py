"""
Meetings feature: Schemas for request models.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_DURATION_MINUTES = 30


class MeetingType(str, Enum):
    DOUBT_CLARIFICATION = "DOUBT_CLARIFICATION"
    EXAM = "EXAM"
    DISCUSSION = "DISCUSSION"


class MeetingStatus(str, Enum):
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MeetingCreate(BaseModel):
    """Student asks for a meeting, optionally about one of their doubts."""
    type: MeetingType
    subject: str = Field(min_length=1)
    description: str = Field(min_length=1)
    doubt_id: str | None = None
    preferred_teacher_id: str | None = None


class MeetingSchedule(BaseModel):
    scheduled_at: datetime
    duration: int | None = Field(default=None, gt=0)  # minutes
