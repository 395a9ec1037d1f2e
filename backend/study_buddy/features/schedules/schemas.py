"""
Schedules feature: Schemas for request models.
"""

import datetime as dt
from enum import Enum

from pydantic import BaseModel


class ScheduleType(str, Enum):
    CLASS = "CLASS"
    ASSIGNMENT = "ASSIGNMENT"
    EXAM = "EXAM"
    TASK = "TASK"
    OTHER = "OTHER"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ScheduleCreate(BaseModel):
    """Request to create a calendar entry."""
    title: str | None = None  # required, checked by the service
    date: dt.date | None = None  # required, checked by the service
    description: str | None = None
    type: ScheduleType = ScheduleType.OTHER
    start_time: str | None = None  # "HH:MM"
    end_time: str | None = None
    location: str | None = None
    course_id: str | None = None
    priority: Priority = Priority.MEDIUM


class ScheduleUpdate(BaseModel):
    """Partial update; unset fields are left unchanged."""
    title: str | None = None
    date: dt.date | None = None
    description: str | None = None
    type: ScheduleType | None = None
    start_time: str | None = None
    end_time: str | None = None
    location: str | None = None
    course_id: str | None = None
    is_completed: bool | None = None
    priority: Priority | None = None
