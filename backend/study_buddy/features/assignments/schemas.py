"""
Assignments feature: Schemas for request models.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class AssignmentType(str, Enum):
    TASK = "TASK"
    EXAM = "EXAM"
    QUIZ = "QUIZ"
    PROJECT = "PROJECT"


class AssignmentStatus(str, Enum):
    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    GRADED = "GRADED"


class AssignmentCreate(BaseModel):
    """Teacher assigns work to one student."""
    student_id: str
    title: str = Field(min_length=1)
    description: str
    type: AssignmentType
    due_date: datetime
    total_marks: int | None = Field(default=None, ge=0)


class AssignmentGrade(BaseModel):
    marks_obtained: float = Field(ge=0)
    feedback: str | None = None


class AssignmentSubmit(BaseModel):
    """At least one of the two fields is required (checked by the service)."""
    submission_text: str | None = None
    submission_url: str | None = None
