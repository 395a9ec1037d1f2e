"""
Doubts feature: Schemas for request models.
"""

from enum import Enum

from pydantic import BaseModel, Field


class DoubtStatus(str, Enum):
    OPEN = "OPEN"
    ANSWERED = "ANSWERED"
    CLOSED = "CLOSED"


class DoubtCreate(BaseModel):
    subject: str = Field(min_length=1)
    question: str = Field(min_length=1)
    preferred_teacher_id: str | None = None


class DoubtAnswer(BaseModel):
    answer: str = Field(min_length=1)
