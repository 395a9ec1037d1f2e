"""
Courses feature: Schemas for request models.
"""

from pydantic import BaseModel, Field


class CourseCreate(BaseModel):
    """Request to create a course. Only the name is required."""
    name: str | None = None  # blank -> 400 "Course name is required"
    code: str | None = None
    instructor: str | None = None
    color: str | None = None
    credits: int | None = Field(default=None, ge=0)
    semester: str | None = None
    description: str | None = None


class CourseUpdate(BaseModel):
    """Partial update; unset fields are left unchanged."""
    name: str | None = None
    code: str | None = None
    instructor: str | None = None
    color: str | None = None
    credits: int | None = Field(default=None, ge=0)
    semester: str | None = None
    description: str | None = None
