"""
Assignments feature: teacher and student API routes.
"""

from fastapi import APIRouter, Depends, status
from supabase import Client

from study_buddy.core.dependencies import Identity, get_db, require_student, require_teacher
from study_buddy.features.assignments.schemas import (
    AssignmentCreate,
    AssignmentGrade,
    AssignmentSubmit,
)
from study_buddy.features.assignments.service import AssignmentsService

teacher_router = APIRouter()
student_router = APIRouter()


# ── Teacher ──────────────────────────────────────────────
@teacher_router.get("/")
async def list_teacher_assignments(
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    """Assignments created by the current teacher, newest first."""
    return {"data": AssignmentsService(db).list_teacher_assignments(identity.user_id)}


@teacher_router.post("/", status_code=status.HTTP_201_CREATED)
async def create_assignment(
    data: AssignmentCreate,
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    return {"data": AssignmentsService(db).create_assignment(identity.user_id, data)}


@teacher_router.delete("/{assignment_id}")
async def delete_assignment(
    assignment_id: str,
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    AssignmentsService(db).delete_assignment(identity.user_id, assignment_id)
    return {"message": "Assignment deleted successfully"}


@teacher_router.post("/{assignment_id}/grade")
async def grade_assignment(
    assignment_id: str,
    data: AssignmentGrade,
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    return {"data": AssignmentsService(db).grade_assignment(identity.user_id, assignment_id, data)}


# ── Student ──────────────────────────────────────────────
@student_router.get("/")
async def list_student_assignments(
    identity: Identity = Depends(require_student),
    db: Client = Depends(get_db),
):
    return {"data": AssignmentsService(db).list_student_assignments(identity.user_id)}


@student_router.post("/{assignment_id}/submit")
async def submit_assignment(
    assignment_id: str,
    data: AssignmentSubmit,
    identity: Identity = Depends(require_student),
    db: Client = Depends(get_db),
):
    """Hand in work as text, a link, or both."""
    return {"data": AssignmentsService(db).submit_assignment(identity.user_id, assignment_id, data)}
