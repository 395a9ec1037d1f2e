"""
Teacher feature: API routes for the teacher dashboard and teacher directory.
"""

from fastapi import APIRouter, Depends
from supabase import Client

from study_buddy.core.dependencies import Identity, get_db, get_current_identity, require_teacher
from study_buddy.features.teacher.service import TeacherService

router = APIRouter()
directory_router = APIRouter()


@router.get("/students")
async def list_students(
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    """All students with chat, material and message counts."""
    return {"data": TeacherService(db).list_students()}


@router.get("/students/{student_id}")
async def get_student(
    student_id: str,
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    return {"data": TeacherService(db).get_student_details(student_id)}


@router.get("/stats")
async def get_stats(
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    return {"data": TeacherService(db).get_stats()}


@directory_router.get("/")
async def list_teachers(
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """Teachers a student can address doubts and meetings to."""
    return {"data": TeacherService(db).list_teachers()}
