"""
Courses feature: API routes.
"""

from fastapi import APIRouter, Depends, status
from supabase import Client

from study_buddy.core.dependencies import Identity, get_db, get_current_identity
from study_buddy.features.courses.schemas import CourseCreate, CourseUpdate
from study_buddy.features.courses.service import CoursesService

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_course(
    data: CourseCreate,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    return {"data": CoursesService(db).create_course(identity.user_id, data)}


@router.get("/")
async def list_courses(
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """List courses with their schedule counts."""
    return {"data": CoursesService(db).list_courses(identity.user_id)}


@router.get("/{course_id}")
async def get_course(
    course_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    return {"data": CoursesService(db).get_course(identity.user_id, course_id)}


@router.put("/{course_id}")
async def update_course(
    course_id: str,
    data: CourseUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    return {"data": CoursesService(db).update_course(identity.user_id, course_id, data)}


@router.delete("/{course_id}")
async def delete_course(
    course_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    CoursesService(db).delete_course(identity.user_id, course_id)
    return {"message": "Course deleted successfully"}
