"""
Schedules feature: API routes for the study calendar.
"""

from datetime import date

from fastapi import APIRouter, Depends, status
from supabase import Client

from study_buddy.core.dependencies import Identity, get_db, get_current_identity
from study_buddy.features.schedules.schemas import ScheduleCreate, ScheduleType, ScheduleUpdate
from study_buddy.features.schedules.service import SchedulesService

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_schedule(
    data: ScheduleCreate,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    return {"data": SchedulesService(db).create_schedule(identity.user_id, data)}


@router.get("/")
async def list_schedules(
    start_date: date | None = None,
    end_date: date | None = None,
    course_id: str | None = None,
    type: ScheduleType | None = None,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """List schedules, optionally filtered by date range, course and type."""
    schedules = SchedulesService(db).list_schedules(
        identity.user_id, start_date, end_date, course_id, type
    )
    return {"data": schedules}


@router.get("/{schedule_id}")
async def get_schedule(
    schedule_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    return {"data": SchedulesService(db).get_schedule(identity.user_id, schedule_id)}


@router.put("/{schedule_id}")
async def update_schedule(
    schedule_id: str,
    data: ScheduleUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    return {"data": SchedulesService(db).update_schedule(identity.user_id, schedule_id, data)}


@router.delete("/{schedule_id}")
async def delete_schedule(
    schedule_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    SchedulesService(db).delete_schedule(identity.user_id, schedule_id)
    return {"message": "Schedule deleted successfully"}


@router.patch("/{schedule_id}/toggle")
async def toggle_schedule(
    schedule_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """Mark a schedule done, or not done again."""
    return {"data": SchedulesService(db).toggle_complete(identity.user_id, schedule_id)}
