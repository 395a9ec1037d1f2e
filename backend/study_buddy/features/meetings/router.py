"""
Meetings feature: student and teacher API routes.
"""

from fastapi import APIRouter, Depends, status
from supabase import Client

from study_buddy.core.dependencies import (
    Identity,
    get_db,
    get_current_identity,
    require_student,
    require_teacher,
)
from study_buddy.features.meetings.schemas import MeetingCreate, MeetingSchedule
from study_buddy.features.meetings.service import MeetingsService

student_router = APIRouter()
teacher_router = APIRouter()


# ── Student ──────────────────────────────────────────────
@student_router.get("/")
async def list_student_meetings(
    identity: Identity = Depends(require_student),
    db: Client = Depends(get_db),
):
    return {"data": MeetingsService(db).list_student_requests(identity.user_id)}


@student_router.post("/", status_code=status.HTTP_201_CREATED)
async def request_meeting(
    data: MeetingCreate,
    identity: Identity = Depends(require_student),
    db: Client = Depends(get_db),
):
    """Ask for a meeting with a teacher."""
    return {"data": MeetingsService(db).create_request(identity.user_id, data)}


@student_router.post("/{meeting_id}/cancel")
async def cancel_meeting(
    meeting_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    return {"data": MeetingsService(db).cancel_meeting(identity.user_id, meeting_id)}


# ── Teacher ──────────────────────────────────────────────
@teacher_router.get("/")
async def list_all_meetings(
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    return {"data": MeetingsService(db).list_all_requests()}


@teacher_router.post("/{meeting_id}/schedule")
async def schedule_meeting(
    meeting_id: str,
    data: MeetingSchedule,
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    """Accept a request and generate a meeting link (default 30 minutes)."""
    return {"data": MeetingsService(db).schedule_meeting(identity.user_id, meeting_id, data)}


@teacher_router.post("/{meeting_id}/complete")
async def complete_meeting(
    meeting_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    return {"data": MeetingsService(db).complete_meeting(identity.user_id, meeting_id)}
