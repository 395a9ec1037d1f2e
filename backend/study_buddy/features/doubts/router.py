"""
Doubts feature: student and teacher API routes.
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
from study_buddy.features.doubts.schemas import DoubtAnswer, DoubtCreate
from study_buddy.features.doubts.service import DoubtsService

student_router = APIRouter()
teacher_router = APIRouter()


# ── Student ──────────────────────────────────────────────
@student_router.get("/")
async def list_student_doubts(
    identity: Identity = Depends(require_student),
    db: Client = Depends(get_db),
):
    return {"data": DoubtsService(db).list_student_doubts(identity.user_id)}


@student_router.post("/", status_code=status.HTTP_201_CREATED)
async def create_doubt(
    data: DoubtCreate,
    identity: Identity = Depends(require_student),
    db: Client = Depends(get_db),
):
    """Ask a question, optionally addressed to a preferred teacher."""
    return {"data": DoubtsService(db).create_doubt(identity.user_id, data)}


@student_router.post("/{doubt_id}/close")
async def close_doubt(
    doubt_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """Close a doubt (its student, or the teacher who answered it)."""
    return {"data": DoubtsService(db).close_doubt(identity.user_id, doubt_id)}


# ── Teacher ──────────────────────────────────────────────
@teacher_router.get("/")
async def list_all_doubts(
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    return {"data": DoubtsService(db).list_all_doubts()}


@teacher_router.post("/{doubt_id}/answer")
async def answer_doubt(
    doubt_id: str,
    data: DoubtAnswer,
    identity: Identity = Depends(require_teacher),
    db: Client = Depends(get_db),
):
    return {"data": DoubtsService(db).answer_doubt(identity.user_id, doubt_id, data)}
