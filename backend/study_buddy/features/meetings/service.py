"""
Meetings feature: meeting requests between students and teachers.

Lifecycle: PENDING -> SCHEDULED (teacher) -> COMPLETED, or CANCELLED.
"""

import logging
import secrets

from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.exceptions import ForbiddenError, InvalidInputError
from study_buddy.core.ownership import fetch_record, is_uuid
from study_buddy.core.relations import attach_users
from study_buddy.features.meetings.schemas import (
    DEFAULT_DURATION_MINUTES,
    MeetingCreate,
    MeetingSchedule,
    MeetingStatus,
)

logger = logging.getLogger(__name__)

MEET_BASE_URL = "https://meet.google.com/"

PEOPLE = {
    "student_id": "student",
    "teacher_id": "teacher",
    "preferred_teacher_id": "preferred_teacher",
}


def generate_meet_link() -> str:
    # Placeholder room name; no calendar integration
    return MEET_BASE_URL + secrets.token_hex(6)


class MeetingsService:
    """Request, schedule, complete and cancel meetings."""

    def __init__(self, db: Client):
        self.db = db

    def create_request(self, student_id: str, data: MeetingCreate) -> dict:
        """
        Raises:
            InvalidInputError: doubt_id is unknown or belongs to another student.
        """
        if data.doubt_id:
            if not is_uuid(data.doubt_id):
                raise InvalidInputError("Invalid doubt ID")
            doubt = self.db.table("doubts").select("id, student_id").eq("id", data.doubt_id).execute()
            if not doubt.data or doubt.data[0]["student_id"] != student_id:
                raise InvalidInputError("Invalid doubt ID")

        timestamp = now_iso()
        insert_data = data.model_dump(mode="json")
        insert_data.update({
            "student_id": student_id,
            "teacher_id": None,
            "status": MeetingStatus.PENDING.value,
            "scheduled_at": None,
            "duration": DEFAULT_DURATION_MINUTES,
            "meet_link": None,
            "created_at": timestamp,
            "updated_at": timestamp,
        })
        result = self.db.table("meeting_requests").insert(insert_data).execute()
        return self._enrich(result.data)[0]

    def list_all_requests(self) -> list[dict]:
        result = (
            self.db.table("meeting_requests")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return self._enrich(result.data)

    def list_student_requests(self, student_id: str) -> list[dict]:
        result = (
            self.db.table("meeting_requests")
            .select("*")
            .eq("student_id", student_id)
            .order("created_at", desc=True)
            .execute()
        )
        return self._enrich(result.data)

    def schedule_meeting(self, teacher_id: str, meeting_id: str, data: MeetingSchedule) -> dict:
        """Accept a request: assign the teacher, set the time and a meet link."""
        fetch_record(self.db, "meeting_requests", meeting_id, "Meeting request")
        result = self.db.table("meeting_requests").update({
            "teacher_id": teacher_id,
            "status": MeetingStatus.SCHEDULED.value,
            "scheduled_at": data.scheduled_at.isoformat(),
            "duration": data.duration or DEFAULT_DURATION_MINUTES,
            "meet_link": generate_meet_link(),
            "updated_at": now_iso(),
        }).eq("id", meeting_id).execute()
        logger.info(f"Meeting {meeting_id} scheduled by teacher {teacher_id}")
        return self._enrich(result.data)[0]

    def complete_meeting(self, user_id: str, meeting_id: str) -> dict:
        return self._set_status(user_id, meeting_id, MeetingStatus.COMPLETED)

    def cancel_meeting(self, user_id: str, meeting_id: str) -> dict:
        return self._set_status(user_id, meeting_id, MeetingStatus.CANCELLED)

    def _set_status(self, user_id: str, meeting_id: str, new_status: MeetingStatus) -> dict:
        """Only the requesting student or the assigned teacher may change status."""
        meeting = fetch_record(self.db, "meeting_requests", meeting_id, "Meeting request")
        if user_id not in (meeting.get("student_id"), meeting.get("teacher_id")):
            raise ForbiddenError()

        result = self.db.table("meeting_requests").update({
            "status": new_status.value,
            "updated_at": now_iso(),
        }).eq("id", meeting_id).execute()
        return result.data[0]

    def _enrich(self, meetings: list[dict]) -> list[dict]:
        attach_users(self.db, meetings, PEOPLE)
        doubt_ids = sorted({m["doubt_id"] for m in meetings if m.get("doubt_id")})
        doubts = {}
        if doubt_ids:
            result = self.db.table("doubts").select("*").in_("id", doubt_ids).execute()
            doubts = {d["id"]: d for d in result.data}
        for meeting in meetings:
            meeting["doubt"] = doubts.get(meeting.get("doubt_id"))
        return meetings
