"""
Doubts feature: questions students ask teachers.

Any teacher may answer any doubt; the answering teacher is recorded.
"""

from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.exceptions import ForbiddenError
from study_buddy.core.ownership import fetch_record
from study_buddy.core.relations import attach_users
from study_buddy.features.doubts.schemas import DoubtAnswer, DoubtCreate, DoubtStatus

PEOPLE = {
    "student_id": "student",
    "teacher_id": "teacher",
    "preferred_teacher_id": "preferred_teacher",
}


class DoubtsService:
    def __init__(self, db: Client):
        self.db = db

    def create_doubt(self, student_id: str, data: DoubtCreate) -> dict:
        timestamp = now_iso()
        result = self.db.table("doubts").insert({
            "student_id": student_id,
            "subject": data.subject,
            "question": data.question,
            "preferred_teacher_id": data.preferred_teacher_id,
            "teacher_id": None,
            "answer": None,
            "status": DoubtStatus.OPEN.value,
            "created_at": timestamp,
            "updated_at": timestamp,
        }).execute()
        return attach_users(self.db, result.data, PEOPLE)[0]

    def list_all_doubts(self) -> list[dict]:
        """Every doubt, newest first (teacher view)."""
        result = self.db.table("doubts").select("*").order("created_at", desc=True).execute()
        return self._enrich(result.data)

    def list_student_doubts(self, student_id: str) -> list[dict]:
        result = (
            self.db.table("doubts")
            .select("*")
            .eq("student_id", student_id)
            .order("created_at", desc=True)
            .execute()
        )
        return self._enrich(result.data)

    def answer_doubt(self, teacher_id: str, doubt_id: str, data: DoubtAnswer) -> dict:
        fetch_record(self.db, "doubts", doubt_id, "Doubt")
        result = self.db.table("doubts").update({
            "teacher_id": teacher_id,
            "answer": data.answer,
            "status": DoubtStatus.ANSWERED.value,
            "updated_at": now_iso(),
        }).eq("id", doubt_id).execute()
        return attach_users(self.db, result.data, PEOPLE)[0]

    def close_doubt(self, user_id: str, doubt_id: str) -> dict:
        """Close a doubt. Allowed for its student or the teacher who answered it."""
        doubt = fetch_record(self.db, "doubts", doubt_id, "Doubt")
        if user_id not in (doubt.get("student_id"), doubt.get("teacher_id")):
            raise ForbiddenError("You can only close your own doubts")

        result = self.db.table("doubts").update({
            "status": DoubtStatus.CLOSED.value,
            "updated_at": now_iso(),
        }).eq("id", doubt_id).execute()
        return result.data[0]

    def _enrich(self, doubts: list[dict]) -> list[dict]:
        """Attach people and the linked meeting request (if any)."""
        attach_users(self.db, doubts, PEOPLE)
        if not doubts:
            return doubts

        meetings = (
            self.db.table("meeting_requests")
            .select("*")
            .in_("doubt_id", [d["id"] for d in doubts])
            .execute()
        )
        by_doubt = {m["doubt_id"]: m for m in meetings.data}
        for doubt in doubts:
            doubt["meeting_request"] = by_doubt.get(doubt["id"])
        return doubts
