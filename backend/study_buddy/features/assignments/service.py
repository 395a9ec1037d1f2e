"""
Assignments feature: teacher-to-student work items.

Lifecycle: PENDING -> SUBMITTED (student) -> GRADED (teacher).
"""

import logging

from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.dependencies import UserRole
from study_buddy.core.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from study_buddy.core.ownership import fetch_record, is_uuid
from study_buddy.core.relations import attach_users
from study_buddy.features.assignments.schemas import (
    AssignmentCreate,
    AssignmentGrade,
    AssignmentStatus,
    AssignmentSubmit,
)

logger = logging.getLogger(__name__)


class AssignmentsService:
    """Create, grade and submit assignments."""

    def __init__(self, db: Client):
        self.db = db

    def create_assignment(self, teacher_id: str, data: AssignmentCreate) -> dict:
        """Assign work to a student.

        Raises:
            NotFoundError: If student_id is not a student account.
        """
        if not is_uuid(data.student_id):
            raise NotFoundError("Student not found")
        student = (
            self.db.table("users")
            .select("id, role")
            .eq("id", data.student_id)
            .execute()
        )
        if not student.data or student.data[0]["role"] != UserRole.STUDENT.value:
            raise NotFoundError("Student not found")

        timestamp = now_iso()
        insert_data = data.model_dump(mode="json")
        insert_data.update({
            "teacher_id": teacher_id,
            "status": AssignmentStatus.PENDING.value,
            "created_at": timestamp,
            "updated_at": timestamp,
        })
        result = self.db.table("assignments").insert(insert_data).execute()
        assignment = result.data[0]
        logger.info(f"Assignment {assignment['id']} created for student {data.student_id}")
        return attach_users(self.db, [assignment], {"student_id": "student"})[0]

    def list_teacher_assignments(self, teacher_id: str) -> list[dict]:
        result = (
            self.db.table("assignments")
            .select("*")
            .eq("teacher_id", teacher_id)
            .order("created_at", desc=True)
            .execute()
        )
        return attach_users(self.db, result.data, {"student_id": "student"})

    def list_student_assignments(self, student_id: str) -> list[dict]:
        """A student's assignments, nearest due date first."""
        result = (
            self.db.table("assignments")
            .select("*")
            .eq("student_id", student_id)
            .order("due_date", desc=False)
            .execute()
        )
        return attach_users(self.db, result.data, {"teacher_id": "teacher"})

    def grade_assignment(self, teacher_id: str, assignment_id: str, data: AssignmentGrade) -> dict:
        assignment = fetch_record(self.db, "assignments", assignment_id, "Assignment")
        if assignment["teacher_id"] != teacher_id:
            raise ForbiddenError("You can only grade your own assignments")

        result = self.db.table("assignments").update({
            "marks_obtained": data.marks_obtained,
            "feedback": data.feedback,
            "status": AssignmentStatus.GRADED.value,
            "updated_at": now_iso(),
        }).eq("id", assignment_id).execute()
        return attach_users(self.db, result.data, {"student_id": "student"})[0]

    def delete_assignment(self, teacher_id: str, assignment_id: str) -> None:
        assignment = fetch_record(self.db, "assignments", assignment_id, "Assignment")
        if assignment["teacher_id"] != teacher_id:
            raise ForbiddenError("You can only delete your own assignments")
        self.db.table("assignments").delete().eq("id", assignment_id).execute()

    def submit_assignment(self, student_id: str, assignment_id: str, data: AssignmentSubmit) -> dict:
        if not data.submission_text and not data.submission_url:
            raise InvalidInputError("Either submission_text or submission_url is required")

        assignment = fetch_record(self.db, "assignments", assignment_id, "Assignment")
        if assignment["student_id"] != student_id:
            raise ForbiddenError("This assignment is not assigned to you")

        result = self.db.table("assignments").update({
            "submission_text": data.submission_text,
            "submission_url": data.submission_url,
            "status": AssignmentStatus.SUBMITTED.value,
            "updated_at": now_iso(),
        }).eq("id", assignment_id).execute()
        return result.data[0]
