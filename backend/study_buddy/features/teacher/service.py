"""
Teacher feature: read-only views over student activity.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone

from supabase import Client

from study_buddy.core.dependencies import UserRole
from study_buddy.core.exceptions import NotFoundError
from study_buddy.core.ownership import is_uuid
from study_buddy.core.relations import USER_SUMMARY_COLUMNS

PROFILE_COLUMNS = "id, email, name, role, created_at, updated_at"
RECENT_WINDOW = timedelta(days=7)


class TeacherService:
    """Aggregates chats, materials and messages per student."""

    def __init__(self, db: Client):
        self.db = db

    def list_students(self) -> dict:
        """All students, newest first, with activity counts and last_active."""
        result = (
            self.db.table("users")
            .select(PROFILE_COLUMNS)
            .eq("role", UserRole.STUDENT.value)
            .order("created_at", desc=True)
            .execute()
        )
        students = result.data
        if not students:
            return {"students": [], "total_students": 0}

        student_ids = [s["id"] for s in students]
        chats = (
            self.db.table("chats")
            .select("id, user_id, updated_at")
            .in_("user_id", student_ids)
            .execute()
        ).data
        materials = (
            self.db.table("materials")
            .select("user_id")
            .in_("user_id", student_ids)
            .execute()
        ).data

        chat_owner = {c["id"]: c["user_id"] for c in chats}
        chat_counts = Counter(c["user_id"] for c in chats)
        material_counts = Counter(m["user_id"] for m in materials)
        message_counts = Counter(
            chat_owner[m["chat_id"]] for m in self._messages_of(list(chat_owner))
        )

        last_chat_activity: dict[str, str] = {}
        for chat in chats:
            current = last_chat_activity.get(chat["user_id"])
            if current is None or chat["updated_at"] > current:
                last_chat_activity[chat["user_id"]] = chat["updated_at"]

        for student in students:
            sid = student["id"]
            student["chat_count"] = chat_counts.get(sid, 0)
            student["material_count"] = material_counts.get(sid, 0)
            student["total_messages"] = message_counts.get(sid, 0)
            student["last_active"] = last_chat_activity.get(sid, student.get("updated_at"))

        return {"students": students, "total_students": len(students)}

    def get_student_details(self, student_id: str) -> dict:
        """
        Raises:
            NotFoundError: Unknown id, or the user is not a student.
        """
        if not is_uuid(student_id):
            raise NotFoundError("Student not found")
        result = (
            self.db.table("users")
            .select(PROFILE_COLUMNS)
            .eq("id", student_id)
            .eq("role", UserRole.STUDENT.value)
            .execute()
        )
        if not result.data:
            raise NotFoundError("Student not found")
        student = result.data[0]

        chats = (
            self.db.table("chats")
            .select("id, title, created_at, updated_at")
            .eq("user_id", student_id)
            .order("updated_at", desc=True)
            .execute()
        ).data
        messages = self._messages_of([c["id"] for c in chats])
        per_chat = Counter(m["chat_id"] for m in messages)
        for chat in chats:
            chat["message_count"] = per_chat.get(chat["id"], 0)

        materials = (
            self.db.table("materials")
            .select("id, file_name, file_type, file_size, created_at")
            .eq("user_id", student_id)
            .order("created_at", desc=True)
            .execute()
        ).data

        return {
            "student": student,
            "chats": chats,
            "materials": materials,
            "statistics": {
                "total_chats": len(chats),
                "total_materials": len(materials),
                "total_messages": len(messages),
            },
        }

    def get_stats(self) -> dict:
        """Platform-wide totals plus students who joined in the last 7 days."""
        since = (datetime.now(timezone.utc) - RECENT_WINDOW).isoformat()
        return {
            "total_students": self._count("users", role=UserRole.STUDENT.value),
            "total_chats": self._count("chats"),
            "total_materials": self._count("materials"),
            "total_messages": self._count("messages"),
            "recent_students": (
                self.db.table("users")
                .select("id", count="exact")
                .eq("role", UserRole.STUDENT.value)
                .gte("created_at", since)
                .execute()
                .count
                or 0
            ),
        }

    def list_teachers(self) -> list[dict]:
        """Teacher directory, by name."""
        result = (
            self.db.table("users")
            .select(USER_SUMMARY_COLUMNS)
            .eq("role", UserRole.TEACHER.value)
            .order("name", desc=False)
            .execute()
        )
        return result.data

    def _count(self, table: str, **filters) -> int:
        query = self.db.table(table).select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)
        return query.execute().count or 0

    def _messages_of(self, chat_ids: list[str]) -> list[dict]:
        if not chat_ids:
            return []
        return (
            self.db.table("messages")
            .select("chat_id")
            .in_("chat_id", chat_ids)
            .execute()
        ).data
