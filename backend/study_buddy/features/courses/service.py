"""
Courses feature: Service layer for a student's course list.
"""

from collections import Counter

from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.exceptions import InvalidInputError
from study_buddy.core.ownership import fetch_owned
from study_buddy.features.courses.schemas import CourseCreate, CourseUpdate


class CoursesService:
    """CRUD for courses; schedules may reference a course."""

    def __init__(self, db: Client):
        self.db = db

    def create_course(self, user_id: str, data: CourseCreate) -> dict:
        name = (data.name or "").strip()
        if not name:
            raise InvalidInputError("Course name is required")

        timestamp = now_iso()
        insert_data = data.model_dump(exclude={"name"})
        insert_data.update({
            "user_id": user_id,
            "name": name,
            "created_at": timestamp,
            "updated_at": timestamp,
        })
        result = self.db.table("courses").insert(insert_data).execute()
        return result.data[0]

    def list_courses(self, user_id: str) -> list[dict]:
        """Newest first, each with the number of schedules linked to it."""
        result = (
            self.db.table("courses")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        courses = result.data
        if not courses:
            return []

        linked = (
            self.db.table("schedules")
            .select("course_id")
            .in_("course_id", [c["id"] for c in courses])
            .execute()
        )
        counts = Counter(row["course_id"] for row in linked.data)
        for course in courses:
            course["schedule_count"] = counts.get(course["id"], 0)
        return courses

    def get_course(self, user_id: str, course_id: str) -> dict:
        """A course with its schedules, earliest date first."""
        course = fetch_owned(self.db, "courses", course_id, user_id, "Course")
        schedules = (
            self.db.table("schedules")
            .select("*")
            .eq("course_id", course_id)
            .order("date", desc=False)
            .execute()
        )
        course["schedules"] = schedules.data
        return course

    def update_course(self, user_id: str, course_id: str, data: CourseUpdate) -> dict:
        update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if "name" in update_data:
            update_data["name"] = update_data["name"].strip()
            if not update_data["name"]:
                raise InvalidInputError("Course name is required")

        fetch_owned(self.db, "courses", course_id, user_id, "Course")
        update_data["updated_at"] = now_iso()
        result = self.db.table("courses").update(update_data).eq("id", course_id).execute()
        return result.data[0]

    def delete_course(self, user_id: str, course_id: str) -> None:
        """Delete a course; linked schedules keep existing with course_id cleared."""
        fetch_owned(self.db, "courses", course_id, user_id, "Course")
        self.db.table("courses").delete().eq("id", course_id).execute()
