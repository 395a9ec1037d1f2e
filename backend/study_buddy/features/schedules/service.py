"""
Schedules feature: Service layer for calendar entries.
"""

from datetime import date

from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.exceptions import InvalidInputError
from study_buddy.core.ownership import fetch_owned
from study_buddy.features.schedules.schemas import ScheduleCreate, ScheduleType, ScheduleUpdate


class SchedulesService:
    """CRUD for schedules, each returned with its course (or None)."""

    def __init__(self, db: Client):
        self.db = db

    def create_schedule(self, user_id: str, data: ScheduleCreate) -> dict:
        title = (data.title or "").strip()
        if not title:
            raise InvalidInputError("Schedule title is required")
        if data.date is None:
            raise InvalidInputError("Schedule date is required")
        if data.course_id:
            fetch_owned(self.db, "courses", data.course_id, user_id, "Course")

        timestamp = now_iso()
        insert_data = data.model_dump(mode="json")
        insert_data.update({
            "user_id": user_id,
            "title": title,
            "is_completed": False,
            "created_at": timestamp,
            "updated_at": timestamp,
        })
        result = self.db.table("schedules").insert(insert_data).execute()
        return self._with_courses(result.data)[0]

    def list_schedules(
        self,
        user_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
        course_id: str | None = None,
        schedule_type: ScheduleType | None = None,
    ) -> list[dict]:
        """Filtered schedules ordered by date, then start time."""
        query = self.db.table("schedules").select("*").eq("user_id", user_id)

        if start_date:
            query = query.gte("date", start_date.isoformat())
        if end_date:
            query = query.lte("date", end_date.isoformat())
        if course_id:
            query = query.eq("course_id", course_id)
        if schedule_type:
            query = query.eq("type", schedule_type.value)

        result = query.order("date", desc=False).order("start_time", desc=False).execute()
        return self._with_courses(result.data)

    def get_schedule(self, user_id: str, schedule_id: str) -> dict:
        schedule = fetch_owned(self.db, "schedules", schedule_id, user_id, "Schedule")
        return self._with_courses([schedule])[0]

    def update_schedule(self, user_id: str, schedule_id: str, data: ScheduleUpdate) -> dict:
        update_data = {
            k: v for k, v in data.model_dump(mode="json", exclude_unset=True).items()
            if v is not None
        }
        if "title" in update_data:
            update_data["title"] = update_data["title"].strip()
            if not update_data["title"]:
                raise InvalidInputError("Schedule title is required")

        fetch_owned(self.db, "schedules", schedule_id, user_id, "Schedule")
        if update_data.get("course_id"):
            fetch_owned(self.db, "courses", update_data["course_id"], user_id, "Course")

        update_data["updated_at"] = now_iso()
        return self._update(schedule_id, update_data)

    def delete_schedule(self, user_id: str, schedule_id: str) -> None:
        fetch_owned(self.db, "schedules", schedule_id, user_id, "Schedule")
        self.db.table("schedules").delete().eq("id", schedule_id).execute()

    def toggle_complete(self, user_id: str, schedule_id: str) -> dict:
        """Flip is_completed."""
        schedule = fetch_owned(self.db, "schedules", schedule_id, user_id, "Schedule")
        return self._update(schedule_id, {
            "is_completed": not schedule.get("is_completed", False),
            "updated_at": now_iso(),
        })

    def _update(self, schedule_id: str, update_data: dict) -> dict:
        result = self.db.table("schedules").update(update_data).eq("id", schedule_id).execute()
        return self._with_courses(result.data)[0]

    def _with_courses(self, schedules: list[dict]) -> list[dict]:
        course_ids = sorted({s["course_id"] for s in schedules if s.get("course_id")})
        courses = {}
        if course_ids:
            result = self.db.table("courses").select("*").in_("id", course_ids).execute()
            courses = {c["id"]: c for c in result.data}
        for schedule in schedules:
            schedule["course"] = courses.get(schedule.get("course_id"))
        return schedules
