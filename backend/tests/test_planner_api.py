"""
API tests for courses and schedules.
"""


def create_course(client, user, **fields):
    body = {"name": "Data Structures", "code": "CS201", **fields}
    response = client.post("/api/courses/", json=body, headers=user.headers)
    assert response.status_code == 201
    return response.json()["data"]


def create_schedule(client, user, **fields):
    body = {"title": "Lecture", "date": "2026-03-02", **fields}
    return client.post("/api/schedules/", json=body, headers=user.headers)


class TestCourses:
    def test_name_is_required(self, client, student):
        response = client.post("/api/courses/", json={"name": "  "}, headers=student.headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Course name is required"

    def test_list_counts_schedules(self, client, student):
        course = create_course(client, student)
        create_schedule(client, student, course_id=course["id"])
        create_schedule(client, student, course_id=course["id"], date="2026-03-04")
        create_schedule(client, student, title="Unlinked")

        [listed] = client.get("/api/courses/", headers=student.headers).json()["data"]
        assert listed["schedule_count"] == 2

    def test_get_includes_schedules_by_date(self, client, student):
        course = create_course(client, student)
        create_schedule(client, student, course_id=course["id"], title="Later", date="2026-04-01")
        create_schedule(client, student, course_id=course["id"], title="Sooner", date="2026-03-01")

        fetched = client.get(f"/api/courses/{course['id']}", headers=student.headers).json()["data"]
        assert [s["title"] for s in fetched["schedules"]] == ["Sooner", "Later"]

    def test_update(self, client, student):
        course = create_course(client, student)
        response = client.put(
            f"/api/courses/{course['id']}", json={"instructor": "Dr. Le"}, headers=student.headers
        )
        data = response.json()["data"]
        assert data["instructor"] == "Dr. Le"
        assert data["name"] == "Data Structures"

    def test_delete_unlinks_schedules(self, client, student, fake_db):
        course = create_course(client, student)
        create_schedule(client, student, course_id=course["id"])

        response = client.delete(f"/api/courses/{course['id']}", headers=student.headers)

        assert response.json() == {"message": "Course deleted successfully"}
        assert fake_db.rows("schedules")[0]["course_id"] is None

    def test_foreign_course(self, client, student, other_student):
        course = create_course(client, student)
        assert client.get(f"/api/courses/{course['id']}", headers=other_student.headers).status_code == 403


class TestSchedules:
    def test_defaults(self, client, student):
        response = create_schedule(client, student)
        assert response.status_code == 201
        schedule = response.json()["data"]
        assert schedule["type"] == "OTHER"
        assert schedule["priority"] == "MEDIUM"
        assert schedule["is_completed"] is False
        assert schedule["course"] is None

    def test_title_and_date_required(self, client, student):
        no_title = client.post("/api/schedules/", json={"date": "2026-03-02"}, headers=student.headers)
        no_date = client.post("/api/schedules/", json={"title": "Quiz"}, headers=student.headers)
        assert no_title.json()["error"] == "Schedule title is required"
        assert no_date.json()["error"] == "Schedule date is required"

    def test_course_must_be_owned(self, client, student, other_student):
        course = create_course(client, other_student)
        assert create_schedule(client, student, course_id=course["id"]).status_code == 403
        assert create_schedule(client, student, course_id="missing").status_code == 404

    def test_list_filters_and_order(self, client, student):
        course = create_course(client, student)
        create_schedule(client, student, title="Exam", type="EXAM", date="2026-03-10", course_id=course["id"])
        create_schedule(client, student, title="Late class", type="CLASS", date="2026-03-05", start_time="14:00")
        create_schedule(client, student, title="Early class", type="CLASS", date="2026-03-05", start_time="08:00")
        create_schedule(client, student, title="Old", date="2026-01-01")

        everything = client.get("/api/schedules/", headers=student.headers).json()["data"]
        assert [s["title"] for s in everything] == ["Old", "Early class", "Late class", "Exam"]

        march = client.get(
            "/api/schedules/",
            params={"start_date": "2026-03-01", "end_date": "2026-03-31", "type": "CLASS"},
            headers=student.headers,
        ).json()["data"]
        assert [s["title"] for s in march] == ["Early class", "Late class"]

        by_course = client.get(
            "/api/schedules/", params={"course_id": course["id"]}, headers=student.headers
        ).json()["data"]
        assert [s["title"] for s in by_course] == ["Exam"]
        assert by_course[0]["course"]["name"] == "Data Structures"

    def test_toggle_twice_restores_state(self, client, student):
        schedule = create_schedule(client, student).json()["data"]
        url = f"/api/schedules/{schedule['id']}/toggle"

        assert client.patch(url, headers=student.headers).json()["data"]["is_completed"] is True
        assert client.patch(url, headers=student.headers).json()["data"]["is_completed"] is False

    def test_update_and_delete(self, client, student):
        schedule = create_schedule(client, student).json()["data"]
        updated = client.put(
            f"/api/schedules/{schedule['id']}", json={"priority": "HIGH"}, headers=student.headers
        ).json()["data"]
        assert updated["priority"] == "HIGH"

        response = client.delete(f"/api/schedules/{schedule['id']}", headers=student.headers)
        assert response.json() == {"message": "Schedule deleted successfully"}
        assert client.get(f"/api/schedules/{schedule['id']}", headers=student.headers).status_code == 404
