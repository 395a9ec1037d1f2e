"""
API tests for study material upload, listing and deletion.
"""

BASE = "/api/materials"


def upload(client, user, name="chapter1.txt", data=b"Linked lists", content_type="text/plain"):
    return client.post(f"{BASE}/", files={"file": (name, data, content_type)}, headers=user.headers)


class TestUploadMaterial:
    def test_text_upload_stores_extracted_text(self, client, student, fake_db):
        response = upload(client, student)

        assert response.status_code == 201
        material = response.json()["data"]
        assert material["file_name"] == "chapter1.txt"
        assert material["file_size"] == len(b"Linked lists")
        assert "extracted_text" not in material

        [row] = fake_db.rows("materials")
        assert row["extracted_text"] == "Linked lists"
        assert row["storage_path"].startswith(f"materials/{student.id}/")
        assert row["storage_path"].endswith("-chapter1.txt")
        assert ("study-materials", row["storage_path"]) in fake_db.storage.objects

    def test_unsafe_filename_is_sanitized_in_path(self, client, student, fake_db):
        upload(client, student, name="Week 1 (notes).txt")
        [row] = fake_db.rows("materials")
        assert row["file_name"] == "Week 1 (notes).txt"
        assert row["storage_path"].endswith("-Week_1__notes_.txt")

    def test_png_is_rejected(self, client, student, fake_db):
        response = upload(client, student, name="x.png", data=b"\x89PNG", content_type="image/png")
        assert response.status_code == 415
        assert fake_db.rows("materials") == []

    def test_storage_failure_records_nothing(self, client, student, fake_db):
        fake_db.storage.fail_uploads = True
        response = upload(client, student)
        assert response.status_code == 502
        assert fake_db.rows("materials") == []


class TestListMaterials:
    def test_newest_first_without_text(self, client, student, other_student):
        upload(client, student, name="first.txt")
        upload(client, student, name="second.txt")
        upload(client, other_student, name="theirs.txt")

        materials = client.get(f"{BASE}/", headers=student.headers).json()["data"]

        assert [m["file_name"] for m in materials] == ["second.txt", "first.txt"]
        assert all("extracted_text" not in m for m in materials)


class TestDeleteMaterial:
    def test_delete_removes_object_and_row(self, client, student, fake_db):
        material = upload(client, student).json()["data"]

        response = client.delete(f"{BASE}/{material['id']}", headers=student.headers)

        assert response.json() == {"message": "Material deleted successfully"}
        assert fake_db.rows("materials") == []
        assert fake_db.storage.objects == {}

    def test_storage_removal_failure_is_tolerated(self, client, student, fake_db):
        material = upload(client, student).json()["data"]
        fake_db.storage.fail_removals = True

        response = client.delete(f"{BASE}/{material['id']}", headers=student.headers)

        assert response.status_code == 200
        assert fake_db.rows("materials") == []

    def test_not_found_then_forbidden(self, client, student, other_student):
        material = upload(client, student).json()["data"]
        assert client.delete(f"{BASE}/missing", headers=student.headers).status_code == 404
        assert client.delete(f"{BASE}/{material['id']}", headers=other_student.headers).status_code == 403
