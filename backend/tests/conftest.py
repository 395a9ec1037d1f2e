"""
Shared fixtures: an in-memory stand-in for the supabase client, a scripted
reply generator, and authenticated users.
"""

import itertools
import os
import uuid
from types import SimpleNamespace

# Settings are read on import of the app; configure before importing it.
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")
os.environ.setdefault("SUPABASE_KEY", "anon-test-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LLM_API_KEY", "test-llm-key")

import pytest
from fastapi.testclient import TestClient

from study_buddy.core.database import now_iso
from study_buddy.core.dependencies import get_db, get_storage
from study_buddy.core.security import create_access_token
from study_buddy.core.storage import ObjectStorage
from study_buddy.features.chats.generation import get_response_generator
from study_buddy.main import app


# ── In-memory supabase ───────────────────────────────────

# parent table -> [(child table, foreign key, action)]
FOREIGN_KEYS = {
    "chats": [("messages", "chat_id", "cascade")],
    "courses": [("schedules", "course_id", "set null")],
}


class FakeQuery:
    """Enough of the postgrest query builder for the services under test."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.action = "select"
        self.columns = "*"
        self.count = None
        self.payload = None
        self.filters = []
        self.orders = []
        self.row_limit = None

    def select(self, columns: str = "*", count: str | None = None):
        self.action, self.columns, self.count = "select", columns, count
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def update(self, payload: dict):
        self.action, self.payload = "update", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row[column] >= value)
        return self

    def lte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row[column] <= value)
        return self

    def order(self, column, desc: bool = False):
        self.orders.append((column, desc))
        return self

    def limit(self, n: int):
        self.row_limit = n
        return self

    def execute(self):
        rows = self.db.tables.setdefault(self.table, [])

        if self.action == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in payload:
                row = {"id": str(uuid.uuid4()), **item}
                rows.append(row)
                self.db.touch(row)
                inserted.append(dict(row))
            return SimpleNamespace(data=inserted, count=None)

        matched = [row for row in rows if all(f(row) for f in self.filters)]

        if self.action == "update":
            for row in matched:
                row.update(self.payload)
                self.db.touch(row)
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)

        if self.action == "delete":
            for row in matched:
                rows.remove(row)
                self.db.apply_foreign_keys(self.table, row["id"])
            return SimpleNamespace(data=[dict(r) for r in matched], count=None)

        for column, desc in reversed(self.orders):
            present = [r for r in matched if r.get(column) is not None]
            missing = [r for r in matched if r.get(column) is None]
            present.sort(
                key=lambda r: (r[column], self.db.sequence[r["id"]]), reverse=desc
            )
            matched = present + missing
        if self.row_limit is not None:
            matched = matched[: self.row_limit]

        data = [self._project(row) for row in matched]
        return SimpleNamespace(data=data, count=len(matched) if self.count else None)

    def _project(self, row: dict) -> dict:
        if self.columns.strip() == "*":
            return dict(row)
        return {c.strip(): row.get(c.strip()) for c in self.columns.split(",")}


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path: str, file: bytes, file_options: dict | None = None):
        if self.storage.fail_uploads:
            raise RuntimeError("bucket not found")
        key = (self.name, path)
        if key in self.storage.objects:
            raise RuntimeError("The resource already exists")
        self.storage.objects[key] = {"data": file, "options": file_options or {}}
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        return f"https://project.supabase.test/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths: list[str]):
        if self.storage.fail_removals:
            raise RuntimeError("remove failed")
        for path in paths:
            self.storage.objects.pop((self.name, path), None)
        return []


class FakeStorage:
    def __init__(self):
        self.objects = {}
        self.fail_uploads = False
        self.fail_removals = False

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)


class FakeSupabase:
    """In-memory tables keyed by name; rows are plain dicts."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.storage = FakeStorage()
        self.sequence: dict[str, int] = {}
        self._counter = itertools.count()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def touch(self, row: dict) -> None:
        # Breaks timestamp ties in write order
        self.sequence[row["id"]] = next(self._counter)

    def apply_foreign_keys(self, table: str, record_id: str) -> None:
        for child, column, action in FOREIGN_KEYS.get(table, []):
            rows = self.tables.setdefault(child, [])
            if action == "cascade":
                self.tables[child] = [r for r in rows if r.get(column) != record_id]
            else:
                for row in rows:
                    if row.get(column) == record_id:
                        row[column] = None

    def rows(self, table: str) -> list[dict]:
        return self.tables.get(table, [])

    def add_user(self, name: str, role: str = "STUDENT", email: str | None = None) -> dict:
        timestamp = now_iso()
        return self.table("users").insert({
            "email": email or f"{name.lower().replace(' ', '.')}@school.test",
            "password_hash": "not-a-real-hash",
            "name": name,
            "role": role,
            "created_at": timestamp,
            "updated_at": timestamp,
        }).execute().data[0]


# ── Scripted generator ───────────────────────────────────

class ScriptedGenerator:
    """Async stand-in for generate_chat_response that records its calls."""

    def __init__(self, reply: str = "A binary search tree keeps smaller keys on the left."):
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[dict] = []

    async def __call__(self, messages, context=None):
        self.calls.append({"messages": list(messages), "context": context})
        if self.error is not None:
            raise self.error
        return self.reply


# ── Fixtures ─────────────────────────────────────────────

def auth_headers(user: dict) -> dict:
    token = create_access_token(user["id"], user["email"], user["role"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def generator() -> ScriptedGenerator:
    return ScriptedGenerator()


@pytest.fixture
def client(fake_db, generator):
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_storage] = lambda: ObjectStorage(fake_db, "study-materials")
    app.dependency_overrides[get_response_generator] = lambda: generator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def student(fake_db):
    user = fake_db.add_user("Alice Nguyen")
    return SimpleNamespace(user=user, id=user["id"], headers=auth_headers(user))


@pytest.fixture
def other_student(fake_db):
    user = fake_db.add_user("Bob Tran")
    return SimpleNamespace(user=user, id=user["id"], headers=auth_headers(user))


@pytest.fixture
def teacher(fake_db):
    user = fake_db.add_user("Dr. Carol Le", role="TEACHER", email="carol@school.test")
    return SimpleNamespace(user=user, id=user["id"], headers=auth_headers(user))


@pytest.fixture
def other_teacher(fake_db):
    user = fake_db.add_user("Dr. Minh Ho", role="TEACHER", email="minh@school.test")
    return SimpleNamespace(user=user, id=user["id"], headers=auth_headers(user))
