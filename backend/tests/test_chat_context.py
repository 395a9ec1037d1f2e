"""
Unit tests for grounding context assembly.
"""

from study_buddy.features.chats.context import (
    ContextAssembler,
    combine_context,
    format_attachment_context,
    join_material_texts,
)


def add_material(db, user_id, text, created_at, name="notes.txt"):
    db.table("materials").insert({
        "user_id": user_id,
        "file_name": name,
        "extracted_text": text,
        "created_at": created_at,
    }).execute()


def add_message(db, chat_id, created_at, file_name=None, text=None):
    db.table("messages").insert({
        "chat_id": chat_id,
        "role": "user",
        "content": "see attached",
        "has_attachment": file_name is not None,
        "file_name": file_name,
        "extracted_text": text,
        "created_at": created_at,
    }).execute()


class TestFormatting:
    def test_join_material_texts_skips_empty(self):
        assert join_material_texts(["A", None, "", "B"]) == "A\n\nB"

    def test_join_material_texts_nothing(self):
        assert join_material_texts([]) == ""

    def test_format_attachment_context(self):
        attachments = [
            {"file_name": "week1.pdf", "extracted_text": "Trees"},
            {"file_name": "slides.docx", "extracted_text": None},
            {"file_name": "week2.txt", "extracted_text": "Graphs"},
        ]
        assert format_attachment_context(attachments) == "[From week1.pdf]\nTrees\n\n[From week2.txt]\nGraphs"

    def test_combine_both_groups(self):
        assert combine_context("A", "[From x]\ny") == "A\n\n=== Additional Context ===\n\n[From x]\ny"

    def test_combine_drops_empty_groups(self):
        assert combine_context("A", "") == "A"
        assert combine_context("", "[From x]\ny") == "[From x]\ny"
        assert combine_context("", "") == ""


class TestContextAssembler:
    def test_two_materials_in_upload_order(self, fake_db):
        add_material(fake_db, "u1", "A", "2026-01-01T10:00:00+00:00")
        add_material(fake_db, "u1", "B", "2026-01-02T10:00:00+00:00")

        assert ContextAssembler(fake_db).build("u1", "chat-1") == "A\n\nB"

    def test_only_own_materials_with_text(self, fake_db):
        add_material(fake_db, "u1", "Mine", "2026-01-01T10:00:00+00:00")
        add_material(fake_db, "u1", None, "2026-01-02T10:00:00+00:00", name="scan.docx")
        add_material(fake_db, "u2", "Theirs", "2026-01-03T10:00:00+00:00")

        assert ContextAssembler(fake_db).build("u1", "chat-1") == "Mine"

    def test_attachments_ignored_on_plain_turns(self, fake_db):
        add_material(fake_db, "u1", "A", "2026-01-01T10:00:00+00:00")
        add_message(fake_db, "chat-1", "2026-01-05T10:00:00+00:00", "lab.txt", "Lab notes")

        assert ContextAssembler(fake_db).build("u1", "chat-1") == "A"

    def test_attachment_history_on_attachment_turns(self, fake_db):
        add_material(fake_db, "u1", "A", "2026-01-01T10:00:00+00:00")
        add_message(fake_db, "chat-1", "2026-01-05T10:00:00+00:00", "lab.txt", "Lab notes")
        add_message(fake_db, "chat-1", "2026-01-06T10:00:00+00:00")
        add_message(fake_db, "chat-1", "2026-01-07T10:00:00+00:00", "form.docx", None)
        add_message(fake_db, "chat-2", "2026-01-08T10:00:00+00:00", "other.txt", "Other chat")

        context = ContextAssembler(fake_db).build("u1", "chat-1", include_attachments=True)

        assert context == "A\n\n=== Additional Context ===\n\n[From lab.txt]\nLab notes"

    def test_no_materials_no_context(self, fake_db):
        assert ContextAssembler(fake_db).build("u1", "chat-1", include_attachments=True) == ""
