"""
Chats feature: grounding context assembly.

Context is plain text built from two sources:
  1. The user's study materials (extracted text), in upload order.
  2. On attachment turns, the text of every attachment already sent in
     the same conversation, each tagged with its filename.
"""

import logging
from supabase import Client

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n"
ADDITIONAL_CONTEXT_SEPARATOR = "\n\n=== Additional Context ===\n\n"


def join_material_texts(texts: list[str | None]) -> str:
    """Join extracted texts with blank lines, skipping empty ones."""
    return CONTEXT_SEPARATOR.join(t for t in texts if t)


def format_attachment_context(attachments: list[dict]) -> str:
    """Render attachments as "[From <file_name>]\\n<text>" blocks."""
    return CONTEXT_SEPARATOR.join(
        f"[From {a['file_name']}]\n{a['extracted_text']}"
        for a in attachments
        if a.get("extracted_text")
    )


def combine_context(material_context: str, attachment_context: str = "") -> str:
    return ADDITIONAL_CONTEXT_SEPARATOR.join(
        part for part in (material_context, attachment_context) if part
    )


class ContextAssembler:
    """Reads grounding text for a conversation from the database."""

    def __init__(self, db: Client):
        self.db = db

    def material_context(self, user_id: str) -> str:
        # Upload order keeps the context deterministic
        result = (
            self.db.table("materials")
            .select("extracted_text")
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return join_material_texts([m.get("extracted_text") for m in result.data])

    def attachment_context(self, chat_id: str) -> str:
        result = (
            self.db.table("messages")
            .select("file_name, extracted_text")
            .eq("chat_id", chat_id)
            .eq("has_attachment", True)
            .order("created_at", desc=False)
            .execute()
        )
        return format_attachment_context(result.data)

    def build(self, user_id: str, chat_id: str, include_attachments: bool = False) -> str:
        """Context for one turn. Attachment history is only read on attachment turns."""
        materials = self.material_context(user_id)
        attachments = self.attachment_context(chat_id) if include_attachments else ""
        context = combine_context(materials, attachments)
        logger.info(
            f"Context for chat {chat_id}: {len(materials)} chars of materials, "
            f"{len(attachments)} chars of attachments"
        )
        return context
