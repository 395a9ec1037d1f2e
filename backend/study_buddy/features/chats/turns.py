"""
Chats feature: the turn pipeline.

One user turn in, one assistant turn out:
    validate -> resolve chat -> (upload + extract) -> store user turn
    -> assemble context -> generate -> store assistant turn -> retitle

Nothing is rolled back. If generation fails, the user turn stays stored
without a reply.
"""

import logging

from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.exceptions import InvalidInputError
from study_buddy.core.extraction import extract_file_text
from study_buddy.core.ownership import fetch_owned
from study_buddy.core.storage import ObjectStorage
from study_buddy.core.uploads import UploadedFile, object_name, validate_upload
from study_buddy.features.chats.context import ContextAssembler
from study_buddy.features.chats.generation import ResponseGenerator
from study_buddy.features.chats.schemas import AttachedTurnRequest, ChatTurn, TurnRequest
from study_buddy.features.chats.titles import derive_chat_title, should_retitle

logger = logging.getLogger(__name__)


def attachment_path(user_id: str, chat_id: str, filename: str) -> str:
    return f"chat-attachments/{user_id}/{chat_id}/{object_name(filename)}"


class TurnService:
    """Appends a user turn to a conversation and produces the assistant reply."""

    def __init__(self, db: Client, storage: ObjectStorage, generate: ResponseGenerator):
        self.db = db
        self.storage = storage
        self.generate = generate
        self.context = ContextAssembler(db)

    async def send_turn(self, user_id: str, chat_id: str, request: TurnRequest) -> dict:
        """Run the full pipeline for one request.

        Returns:
            {"user_turn": <row>, "assistant_turn": <row>}

        Raises:
            InvalidInputError: Empty content.
            NotFoundError / ForbiddenError: Missing or foreign chat.
            InvalidFileTypeError / FileTooLargeError: Rejected attachment.
            StorageError / ExtractionError: Attachment could not be stored or read.
            GenerationError: The model call failed (user turn already stored).
        """
        if not isinstance(request.content, str) or request.content == "":
            raise InvalidInputError("Message content is required")

        chat = fetch_owned(self.db, "chats", chat_id, user_id, "Chat")
        prior_turns = self._load_turns(chat_id)

        attachment = request.file if isinstance(request, AttachedTurnRequest) else None
        attachment_columns = self._store_attachment(user_id, chat_id, attachment)

        user_turn = self._insert_turn(chat_id, "user", request.content, attachment_columns)
        logger.info(
            f"Stored user turn {user_turn['id']} in chat {chat_id} "
            f"(attachment={attachment is not None})"
        )

        context = self.context.build(user_id, chat_id, include_attachments=attachment is not None)

        history = [ChatTurn(role=t["role"], content=t["content"]) for t in prior_turns]
        history.append(ChatTurn(role="user", content=request.content))
        reply = await self.generate(history, context or None)

        assistant_turn = self._insert_turn(chat_id, "assistant", reply)
        logger.info(f"Stored assistant turn {assistant_turn['id']} in chat {chat_id}")

        self._maintain_title(chat, request.content, len(prior_turns))

        return {"user_turn": user_turn, "assistant_turn": assistant_turn}

    # ── Internal ─────────────────────────────────────────

    def _load_turns(self, chat_id: str) -> list[dict]:
        result = (
            self.db.table("messages")
            .select("role, content")
            .eq("chat_id", chat_id)
            .order("created_at", desc=False)
            .execute()
        )
        return result.data

    def _store_attachment(self, user_id: str, chat_id: str, file: UploadedFile | None) -> dict:
        """Validate, upload and extract an attachment into message columns."""
        if file is None:
            return {
                "has_attachment": False,
                "file_name": None,
                "file_url": None,
                "file_type": None,
                "file_size": None,
                "extracted_text": None,
            }

        validate_upload(file)
        file_url = self.storage.upload(
            attachment_path(user_id, chat_id, file.filename), file.data, file.content_type
        )
        extracted_text = extract_file_text(file.data, file.content_type)
        return {
            "has_attachment": True,
            "file_name": file.filename,
            "file_url": file_url,
            "file_type": file.content_type,
            "file_size": file.size,
            "extracted_text": extracted_text,
        }

    def _insert_turn(self, chat_id: str, role: str, content: str, columns: dict | None = None) -> dict:
        row = {
            "chat_id": chat_id,
            "role": role,
            "content": content,
            "has_attachment": False,
            "created_at": now_iso(),
        }
        row.update(columns or {})
        result = self.db.table("messages").insert(row).execute()
        return result.data[0]

    def _maintain_title(self, chat: dict, user_content: str, prior_turn_count: int) -> None:
        update = {"updated_at": now_iso()}
        if should_retitle(chat.get("title"), prior_turn_count):
            update["title"] = derive_chat_title(user_content)
            logger.info(f"Chat {chat['id']} retitled to {update['title']!r}")
        self.db.table("chats").update(update).eq("id", chat["id"]).execute()
