"""
Chats feature: Service layer for conversation management.
"""

from collections import Counter

from supabase import Client

from study_buddy.core.database import now_iso
from study_buddy.core.exceptions import InvalidInputError
from study_buddy.core.ownership import fetch_owned
from study_buddy.features.chats.titles import PLACEHOLDER_TITLE


class ChatService:
    """CRUD for a user's conversations. Turns are handled by TurnService."""

    def __init__(self, db: Client):
        self.db = db

    def get_owned_chat(self, user_id: str, chat_id: str) -> dict:
        return fetch_owned(self.db, "chats", chat_id, user_id, "Chat")

    def create_chat(self, user_id: str, title: str | None = None) -> dict:
        """Create an empty conversation; a blank title becomes the placeholder."""
        clean_title = (title or "").strip() or PLACEHOLDER_TITLE
        timestamp = now_iso()
        result = self.db.table("chats").insert({
            "user_id": user_id,
            "title": clean_title,
            "created_at": timestamp,
            "updated_at": timestamp,
        }).execute()
        return result.data[0]

    def list_chats(self, user_id: str) -> list[dict]:
        """Conversations ordered by last activity, each with its message_count."""
        result = (
            self.db.table("chats")
            .select("*")
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
            .execute()
        )
        chats = result.data
        if not chats:
            return []

        counts = self._message_counts([c["id"] for c in chats])
        for chat in chats:
            chat["message_count"] = counts.get(chat["id"], 0)
        return chats

    def get_chat(self, user_id: str, chat_id: str) -> dict:
        """A conversation with its messages in chronological order."""
        chat = self.get_owned_chat(user_id, chat_id)
        chat["messages"] = self.list_messages(chat_id)
        return chat

    def list_messages(self, chat_id: str) -> list[dict]:
        result = (
            self.db.table("messages")
            .select("*")
            .eq("chat_id", chat_id)
            .order("created_at", desc=False)
            .execute()
        )
        return result.data

    def rename_chat(self, user_id: str, chat_id: str, title: str | None) -> dict:
        clean_title = (title or "").strip()
        if not clean_title:
            raise InvalidInputError("Chat title is required")

        self.get_owned_chat(user_id, chat_id)
        result = (
            self.db.table("chats")
            .update({"title": clean_title, "updated_at": now_iso()})
            .eq("id", chat_id)
            .execute()
        )
        return result.data[0]

    def delete_chat(self, user_id: str, chat_id: str) -> None:
        """Delete a conversation; its messages go with it (FK cascade)."""
        self.get_owned_chat(user_id, chat_id)
        self.db.table("chats").delete().eq("id", chat_id).execute()

    def _message_counts(self, chat_ids: list[str]) -> Counter:
        result = (
            self.db.table("messages")
            .select("chat_id")
            .in_("chat_id", chat_ids)
            .execute()
        )
        return Counter(row["chat_id"] for row in result.data)
