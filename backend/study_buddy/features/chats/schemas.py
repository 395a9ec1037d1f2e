"""
Chats feature: request models and the internal turn types.
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel

from study_buddy.core.uploads import UploadedFile


# ── HTTP bodies ──────────────────────────────────────────
class ChatCreate(BaseModel):
    title: str | None = None


class ChatRename(BaseModel):
    title: str | None = None  # validated by the service (blank -> 400)


# ── Internal ─────────────────────────────────────────────
@dataclass(frozen=True)
class ChatTurn:
    """One (role, content) entry of a conversation history."""
    role: Literal["user", "assistant", "system"]
    content: str


@dataclass(frozen=True)
class PlainTurnRequest:
    content: str


@dataclass(frozen=True)
class AttachedTurnRequest:
    content: str
    file: UploadedFile


TurnRequest = PlainTurnRequest | AttachedTurnRequest
