"""
Chats feature: API routes for conversations and turns.
"""

from fastapi import APIRouter, Depends, Request, status
from starlette.datastructures import UploadFile as StarletteUploadFile
from supabase import Client

from study_buddy.core.dependencies import Identity, get_db, get_current_identity, get_storage
from study_buddy.core.exceptions import InvalidInputError
from study_buddy.core.storage import ObjectStorage
from study_buddy.core.uploads import read_upload
from study_buddy.features.chats.generation import ResponseGenerator, get_response_generator
from study_buddy.features.chats.schemas import (
    AttachedTurnRequest,
    ChatCreate,
    ChatRename,
    PlainTurnRequest,
    TurnRequest,
)
from study_buddy.features.chats.service import ChatService
from study_buddy.features.chats.turns import TurnService

router = APIRouter()


async def parse_turn_request(request: Request) -> TurnRequest:
    """Resolve a JSON or multipart body into one of the two turn request shapes."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        content = form.get("content")
        content = content if isinstance(content, str) else ""
        file = form.get("file")
        if not isinstance(file, StarletteUploadFile):
            raise InvalidInputError("File is required")
        return AttachedTurnRequest(content=content, file=await read_upload(file))

    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidInputError("Invalid request body") from e
    if not isinstance(body, dict):
        raise InvalidInputError("Invalid request body")
    return PlainTurnRequest(content=body.get("content"))


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_chat(
    data: ChatCreate | None = None,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """Start a new conversation."""
    chat = ChatService(db).create_chat(identity.user_id, data.title if data else None)
    return {"data": chat}


@router.get("/")
async def list_chats(
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """List the user's conversations, most recently active first."""
    return {"data": ChatService(db).list_chats(identity.user_id)}


@router.get("/{chat_id}")
async def get_chat(
    chat_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    """A conversation with all of its turns."""
    return {"data": ChatService(db).get_chat(identity.user_id, chat_id)}


@router.patch("/{chat_id}")
async def rename_chat(
    chat_id: str,
    data: ChatRename,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    chat = ChatService(db).rename_chat(identity.user_id, chat_id, data.title)
    return {"data": chat}


@router.delete("/{chat_id}")
async def delete_chat(
    chat_id: str,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
):
    ChatService(db).delete_chat(identity.user_id, chat_id)
    return {"message": "Chat deleted successfully"}


@router.post("/{chat_id}/turns", status_code=status.HTTP_201_CREATED)
async def send_turn(
    chat_id: str,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    db: Client = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    generate: ResponseGenerator = Depends(get_response_generator),
):
    """
    Send a message and receive the assistant's reply.
    - JSON body `{content}` for a plain turn.
    - Multipart `{content, file}` to attach a PDF, TXT or DOCX file.
    """
    turn_request = await parse_turn_request(request)
    service = TurnService(db, storage, generate)
    result = await service.send_turn(identity.user_id, chat_id, turn_request)
    return {"data": result}
