"""
Chats feature: generative response adapter.

A single entry is answered as one combined prompt (preamble + message).
Longer histories use chat mode: earlier turns become message history and
only the latest user entry is sent as the new input. Chat mode also leads
with a system message holding the same preamble and grounding context, so
materials keep informing replies after the first turn.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from study_buddy.config import get_settings
from study_buddy.core.exceptions import GenerationError
from study_buddy.core.llm_provider import create_llm
from study_buddy.features.chats.prompts import FALLBACK_REPLY, build_system_prompt
from study_buddy.features.chats.schemas import ChatTurn

logger = logging.getLogger(__name__)

ResponseGenerator = Callable[[list[ChatTurn], str | None], Awaitable[str]]


def extract_text(content) -> str:
    """Flatten model output; Gemini may return a list of content parts."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
            elif isinstance(part, str):
                parts.append(part)
        return "".join(parts)
    return str(content)


def to_langchain_messages(turns: list[ChatTurn]) -> list[BaseMessage]:
    return [
        AIMessage(content=t.content) if t.role == "assistant" else HumanMessage(content=t.content)
        for t in turns
    ]


def build_model_input(messages: list[ChatTurn], context: str | None = None) -> str | list[BaseMessage]:
    """Shape the history into what the chat model is invoked with.

    Raises:
        GenerationError: If there is no user/assistant entry at all.
    """
    conversation = [m for m in messages if m.role != "system"]
    if not conversation:
        raise GenerationError("Failed to generate response: no messages to respond to")

    system_prompt = build_system_prompt(context)

    if len(conversation) == 1:
        return f"{system_prompt}\n\n{conversation[0].content}"

    history = to_langchain_messages(conversation[:-1])
    latest = HumanMessage(content=conversation[-1].content)
    return [SystemMessage(content=system_prompt), *history, latest]


async def generate_chat_response(messages: list[ChatTurn], context: str | None = None) -> str:
    """Generate the assistant reply for a conversation.

    Raises:
        GenerationError: Provider failure or timeout, with the upstream message.
    """
    model_input = build_model_input(messages, context)
    settings = get_settings()
    mode = "single-shot" if isinstance(model_input, str) else "multi-turn"
    logger.info(f"Generating {mode} response ({len(messages)} messages, context={bool(context)})")

    try:
        llm = create_llm()
        response = await asyncio.wait_for(
            llm.ainvoke(model_input),
            timeout=settings.GENERATION_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError as e:
        raise GenerationError(
            f"Failed to generate response: timed out after {settings.GENERATION_TIMEOUT_SECONDS}s"
        ) from e
    except Exception as e:
        logger.error(f"LLM error: {e}")
        raise GenerationError(f"Failed to generate response: {e}") from e

    text = extract_text(response.content).strip()
    return text or FALLBACK_REPLY


def get_response_generator() -> ResponseGenerator:
    """Dependency: the reply generator used by the turn pipeline."""
    return generate_chat_response
