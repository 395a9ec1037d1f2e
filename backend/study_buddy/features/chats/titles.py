"""
Chats feature: conversation title heuristics.
"""

import re

PLACEHOLDER_TITLE = "Untitled Chat"

# Titles that count as "never named"; auto-titling replaces them
DEFAULT_CHAT_TITLES = frozenset({PLACEHOLDER_TITLE, "New Chat"})

MAX_TITLE_LENGTH = 50
_TRUNCATED_LENGTH = 47
_SENTENCE_END = re.compile(r"[.!?]")


def is_default_title(title: str | None) -> bool:
    return title in DEFAULT_CHAT_TITLES


def derive_chat_title(message: str) -> str:
    """Build a title from the first sentence of a user message.

    >>> derive_chat_title("Can you explain recursion? It's confusing.")
    'Can you explain recursion'
    """
    clean = " ".join(message.split())
    first_sentence = _SENTENCE_END.split(clean, maxsplit=1)[0].strip()

    if len(first_sentence) > MAX_TITLE_LENGTH:
        first_sentence = first_sentence[:_TRUNCATED_LENGTH] + "..."

    return first_sentence or PLACEHOLDER_TITLE


def should_retitle(title: str | None, prior_turn_count: int) -> bool:
    """A conversation is retitled while it has a default title or no turns yet."""
    return is_default_title(title) or prior_turn_count == 0
