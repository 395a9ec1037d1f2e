"""
Chats feature: assistant persona and prompt text.
"""

FALLBACK_REPLY = "Sorry, I could not generate a response."

BASE_PROMPT = (
    "You are a helpful study buddy assistant. Help students with their "
    "questions and provide clear explanations."
)

GROUNDED_PROMPT_TEMPLATE = (
    "You are a helpful study buddy assistant. Use the following context from "
    "uploaded materials to answer questions:\n\n{context}"
)


def build_system_prompt(context: str | None = None) -> str:
    """Instructional preamble, grounded in the context when there is any."""
    if context:
        return GROUNDED_PROMPT_TEMPLATE.format(context=context)
    return BASE_PROMPT
