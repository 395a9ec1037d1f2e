"""
Unit tests for the generative response adapter (LLM replaced by a fake).
"""

import asyncio
from types import SimpleNamespace

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from study_buddy.core.exceptions import GenerationError
from study_buddy.features.chats import generation
from study_buddy.features.chats.generation import (
    build_model_input,
    extract_text,
    generate_chat_response,
)
from study_buddy.features.chats.prompts import BASE_PROMPT, FALLBACK_REPLY
from study_buddy.features.chats.schemas import ChatTurn


class FakeLLM:
    def __init__(self, content="Here is an answer.", error=None, delay=0.0):
        self.content = content
        self.error = error
        self.delay = delay
        self.inputs = []

    async def ainvoke(self, model_input):
        self.inputs.append(model_input)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return SimpleNamespace(content=self.content)


@pytest.fixture
def fake_llm(monkeypatch):
    llm = FakeLLM()
    monkeypatch.setattr(generation, "create_llm", lambda: llm)
    return llm


class TestBuildModelInput:
    def test_single_entry_is_one_combined_prompt(self):
        model_input = build_model_input([ChatTurn("user", "What is a stack?")])
        assert model_input == f"{BASE_PROMPT}\n\nWhat is a stack?"

    def test_single_entry_includes_context(self):
        model_input = build_model_input([ChatTurn("user", "Summarize")], context="Chapter 1 text")
        assert isinstance(model_input, str)
        assert "Chapter 1 text" in model_input
        assert model_input.endswith("\n\nSummarize")

    def test_system_entries_are_dropped_before_counting(self):
        turns = [ChatTurn("system", "ignore me"), ChatTurn("user", "Hi")]
        assert build_model_input(turns) == f"{BASE_PROMPT}\n\nHi"

    def test_multi_turn_history(self):
        turns = [
            ChatTurn("user", "What is a BST?"),
            ChatTurn("assistant", "A binary search tree."),
            ChatTurn("user", "How do I insert?"),
        ]
        model_input = build_model_input(turns, context="Notes")

        assert [type(m) for m in model_input] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert "Notes" in model_input[0].content
        assert model_input[1].content == "What is a BST?"
        assert model_input[2].content == "A binary search tree."
        assert model_input[-1].content == "How do I insert?"

    def test_nothing_to_answer(self):
        with pytest.raises(GenerationError):
            build_model_input([ChatTurn("system", "only system")])


class TestExtractText:
    def test_string(self):
        assert extract_text("hello") == "hello"

    def test_content_parts(self):
        parts = [{"type": "text", "text": "Hello "}, {"type": "image_url"}, "world"]
        assert extract_text(parts) == "Hello world"


class TestGenerateChatResponse:
    def test_returns_model_text(self, fake_llm):
        reply = asyncio.run(generate_chat_response([ChatTurn("user", "Hi")]))
        assert reply == "Here is an answer."
        assert fake_llm.inputs == [f"{BASE_PROMPT}\n\nHi"]

    def test_empty_output_uses_fallback(self, fake_llm):
        fake_llm.content = "   "
        reply = asyncio.run(generate_chat_response([ChatTurn("user", "Hi")]))
        assert reply == FALLBACK_REPLY

    def test_provider_error_is_wrapped(self, fake_llm):
        fake_llm.error = RuntimeError("quota exceeded")
        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(generate_chat_response([ChatTurn("user", "Hi")]))
        assert exc_info.value.message == "Failed to generate response: quota exceeded"
        assert exc_info.value.status_code == 502

    def test_timeout_is_a_generation_error(self, fake_llm, monkeypatch):
        fake_llm.delay = 1.0
        monkeypatch.setattr(
            generation, "get_settings", lambda: SimpleNamespace(GENERATION_TIMEOUT_SECONDS=0.01)
        )
        with pytest.raises(GenerationError) as exc_info:
            asyncio.run(generate_chat_response([ChatTurn("user", "Hi")]))
        assert "timed out" in exc_info.value.message
