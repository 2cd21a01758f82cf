"""Tests for pagelens.session - chat state and the answer backend seam."""

from __future__ import annotations

import pytest

from pagelens.extractors.markdown import render_page_markdown
from pagelens.items import PageRecord
from pagelens.query import extract
from pagelens.session import AnswerBackend, ChatMessage, Session


class FakeBackend:
    name = "fake"

    def __init__(self, answer: str = "## Answer\n\nTide pools hold seawater.") -> None:
        self.answer = answer
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answer


class FailingBackend:
    name = "failing"

    def generate(self, prompt: str) -> str:
        raise ConnectionError("service unreachable")


@pytest.fixture
def session(article_html) -> Session:
    return Session(extract(article_html, url="https://coastal.example.com/posts/tide-pools"))


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

class TestChatMessage:
    def test_defaults(self):
        msg = ChatMessage("hello")
        assert msg.kind == "user"
        assert not msg.is_ai
        assert "T" in msg.timestamp

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            ChatMessage("hello", kind="shout")

    def test_backend_protocol(self):
        assert isinstance(FakeBackend(), AnswerBackend)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class TestSession:
    def test_status_extracted(self):
        record = PageRecord(title="T", readability_score=10, text_length=1234)
        assert Session(record).status_message() == (
            "Page content extracted successfully! (Content length: 1,234 chars)"
        )

    def test_status_loaded(self):
        assert Session(PageRecord(title="T")).status_message() == (
            "Page content loaded successfully! You can now ask questions about the page."
        )

    def test_build_prompt(self, session):
        prompt = session.build_prompt("What forms a tide pool?")
        record = session.record
        assert prompt.startswith("You are analyzing a web page.")
        assert "Title: How Tide Pools Work" in prompt
        assert f"URL: {record.url}" in prompt
        assert f"Content Length: {record.text_length:,} characters" in prompt
        assert "Number of Links: 4" in prompt
        assert "Number of Headings: 3" in prompt
        assert "Number of Images: 1" in prompt
        assert "Number of Paragraphs: 2" in prompt
        assert f"Main Content:\n{record.content}\n" in prompt
        assert "User Question: What forms a tide pool?" in prompt
        assert prompt.endswith(
            "ALWAYS format your response in Markdown format with proper headings, lists, and formatting.",
        )

    def test_ask_records_exchange(self, session):
        backend = FakeBackend()
        answer = session.ask("  What forms a tide pool?  ", backend)
        assert answer == backend.answer
        assert len(backend.prompts) == 1
        assert "User Question: What forms a tide pool?" in backend.prompts[0]
        kinds = [(m.kind, m.is_ai) for m in session.messages]
        assert kinds == [("user", False), ("ai", True)]
        assert session.messages[0].text == "What forms a tide pool?"

    def test_blank_question_ignored(self, session):
        backend = FakeBackend()
        assert session.ask("   ", backend) is None
        assert session.messages == []
        assert backend.prompts == []

    def test_backend_failure_recorded(self, session, caplog):
        with caplog.at_level("WARNING", logger="pagelens.session"):
            assert session.ask("Hello?", FailingBackend()) is None
        assert [m.kind for m in session.messages] == ["user", "error"]
        assert session.messages[-1].text == "Error: service unreachable"
        assert "service unreachable" in caplog.text

    def test_empty_answer_is_error(self, session):
        assert session.ask("Hello?", FakeBackend(answer="  ")) is None
        assert session.messages[-1].text == "Error: Invalid response from AI service"

    def test_messages_is_a_copy(self, session):
        session.add_message("Page content extracted successfully!", "success")
        session.messages.clear()
        assert len(session.messages) == 1

    def test_page_markdown(self, session):
        assert session.page_markdown() == render_page_markdown(session.record)

    def test_conversation_markdown(self, session):
        assert session.conversation_markdown() == ""
        session.ask("What forms a tide pool?", FakeBackend())
        md = session.conversation_markdown()
        assert md.startswith("# Chat Conversation: How Tide Pools Work")
        assert "### AI Assistant (" in md
        assert "Tide pools hold seawater." in md
