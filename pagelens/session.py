"""pagelens.session - conversation state for asking questions about one page.

A :class:`Session` owns the extracted :class:`~pagelens.items.PageRecord`
and the chat history about it.  Hosts create one per page instead of
keeping the current page and conversation in globals.

Answer generation is a collaborator: anything with a ``generate(prompt)``
method satisfies :class:`AnswerBackend`.  Usage::

    from pagelens import fetch
    from pagelens.session import Session

    class Echo:
        name = "echo"
        def generate(self, prompt: str) -> str:
            return "You asked: " + prompt.splitlines()[-3]

    session = Session(fetch("https://example.com/blog/post"))
    session.ask("What is this page about?", Echo())
    print(session.conversation_markdown())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from pagelens.extractors.markdown import render_conversation_markdown, render_page_markdown
from pagelens.items import PageRecord

logger = logging.getLogger(__name__)

MESSAGE_KINDS: frozenset[str] = frozenset({"user", "ai", "success", "error"})

_PROMPT_TEMPLATE = """\
You are analyzing a web page. Here's the page information:

Title: {title}
URL: {url}
Content Length: {length:,} characters
Number of Links: {links}
Number of Headings: {headings}
Number of Images: {images}
Number of Paragraphs: {paragraphs}

IMPORTANT: Focus on analyzing the actual text content and answering the user's \
question. Do not focus on metadata like character counts, link counts, or page \
statistics unless specifically asked. Instead, use the main content to provide \
meaningful answers.

Main Content:
{content}

User Question: {question}

ALWAYS format your response in Markdown format with proper headings, lists, and formatting."""


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class ChatMessage:
    """One entry in a session's history."""

    text: str
    kind: str = "user"
    is_ai: bool = False
    timestamp: str = field(default_factory=_now_iso)

    def __post_init__(self) -> None:
        if self.kind not in MESSAGE_KINDS:
            raise ValueError(f"Unknown message kind {self.kind!r}")


@runtime_checkable
class AnswerBackend(Protocol):
    """Remote text generation, invoked with a fully rendered prompt."""

    name: str

    def generate(self, prompt: str) -> str:
        """Return the generated answer (Markdown)."""
        ...


class Session:
    """Page record plus the ordered conversation about it."""

    def __init__(self, record: PageRecord) -> None:
        self._record = record
        self._messages: list[ChatMessage] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def record(self) -> PageRecord:
        return self._record

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def add_message(self, text: str, kind: str = "user", is_ai: bool = False) -> ChatMessage:
        message = ChatMessage(text=text, kind=kind, is_ai=is_ai)
        self._messages.append(message)
        return message

    def status_message(self) -> str:
        """Message shown once the page has been read."""
        if self._record.readability_score > 0:
            return (
                "Page content extracted successfully! "
                f"(Content length: {self._record.text_length:,} chars)"
            )
        return "Page content loaded successfully! You can now ask questions about the page."

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def build_prompt(self, question: str) -> str:
        record = self._record
        stats = record.stats
        return _PROMPT_TEMPLATE.format(
            title=record.title,
            url=record.url,
            length=record.text_length,
            links=stats["links"],
            headings=stats["headings"],
            images=stats["images"],
            paragraphs=stats["paragraphs"],
            content=record.content,
            question=question,
        )

    def ask(self, question: str, backend: AnswerBackend) -> str | None:
        """Ask *backend* about the page and record both sides of the exchange.

        Returns the answer, or None when the question is blank or the
        backend failed.  Backend failures are recorded as ``error`` messages
        rather than raised.
        """
        question = question.strip()
        if not question:
            return None

        self.add_message(question, "user")
        try:
            answer = backend.generate(self.build_prompt(question))
            if not answer or not answer.strip():
                raise ValueError("Invalid response from AI service")
        except Exception as exc:
            logger.warning("Answer backend %s failed: %s", getattr(backend, "name", "?"), exc)
            self.add_message(f"Error: {exc}", "error")
            return None

        self.add_message(answer, "ai", is_ai=True)
        return answer

    # ------------------------------------------------------------------
    # Exports
    # ------------------------------------------------------------------

    def page_markdown(self) -> str:
        return render_page_markdown(self._record)

    def conversation_markdown(self) -> str:
        return render_conversation_markdown(self._record, self._messages, _now_iso())
