"""Render a :class:`~pagelens.items.PageRecord` (and a chat about it) as Markdown."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pagelens.items import PageRecord
    from pagelens.session import ChatMessage

logger = logging.getLogger(__name__)

_NON_FILENAME_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE | re.ASCII)


def _stats_lines(record: PageRecord) -> list[str]:
    stats = record.stats
    return [
        f"- **Links:** {stats['links']}",
        f"- **Headings:** {stats['headings']}",
        f"- **Images:** {stats['images']}",
        f"- **Paragraphs:** {stats['paragraphs']}",
    ]


def render_page_markdown(record: PageRecord, scraped_at: str | None = None) -> str:
    """Render the full page export.

    Section order is fixed: title, optional article metadata, URL block,
    statistics, meta tags, heading outline, images, links, key paragraphs,
    full content.  *scraped_at* defaults to the record's own timestamp.
    """
    lines: list[str] = [f"# {record.title}", ""]

    if record.readability_score > 0:
        lines.append(f"**Readability Score:** {record.readability_score}")
    if record.site_name:
        lines.append(f"**Site:** {record.site_name}")
    if record.byline:
        lines.append(f"**By:** {record.byline}")
    if record.excerpt:
        lines.append(f"**Excerpt:** {record.excerpt}")

    lines.extend([
        "",
        f"**URL:** [{record.url}]({record.url})",
        f"**Content Length:** {record.text_length:,} characters",
        f"**Scraped:** {scraped_at or record.timestamp}",
        "",
        "## Page Statistics",
        *_stats_lines(record),
        "",
        "## Meta Information",
        "\n".join(f"- **{tag.key}:** {tag.content}" for tag in record.meta_tags),
        "",
        "## Headings Structure",
        "\n".join(f"{'#' * h.level} {h.text}" for h in record.headings),
        "",
        "## Images",
        "\n".join(
            f"- **{img.alt or 'No alt text'}** ({img.title or 'No title'}) - {img.width}x{img.height}"
            for img in record.images
        ),
        "",
        "## Links",
        "\n".join(
            f"- [{link.text}]({link.href}) - {link.title or 'No title'}" for link in record.links
        ),
        "",
        "## Key Paragraphs",
        "\n\n".join(f"> {p}" for p in record.paragraphs),
        "",
        "## Full Content",
        record.content,
    ])
    return "\n".join(lines)


def _clock_time(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%H:%M:%S")
    except ValueError:
        logger.debug("Unparseable message timestamp %r", timestamp)
        return timestamp


def _role(message: ChatMessage) -> str:
    if message.is_ai:
        return "AI Assistant"
    if message.kind in ("success", "error"):
        return "System"
    return "User"


def render_conversation_markdown(
    record: PageRecord,
    messages: Sequence[ChatMessage],
    conversation_date: str | None = None,
) -> str:
    """Render a chat about *record*; ``""`` when there is nothing to export.

    Each message gets a ``### <role> (HH:MM:SS)`` header.  Roles are
    "AI Assistant" for answers, "System" for ``success``/``error`` status
    messages and "User" for questions.
    """
    if not messages:
        return ""

    lines: list[str] = [
        f"# Chat Conversation: {record.title}",
        "",
        f"**Page:** {record.title}",
        f"**URL:** [{record.url}]({record.url})",
        f"**Conversation Date:** {conversation_date or record.timestamp}",
        "",
        "## Conversation History",
        "",
    ]

    for index, message in enumerate(messages):
        lines.extend([f"### {_role(message)} ({_clock_time(message.timestamp)})", "", message.text, ""])
        if index < len(messages) - 1:
            lines.extend(["---", ""])

    if record.excerpt:
        lines.extend(["## Page Summary", "", record.excerpt, ""])

    lines.extend([
        "## Page Statistics",
        "",
        f"- **Content Length:** {record.text_length:,} characters",
        *_stats_lines(record),
        "",
    ])
    return "\n".join(lines)


def markdown_filename(title: str, suffix: str = "content") -> str:
    """Filesystem-safe export name, e.g. ``my_post_content.md``."""
    return f"{_NON_FILENAME_RE.sub('_', title).lower()}_{suffix}.md"
