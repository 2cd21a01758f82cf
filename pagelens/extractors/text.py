"""Blunt text clean-up applied to extracted content."""

from __future__ import annotations

import re
from functools import lru_cache

from pagelens import settings

_WHITESPACE_RE = re.compile(r"\s+")


@lru_cache(maxsize=8)
def _boilerplate_re(words: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile("|".join(re.escape(w) for w in words), re.IGNORECASE)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text)


def normalize(text: str) -> str:
    """Collapse whitespace and drop page-chrome vocabulary from *text*.

    The words in ``settings.BOILERPLATE_WORDS`` are removed wherever they
    occur, including inside longer words ("Headers" loses "header", "loads"
    loses "ads").  That imprecision is accepted: the filter is textual and
    knows nothing about the tree the text came from.
    """
    if not text:
        return ""
    text = collapse_whitespace(text)
    text = _boilerplate_re(tuple(settings.BOILERPLATE_WORDS)).sub("", text)
    return collapse_whitespace(text).strip()
