"""Read-only document access for the extraction engine.

The extractors never talk to BeautifulSoup directly.  They ask a
:class:`Document` for elements matching a structural pattern and read text
and attributes back through it, so any tree (a parsed HTML string, a
serialized browser DOM, a hand-built test fixture) can be analysed as long
as it answers those few questions.

Patterns are small frozen dataclasses rather than CSS strings::

    ByTag("h1")                              # h1
    ByAttributeSubstring("class", "title")   # [class*="title"]
    ByAttributeSubstring("class", "title", tag="h1")  # h1[class*="title"]
    ByAttributeValue("rel", "author")        # [rel="author"]
    ByClass("content")                       # .content
    ById("main")                             # #main
    ByRole("main")                           # [role="main"]
    AnyOf((ByAttributeSubstring("class", "logo"),
           ByAttributeSubstring("class", "brand")))   # a, b
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PreformattedString

# ---------------------------------------------------------------------------
# Structural patterns
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ByTag:
    name: str


@dataclass(frozen=True)
class ByAttributeSubstring:
    """Attribute value contains *substring* (case-sensitive, like ``*=``)."""

    attr: str
    substring: str
    tag: str | None = None


@dataclass(frozen=True)
class ByAttributeValue:
    attr: str
    value: str
    tag: str | None = None


@dataclass(frozen=True)
class ByClass:
    """One of the element's class tokens equals *name*."""

    name: str
    tag: str | None = None


@dataclass(frozen=True)
class ByRole:
    value: str


@dataclass(frozen=True)
class ById:
    value: str


@dataclass(frozen=True)
class AnyOf:
    """Union of patterns; matches come back in document order."""

    patterns: tuple[Pattern, ...]


Pattern = Union[ByTag, ByAttributeSubstring, ByAttributeValue, ByClass, ByRole, ById, AnyOf]


def _safe_str(val: Any, default: str = "") -> str:
    """Convert a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def _tag_ok(required: str | None, tag: Tag) -> bool:
    return required is None or tag.name == required.lower()


def matches(pattern: Pattern, tag: Tag) -> bool:
    """Return True if *tag* satisfies *pattern*."""
    if isinstance(pattern, ByTag):
        return tag.name == pattern.name.lower()
    if isinstance(pattern, ByAttributeSubstring):
        if not _tag_ok(pattern.tag, tag) or not tag.has_attr(pattern.attr):
            return False
        return pattern.substring in _safe_str(tag.get(pattern.attr))
    if isinstance(pattern, ByAttributeValue):
        if not _tag_ok(pattern.tag, tag) or not tag.has_attr(pattern.attr):
            return False
        return _safe_str(tag.get(pattern.attr)) == pattern.value
    if isinstance(pattern, ByClass):
        if not _tag_ok(pattern.tag, tag):
            return False
        classes = tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        return pattern.name in classes
    if isinstance(pattern, ByRole):
        return _safe_str(tag.get("role")) == pattern.value
    if isinstance(pattern, ById):
        return _safe_str(tag.get("id")) == pattern.value
    if isinstance(pattern, AnyOf):
        return any(matches(p, tag) for p in pattern.patterns)
    raise TypeError(f"Unknown pattern type: {type(pattern).__name__}")


def _tag_hint(pattern: Pattern) -> str | None:
    """Tag name that every match of *pattern* must have, if any."""
    if isinstance(pattern, ByTag):
        return pattern.name.lower()
    if isinstance(pattern, (ByAttributeSubstring, ByAttributeValue, ByClass)) and pattern.tag:
        return pattern.tag.lower()
    return None


# ---------------------------------------------------------------------------
# Capability interface
# ---------------------------------------------------------------------------

@runtime_checkable
class Document(Protocol):
    """Read-only, queryable document tree."""

    @property
    def title(self) -> str:
        """The declared document title (``<title>``), or ``""``."""
        ...

    @property
    def body(self) -> Any | None:
        """The body node, or None for a document without one."""
        ...

    def query_first(self, pattern: Pattern) -> Any | None:
        """Return the first node in document order matching *pattern*."""
        ...

    def query_all(self, pattern: Pattern) -> list[Any]:
        """Return every node matching *pattern*, in document order."""
        ...

    def text_content_of(self, node: Any) -> str:
        """Concatenated text of *node* and its descendants, like DOM ``textContent``.

        Script and style bodies are included; comments are not.
        """
        ...

    def attributes_of(self, node: Any) -> dict[str, str]:
        ...

    def tag_name_of(self, node: Any) -> str:
        ...


# ---------------------------------------------------------------------------
# BeautifulSoup implementation
# ---------------------------------------------------------------------------

class SoupDocument:
    """:class:`Document` backed by a BeautifulSoup tree.

    The tree is never modified.  Text content joins every string under the
    node, ``<script>``/``<style>`` bodies included and comments excluded.
    """

    def __init__(self, soup: BeautifulSoup, url: str = "") -> None:
        self._soup = soup
        self.url = url

    @classmethod
    def from_html(cls, html: str, url: str = "") -> SoupDocument:
        """Parse *html* with lxml and wrap the result."""
        return cls(BeautifulSoup(html or "", "lxml"), url=url)

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    @property
    def title(self) -> str:
        title_tag = self._soup.find("title")
        if not isinstance(title_tag, Tag):
            return ""
        return " ".join(title_tag.get_text().split())

    @property
    def body(self) -> Tag | None:
        body = self._soup.find("body")
        return body if isinstance(body, Tag) else None

    def query_all(self, pattern: Pattern) -> list[Tag]:
        hint = _tag_hint(pattern)
        candidates = self._soup.find_all(hint) if hint else self._soup.find_all(True)
        return [el for el in candidates if isinstance(el, Tag) and matches(pattern, el)]

    def query_first(self, pattern: Pattern) -> Tag | None:
        hint = _tag_hint(pattern)
        candidates = self._soup.find_all(hint) if hint else self._soup.find_all(True)
        for el in candidates:
            if isinstance(el, Tag) and matches(pattern, el):
                return el
        return None

    def text_content_of(self, node: Tag) -> str:
        return "".join(
            str(s) for s in node.descendants
            if isinstance(s, NavigableString) and not isinstance(s, PreformattedString)
        )

    def attributes_of(self, node: Tag) -> dict[str, str]:
        return {str(k): _safe_str(v) for k, v in node.attrs.items()}

    def tag_name_of(self, node: Tag) -> str:
        return str(node.name or "")
