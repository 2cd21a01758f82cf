"""pagelens.query - extraction orchestrator and single-URL fetch API.

``extract()`` is the one entry point the host needs: hand it a parsed
document (or an HTML string) and it returns a complete
:class:`~pagelens.items.PageRecord`.  It never raises; when the pipeline
fails the record is degraded to the declared title and raw body text.

Basic usage::

    from pagelens.query import fetch

    record = fetch("https://example.com/blog/some-post")
    print(record.title)
    print(record.byline)
    print(record.content)
    print(len(record.links), len(record.headings))

    # As a plain dict
    data = fetch("https://example.com/blog/some-post").model_dump()

Low-level access::

    from pagelens.query import fetch_html, extract

    html = fetch_html("https://example.com/blog/post")
    record = extract(html, url="https://example.com/blog/post")
"""

from __future__ import annotations

import contextlib
import gzip
import logging
import random
import time
import urllib.error
import urllib.request
import zlib
from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlparse

from pagelens import settings
from pagelens.dom import Document, SoupDocument
from pagelens.extractors.features import collect_features
from pagelens.extractors.main_content import body_text
from pagelens.extractors.metadata import read_article
from pagelens.items import PageRecord, build_page_record

logger = logging.getLogger(__name__)

METHOD_DEGRADED = "degraded"


# ---------------------------------------------------------------------------
# Public exception
# ---------------------------------------------------------------------------

class FetchError(RuntimeError):
    """Raised when a URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


# ---------------------------------------------------------------------------
# Extraction (document → PageRecord, no network)
# ---------------------------------------------------------------------------

def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def degraded_record(
    document: Document | None,
    *,
    url: str = "",
    timestamp: str | None = None,
) -> PageRecord:
    """Minimal record built from the declared title and raw body text only."""
    title = ""
    text = ""
    if document is not None:
        with contextlib.suppress(Exception):
            title = document.title
        with contextlib.suppress(Exception):
            text = body_text(document)
    return PageRecord(
        url=url,
        timestamp=timestamp or _now_iso(),
        title=title or settings.UNTITLED,
        content=text,
        text_content=text,
        text_length=len(text),
        extraction_method=METHOD_DEGRADED,
        degraded=True,
    )


def _as_document(source: Document | str, url: str) -> Document:
    if isinstance(source, str):
        return SoupDocument.from_html(source, url=url)
    return source


def extract(
    source: Document | str,
    *,
    url: str = "",
    timestamp: str | None = None,
) -> PageRecord:
    """Extract a :class:`PageRecord` from *source*.

    Args:
        source:    A :class:`~pagelens.dom.Document` or a raw HTML string.
        url:       Page URL, stored on the record and used to resolve
                   relative link and image URLs.
        timestamp: ISO 8601 extraction time; defaults to now (UTC).

    Returns:
        A well-formed :class:`PageRecord`.  On any internal failure the
        record has ``degraded=True``, the declared title (or "Untitled"),
        the raw body text and no metadata.
    """
    timestamp = timestamp or _now_iso()
    document: Document | None = None
    try:
        document = _as_document(source, url)
        url = url or str(getattr(document, "url", "") or "")

        article, method = read_article(document)
        features = collect_features(document, base_url=url)

        # An empty locator result still hands the host something to read
        text = article.content or body_text(document)
        record = build_page_record(
            article,
            features,
            url=url,
            timestamp=timestamp,
            text=text,
            extraction_method=method,
        )
    except Exception as exc:
        logger.warning("extraction failed for %s: %s", url or "<document>", exc)
        return degraded_record(document, url=url, timestamp=timestamp)

    logger.debug(
        "extracted %s: method=%s text=%d links=%d headings=%d images=%d",
        url or "<document>", record.extraction_method, record.text_length,
        len(record.links), len(record.headings), len(record.images),
    )
    return record


def parse(html: str, url: str = "") -> PageRecord:
    """Parse pre-fetched HTML with no network requests."""
    return extract(html, url=url)


def parse_from_browser(page: Any) -> PageRecord:
    """Extract from a live Playwright ``Page`` (uses ``page.content()``/``page.url``)."""
    html: str = page.content()
    return extract(html, url=str(page.url))


# ---------------------------------------------------------------------------
# Low-level HTTP fetch
# ---------------------------------------------------------------------------

def _check_url(url: str) -> None:
    if url.startswith(settings.UNSUPPORTED_URL_PREFIXES):
        raise FetchError(
            "Browser settings pages cannot be read. Please use a regular website.",
            url=url,
        )
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)


def _decode_response_body(raw: bytes, headers: Any, url: str) -> str:
    encoding = ""
    if headers is not None:
        encoding = str(headers.get("Content-Encoding", "") or "").lower().strip()

    try:
        if encoding == "gzip":
            raw = gzip.decompress(raw)
        elif encoding in ("deflate", "zlib"):
            raw = zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(f"{encoding} decompression failed for {url}: {exc}", url=url) from exc

    charset = "utf-8"
    if headers is not None:
        with contextlib.suppress(Exception):
            charset = headers.get_content_charset("utf-8") or "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


def _backoff(attempt: int, retry_after: int = 0) -> float:
    return max(retry_after, 2 ** attempt) + random.uniform(0, 1)


def fetch_html(
    url: str,
    *,
    timeout: int | None = None,
    user_agent: str | None = None,
    max_retries: int | None = None,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    Retries with jittered exponential backoff on 429/5xx responses and
    network-level failures.

    Raises:
        FetchError: On HTTP errors, connection failures, or unsupported URLs.
    """
    _check_url(url)
    timeout = timeout if timeout is not None else settings.DOWNLOAD_TIMEOUT
    max_retries = max_retries if max_retries is not None else settings.RETRY_TIMES

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    last_exc: FetchError | None = None
    for attempt in range(max_retries + 1):
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return _decode_response_body(resp.read(), resp.headers, url)

        except urllib.error.HTTPError as exc:
            last_exc = FetchError(
                f"HTTP {exc.code} fetching {url}: {exc.reason}", url=url, status=exc.code,
            )
            if exc.code in settings.RETRY_HTTP_CODES and attempt < max_retries:
                ra_header = exc.headers.get("Retry-After", "") if exc.headers else ""
                retry_after = int(ra_header) if ra_header and ra_header.strip().isdigit() else 0
                delay = _backoff(attempt, retry_after)
                logger.debug(
                    "HTTP %d for %s, retrying in %.1fs (attempt %d/%d)",
                    exc.code, url, delay, attempt + 1, max_retries,
                )
                time.sleep(delay)
                continue
            raise last_exc from exc

        except urllib.error.URLError as exc:
            last_exc = FetchError(f"URL error fetching {url}: {exc.reason}", url=url)
            if attempt < max_retries:
                delay = _backoff(attempt)
                logger.debug(
                    "URL error for %s, retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, max_retries, exc.reason,
                )
                time.sleep(delay)
                continue
            raise last_exc from exc

        except OSError as exc:
            last_exc = FetchError(f"Network error fetching {url}: {exc}", url=url)
            if attempt < max_retries:
                delay = _backoff(attempt)
                logger.debug(
                    "Network error for %s, retrying in %.1fs (attempt %d/%d): %s",
                    url, delay, attempt + 1, max_retries, exc,
                )
                time.sleep(delay)
                continue
            raise last_exc from exc

    raise last_exc or FetchError(f"All retries exhausted for {url}", url=url)


def _fetch_html_playwright(url: str, timeout: int, user_agent: str | None = None) -> str:
    """Render *url* in headless Chromium and return the resulting DOM as HTML."""
    _check_url(url)
    try:
        from playwright.sync_api import sync_playwright
    except ImportError as exc:
        raise FetchError(
            "render_js=True requires playwright: pip install 'pagelens[browser]' && "
            "playwright install chromium",
            url=url,
        ) from exc

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(**settings.PLAYWRIGHT_LAUNCH_OPTIONS)
            try:
                ctx = browser.new_context(
                    user_agent=user_agent or settings.USER_AGENT,
                    java_script_enabled=True,
                    viewport={"width": 1920, "height": 1080},
                )
                page = ctx.new_page()
                effective_timeout = max(timeout, settings.PLAYWRIGHT_MIN_TIMEOUT) * 1_000
                page.goto(url, timeout=effective_timeout, wait_until="load")
                try:
                    page.wait_for_load_state("networkidle", timeout=12_000)
                except Exception:
                    logger.debug("Playwright networkidle timed out for %s, continuing", url)
                html: str = page.content()
            finally:
                with contextlib.suppress(Exception):
                    browser.close()
    except Exception as exc:
        raise FetchError(f"Playwright error fetching {url}: {exc}", url=url) from exc

    if not html.strip():
        raise FetchError(f"Playwright returned empty page for {url}", url=url)
    return html


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def fetch(
    url: str,
    *,
    render_js: bool = False,
    timeout: int | None = None,
    user_agent: str | None = None,
    max_retries: int | None = None,
) -> PageRecord:
    """Fetch *url* and return its :class:`~pagelens.items.PageRecord`.

    Args:
        url:         Fully-qualified HTTP/HTTPS URL.
        render_js:   Render the page in headless Chromium first (requires
                     the ``browser`` extra and ``playwright install chromium``).
        timeout:     Network timeout in seconds.
        user_agent:  Custom User-Agent string.
        max_retries: Retry budget for transient failures (static fetch only).

    Raises:
        :class:`FetchError`: If the page cannot be retrieved.  Extraction
            itself never raises.
    """
    logger.info("fetch: %s (render_js=%s)", url, render_js)
    timeout = timeout if timeout is not None else settings.DOWNLOAD_TIMEOUT
    if render_js:
        html = _fetch_html_playwright(url, timeout=timeout, user_agent=user_agent)
    else:
        html = fetch_html(url, timeout=timeout, user_agent=user_agent, max_retries=max_retries)
    return extract(html, url=url)
