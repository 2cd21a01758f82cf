"""Project settings for pagelens.

Plain module-level constants.  Extraction code reads them at call time so a
host can patch a value (tests do) without re-importing anything; the CLI
overrides the HTTP and logging values per run through its flags.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Main-content thresholds (characters of trimmed text)
# ---------------------------------------------------------------------------
# A content region must hold more than this many characters to be chosen.
REGION_MIN_CHARS = 100

# The paragraph-only fallback needs a longer paragraph.
PARAGRAPH_MIN_CHARS = 200

# ---------------------------------------------------------------------------
# Excerpt
# ---------------------------------------------------------------------------
EXCERPT_MIN_CHARS = 50
EXCERPT_MAX_CHARS = 200
EXCERPT_ELLIPSIS = "..."

# ---------------------------------------------------------------------------
# Feature collection
# ---------------------------------------------------------------------------
FEATURE_PARAGRAPH_MIN_CHARS = 50

# Link schemes that never navigate anywhere useful
NON_NAVIGATIONAL_SCHEMES: tuple[str, ...] = ("javascript:", "mailto:", "tel:")

# ---------------------------------------------------------------------------
# Text normalisation
# ---------------------------------------------------------------------------
# Removed as plain substrings, case-insensitively, in this order.
BOILERPLATE_WORDS: tuple[str, ...] = (
    "menu",
    "navigation",
    "nav",
    "footer",
    "header",
    "sidebar",
    "advertisement",
    "ads",
)

# ---------------------------------------------------------------------------
# Fallback titles
# ---------------------------------------------------------------------------
UNTITLED = "Untitled"

# ---------------------------------------------------------------------------
# HTTP fetch
# ---------------------------------------------------------------------------
DOWNLOAD_TIMEOUT = 30

RETRY_TIMES = 3
RETRY_HTTP_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

# Pages a browser host refuses to read (settings pages, extension pages)
UNSUPPORTED_URL_PREFIXES: tuple[str, ...] = (
    "chrome://",
    "chrome-extension://",
    "edge://",
    "about:",
)

# ---------------------------------------------------------------------------
# Playwright (JS rendering, optional)
# ---------------------------------------------------------------------------
PLAYWRIGHT_LAUNCH_OPTIONS: dict = {
    "headless": True,
    "args": [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
    ],
}
PLAYWRIGHT_MIN_TIMEOUT = 60  # seconds

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
