"""Markdown processing utilities."""

import re
from urllib.parse import urlparse

from smart_link_formatter.models.common import Extraction

_MARKDOWN_SPECIAL = re.compile(r"([\[\]|*_`\\])")
_MARKDOWN_LINK = re.compile(r"(?<!\\)\[((?:\\.|[^\\\]])+)\]\((https?://[^\s)]+)\)")
_BARE_URL = re.compile(r"https?://[^\s)]+")


def escape_markdown_chars(text: str) -> str:
    """
    Escape characters that would break a markdown link label.

    Args:
        text: Raw text

    Returns:
        Text with ``[ ] | * _ ` \\`` backslash-escaped
    """
    if not text:
        return ""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) into single spaces."""
    return re.sub(r"\s+", " ", text or "").strip()


def is_link(text: str) -> bool:
    """Return True if the text starts like an http(s) URL."""
    return bool(text) and text.startswith(("http://", "https://"))


def extract_url_at_cursor(line: str, cursor_ch: int) -> Extraction | None:
    """
    Find the URL under the cursor in a line of text.

    A cursor anywhere inside an existing ``[text](url)`` link selects the whole
    link, so reformatting replaces it. Otherwise a bare URL touching the cursor
    is returned.

    Args:
        line: The line of text
        cursor_ch: Cursor column

    Returns:
        Extraction with the URL and the column range to replace, or None
    """
    for match in _MARKDOWN_LINK.finditer(line):
        if match.start() <= cursor_ch <= match.end():
            return Extraction(url=match.group(2), start=match.start(), end=match.end())

    for match in _BARE_URL.finditer(line):
        if match.start() <= cursor_ch <= match.end():
            return Extraction(url=match.group(0), start=match.start(), end=match.end())

    return None


def url_final_segment(url: str) -> str:
    """
    Return the last non-empty path segment of a URL.

    Falls back to "File" when the path is empty and to the URL itself when it
    cannot be parsed.
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return url
    segments = [segment for segment in path.split("/") if segment]
    return segments[-1] if segments else "File"
