"""Placeholder tokens that stand in for a link while its metadata is fetched."""

import html
import random
import re
import time
from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel

# Zero-width space after the span; keeps the token distinguishable from
# user-typed markup and stops the editor snapping the cursor into it.
PLACEHOLDER_MARKER = "\u200b"

PLACEHOLDER_PATTERN = re.compile(
    r'<span class="link-loading" id="(link-placeholder-\d+_\d+)"(?: url="([^"]*)")?>'
    r"Loading\.\.\.</span>" + PLACEHOLDER_MARKER + "?"
)


class PlaceholderState(str, Enum):
    """Lifecycle of one paste operation."""

    INSERTED = "inserted"
    RESOLVED = "resolved"
    FAILED = "failed"
    ORPHANED = "orphaned"


class Placeholder(BaseModel):
    """A unique in-document token for one pending link."""

    id: str
    url: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def create(cls, url: str | None = None) -> "Placeholder":
        """Create a placeholder with a timestamp and random id."""
        token_id = f"link-placeholder-{int(time.time() * 1000)}_{random.randint(0, 999_999)}"
        return cls(id=token_id, url=url)

    @property
    def text(self) -> str:
        """Exact text written into the document."""
        url_attr = f' url="{html.escape(self.url, quote=True)}"' if self.url else ""
        return f'<span class="link-loading" id="{self.id}"{url_attr}>Loading...</span>{PLACEHOLDER_MARKER}'


def find_placeholders(text: str) -> Iterator[re.Match[str]]:
    """Yield every placeholder-shaped span in the text."""
    return PLACEHOLDER_PATTERN.finditer(text)


def orphan_text(url: str | None) -> str:
    """Inert text that replaces a placeholder nobody is going to resolve."""
    if url:
        return f'<span class="link-failed">Failed to resolve link {url}</span>'
    return '<span class="link-failed">Failed to resolve link</span>'


class PlaceholderTracker:
    """
    In-memory set of placeholders with a resolution still pending.

    A tracker belongs to one running formatter; a placeholder found in a
    document but not tracked here is an orphan.
    """

    def __init__(self) -> None:
        self._active: set[str] = set()
        self._swept: set[str] = set()

    @property
    def active(self) -> frozenset[str]:
        """Return ids of placeholders awaiting replacement."""
        return frozenset(self._active)

    def create(self, url: str | None = None) -> Placeholder:
        """Create a placeholder with an id not currently in use and register it."""
        placeholder = Placeholder.create(url)
        while placeholder.id in self._active or placeholder.id in self._swept:
            placeholder = Placeholder.create(url)
        self._active.add(placeholder.id)
        return placeholder

    def is_active(self, placeholder_id: str) -> bool:
        return placeholder_id in self._active

    def release(self, placeholder_id: str) -> bool:
        """Stop tracking a placeholder. Returns False if it was not tracked."""
        if placeholder_id in self._active:
            self._active.discard(placeholder_id)
            return True
        return False

    def is_orphan(self, placeholder_id: str) -> bool:
        """Return True for an untracked placeholder that has not been swept yet."""
        return placeholder_id not in self._active and placeholder_id not in self._swept

    def mark_swept(self, placeholder_id: str) -> None:
        self._swept.add(placeholder_id)

    def reset(self) -> None:
        """Forget all tracked placeholders."""
        self._active.clear()
        self._swept.clear()
