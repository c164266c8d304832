"""Protocols for the host editor and its notification surface."""

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, order=True)
class EditorPosition:
    """A zero-based line/column position in a document."""

    line: int
    ch: int


@runtime_checkable
class Editor(Protocol):
    """
    Protocol for the text editor a paste happens in.

    Positions are line/column pairs; offsets are indexes into the full text.
    """

    def get_value(self) -> str:
        """Return the full document text."""
        ...

    def get_line(self, line: int) -> str:
        """Return the text of one line (without its newline)."""
        ...

    def get_cursor(self, which: Literal["from", "to", "head"] = "head") -> EditorPosition:
        """Return the cursor, or the start/end of the selection."""
        ...

    def something_selected(self) -> bool:
        """Return True if a non-empty selection exists."""
        ...

    def replace_selection(self, text: str) -> None:
        """Replace the selection (or insert at the cursor) and move the cursor after it."""
        ...

    def replace_range(self, text: str, start: EditorPosition, end: EditorPosition) -> None:
        """Replace the text between two positions."""
        ...

    def set_cursor(self, position: EditorPosition) -> None:
        """Move the cursor, clearing any selection."""
        ...

    def pos_to_offset(self, position: EditorPosition) -> int:
        """Convert a position into an offset."""
        ...

    def offset_to_pos(self, offset: int) -> EditorPosition:
        """Convert an offset into a position."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """Protocol for transient user-facing notices."""

    def notify(self, message: str, timeout: float | None = None) -> None:
        """Show a message to the user."""
        ...


class LoggingNotifier:
    """Notifier that records notices in the application log."""

    def notify(self, message: str, timeout: float | None = None) -> None:
        logger.info("user_notice", message=message, timeout=timeout)


class CollectingNotifier:
    """Notifier that keeps notices so they can be returned to a caller."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str, timeout: float | None = None) -> None:
        logger.debug("user_notice", message=message, timeout=timeout)
        self.messages.append(message)
