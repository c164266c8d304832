"""Paste interception, placeholders and link replacement."""

from smart_link_formatter.paste.context import PasteContext, classify_paste_context, should_intercept
from smart_link_formatter.paste.handler import LinkFormatter, PasteOperation
from smart_link_formatter.paste.placeholder import (
    PLACEHOLDER_PATTERN,
    Placeholder,
    PlaceholderState,
    PlaceholderTracker,
)

__all__ = [
    "PLACEHOLDER_PATTERN",
    "LinkFormatter",
    "PasteContext",
    "PasteOperation",
    "Placeholder",
    "PlaceholderState",
    "PlaceholderTracker",
    "classify_paste_context",
    "should_intercept",
]
