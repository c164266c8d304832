"""Editor and notification collaborators."""

from smart_link_formatter.editor.base import (
    CollectingNotifier,
    Editor,
    EditorPosition,
    LoggingNotifier,
    Notifier,
)
from smart_link_formatter.editor.buffer import TextBuffer

__all__ = [
    "CollectingNotifier",
    "Editor",
    "EditorPosition",
    "LoggingNotifier",
    "Notifier",
    "TextBuffer",
]
