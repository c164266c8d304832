"""In-memory editor used by the MCP tools and the test suite."""

from typing import Literal

from smart_link_formatter.editor.base import EditorPosition


class TextBuffer:
    """
    A plain-text document with a cursor and an optional selection.

    Implements the Editor protocol. The selection runs from an anchor to the
    head (the cursor); both are stored as offsets and mapped through edits.
    """

    def __init__(
        self,
        text: str = "",
        cursor: EditorPosition | None = None,
        selection_end: EditorPosition | None = None,
    ) -> None:
        """
        Initialize the buffer.

        Args:
            text: Initial document text
            cursor: Cursor position (defaults to the end of the text)
            selection_end: If given, text between cursor and this position is selected
        """
        self._text = text
        anchor = self.pos_to_offset(cursor) if cursor is not None else len(text)
        head = self.pos_to_offset(selection_end) if selection_end is not None else anchor
        self._anchor = anchor
        self._head = head

    # ─── Reading ─────────────────────────────────────────────────────

    def get_value(self) -> str:
        return self._text

    def line_count(self) -> int:
        return self._text.count("\n") + 1

    def get_line(self, line: int) -> str:
        lines = self._text.split("\n")
        if 0 <= line < len(lines):
            return lines[line]
        return ""

    def get_cursor(self, which: Literal["from", "to", "head"] = "head") -> EditorPosition:
        if which == "from":
            offset = min(self._anchor, self._head)
        elif which == "to":
            offset = max(self._anchor, self._head)
        else:
            offset = self._head
        return self.offset_to_pos(offset)

    def something_selected(self) -> bool:
        return self._anchor != self._head

    # ─── Position Conversion ─────────────────────────────────────────

    def pos_to_offset(self, position: EditorPosition) -> int:
        lines = self._text.split("\n")
        line = min(max(position.line, 0), len(lines) - 1)
        ch = min(max(position.ch, 0), len(lines[line]))
        return sum(len(lines[i]) + 1 for i in range(line)) + ch

    def offset_to_pos(self, offset: int) -> EditorPosition:
        offset = min(max(offset, 0), len(self._text))
        line = self._text.count("\n", 0, offset)
        line_start = self._text.rfind("\n", 0, offset) + 1
        return EditorPosition(line=line, ch=offset - line_start)

    # ─── Editing ─────────────────────────────────────────────────────

    def select(self, start: EditorPosition, end: EditorPosition) -> None:
        """Select the text between two positions, with the cursor at ``end``."""
        self._anchor = self.pos_to_offset(start)
        self._head = self.pos_to_offset(end)

    def set_cursor(self, position: EditorPosition) -> None:
        offset = self.pos_to_offset(position)
        self._anchor = offset
        self._head = offset

    def replace_range(self, text: str, start: EditorPosition, end: EditorPosition) -> None:
        start_offset, end_offset = sorted((self.pos_to_offset(start), self.pos_to_offset(end)))
        self._text = self._text[:start_offset] + text + self._text[end_offset:]

        delta = len(text) - (end_offset - start_offset)

        def remap(offset: int) -> int:
            if offset <= start_offset:
                return offset
            if offset >= end_offset:
                return offset + delta
            return start_offset + len(text)

        self._anchor = remap(self._anchor)
        self._head = remap(self._head)

    def replace_selection(self, text: str) -> None:
        start = self.get_cursor("from")
        end = self.get_cursor("to")
        start_offset = self.pos_to_offset(start)
        self.replace_range(text, start, end)
        self.set_cursor(self.offset_to_pos(start_offset + len(text)))
