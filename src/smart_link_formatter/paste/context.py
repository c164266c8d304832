"""
Decide whether a paste should be turned into a formatted link.

A URL pasted into markdown syntax that already gives it a meaning (a link
target, code, frontmatter, an HTML comment) must be pasted verbatim. The
decision only looks at the document text and the cursor position.
"""

import re
from enum import Enum

from smart_link_formatter.utils.markdown import is_link

_LINK_TARGET_OPENING = re.compile(r"\[.*?\]\($")


class PasteContext(str, Enum):
    """Where in the markdown structure the cursor sits."""

    TEXT = "text"
    LINK_TARGET = "link_target"
    INLINE_CODE = "inline_code"
    CODE_BLOCK = "code_block"
    FRONTMATTER = "frontmatter"
    HTML_COMMENT = "html_comment"


def classify_paste_context(document_text: str, cursor_line: int, cursor_ch: int) -> PasteContext:
    """
    Classify the markdown context at the cursor.

    Checks run in order and the first match wins.

    Args:
        document_text: Full document text
        cursor_line: Zero-based cursor line
        cursor_ch: Zero-based cursor column

    Returns:
        The context the cursor is in
    """
    lines = document_text.split("\n")
    cursor_line = min(max(cursor_line, 0), len(lines) - 1)
    line = lines[cursor_line]
    cursor_ch = min(max(cursor_ch, 0), len(line))

    before = line[:cursor_ch]
    char_before = line[cursor_ch - 1] if cursor_ch > 0 else ""
    char_after = line[cursor_ch] if cursor_ch < len(line) else ""

    # [label](|)
    if _LINK_TARGET_OPENING.search(before) and char_after == ")":
        return PasteContext.LINK_TARGET

    if before.count("`") % 2 == 1 or "`" in (char_before, char_after):
        return PasteContext.INLINE_CODE

    if _inside_code_block(lines, cursor_line):
        return PasteContext.CODE_BLOCK

    if _inside_frontmatter(lines, cursor_line):
        return PasteContext.FRONTMATTER

    text_before_cursor = "\n".join(lines[:cursor_line]) + "\n" + before
    if text_before_cursor.count("<!--") > text_before_cursor.count("-->"):
        return PasteContext.HTML_COMMENT

    return PasteContext.TEXT


def should_intercept(
    text: str,
    document_text: str,
    cursor_line: int,
    cursor_ch: int,
    has_selection: bool = False,
) -> bool:
    """
    Decide whether pasted text should be replaced by a formatted link.

    Only URLs are intercepted. A selection always allows interception, since
    pasting a URL over selected text is a deliberate request for a link.

    Args:
        text: Pasted text
        document_text: Full document text
        cursor_line: Zero-based cursor line
        cursor_ch: Zero-based cursor column
        has_selection: Whether text is selected

    Returns:
        True if the paste should be intercepted
    """
    if not is_link(text):
        return False
    if has_selection:
        return True
    return classify_paste_context(document_text, cursor_line, cursor_ch) is PasteContext.TEXT


def _inside_code_block(lines: list[str], cursor_line: int) -> bool:
    inside = False
    for line in lines[:cursor_line]:
        if line.strip().startswith("```"):
            inside = not inside
    return inside


def _inside_frontmatter(lines: list[str], cursor_line: int) -> bool:
    if lines[0].strip() != "---":
        return False
    if cursor_line == 0:
        return True
    return not any(line.strip() == "---" for line in lines[1 : cursor_line + 1])
