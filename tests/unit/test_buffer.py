"""Unit tests for the in-memory editor."""

from smart_link_formatter.editor import Editor, EditorPosition, TextBuffer


def test_implements_editor_protocol():
    """Test the buffer satisfies the editor protocol."""
    assert isinstance(TextBuffer(), Editor)


def test_cursor_defaults_to_end():
    """Test the cursor starts at the end of the text."""
    buffer = TextBuffer("ab\ncd")
    assert buffer.get_cursor() == EditorPosition(1, 2)
    assert buffer.something_selected() is False


def test_get_line():
    buffer = TextBuffer("first\nsecond")
    assert buffer.get_line(0) == "first"
    assert buffer.get_line(1) == "second"
    assert buffer.get_line(5) == ""
    assert buffer.line_count() == 2


def test_offset_round_trip():
    """Test offsets and positions convert both ways."""
    buffer = TextBuffer("ab\ncde\n\nf")
    for offset in range(len(buffer.get_value()) + 1):
        assert buffer.pos_to_offset(buffer.offset_to_pos(offset)) == offset


def test_positions_are_clamped():
    """Test out-of-range positions are clamped."""
    buffer = TextBuffer("ab\ncd")
    assert buffer.pos_to_offset(EditorPosition(0, 99)) == 2
    assert buffer.pos_to_offset(EditorPosition(9, 0)) == 3


def test_selection_bounds():
    """Test selection endpoints are ordered."""
    buffer = TextBuffer(
        "hello world", cursor=EditorPosition(0, 11), selection_end=EditorPosition(0, 6)
    )
    assert buffer.something_selected() is True
    assert buffer.get_cursor("from") == EditorPosition(0, 6)
    assert buffer.get_cursor("to") == EditorPosition(0, 11)
    assert buffer.get_cursor() == EditorPosition(0, 6)


def test_replace_selection_moves_cursor_after_text():
    """Test replacing the selection moves the cursor past it."""
    buffer = TextBuffer(
        "hello world", cursor=EditorPosition(0, 6), selection_end=EditorPosition(0, 11)
    )
    buffer.replace_selection("there")
    assert buffer.get_value() == "hello there"
    assert buffer.get_cursor() == EditorPosition(0, 11)
    assert buffer.something_selected() is False


def test_replace_range_shifts_cursor_after_edit():
    """Test a cursor after the edit shifts with it."""
    buffer = TextBuffer("abc XYZ def")
    buffer.set_cursor(EditorPosition(0, 11))
    buffer.replace_range("longer text", EditorPosition(0, 4), EditorPosition(0, 7))
    assert buffer.get_value() == "abc longer text def"
    assert buffer.get_cursor() == EditorPosition(0, 19)


def test_replace_range_keeps_cursor_before_edit():
    """Test a cursor before the edit stays put."""
    buffer = TextBuffer("abc XYZ def", cursor=EditorPosition(0, 1))
    buffer.replace_range("", EditorPosition(0, 4), EditorPosition(0, 8))
    assert buffer.get_value() == "abc def"
    assert buffer.get_cursor() == EditorPosition(0, 1)


def test_replace_range_across_lines():
    """Test replacing a range that spans lines."""
    buffer = TextBuffer("one\ntwo\nthree")
    buffer.replace_range("X", EditorPosition(0, 1), EditorPosition(2, 2))
    assert buffer.get_value() == "oXree"
