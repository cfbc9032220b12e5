"""Tests for the text source and context window extraction."""

import pytest

from holefiller.context_window import clamp_position, extract, extract_line_suffix
from holefiller.text_source import CursorLocation, StringTextSource, TextRange

DOC = "line0\nline1\nline2\nline3\nline4 tail\nline5"


@pytest.fixture
def source():
    return StringTextSource(DOC)


class TestStringTextSource:
    def test_line_access(self, source):
        assert source.line_count == 6
        assert source.line_at(4) == "line4 tail"

    def test_line_out_of_range(self, source):
        with pytest.raises(IndexError):
            source.line_at(6)

    def test_get_text_single_line(self, source):
        text = source.get_text(TextRange(CursorLocation(4, 2), CursorLocation(4, 5)))
        assert text == "ne4"

    def test_get_text_multi_line(self, source):
        text = source.get_text(TextRange(CursorLocation(0, 0), CursorLocation(2, 3)))
        assert text == "line0\nline1\nlin"

    def test_negative_location_rejected(self):
        with pytest.raises(ValueError):
            CursorLocation(-1, 0)


class TestExtract:
    def test_window_spans_three_previous_lines(self, source):
        window = extract(source, CursorLocation(4, 5))
        assert window.start_line == 1
        assert window.lines == ("line1", "line2", "line3", "line4")
        assert window.text == "line1\nline2\nline3\nline4"
        assert window.line_prefix == "line4"

    def test_cursor_on_first_line(self, source):
        window = extract(source, CursorLocation(0, 3))
        assert window.start_line == 0
        assert window.lines == ("lin",)
        assert window.preceding_lines == ()

    def test_document_shorter_than_window(self):
        window = extract(StringTextSource("a\nbc"), CursorLocation(1, 1))
        assert window.lines == ("a", "b")

    def test_custom_line_count(self, source):
        window = extract(source, CursorLocation(5, 0), lines_before=1)
        assert window.lines == ("line4 tail", "")

    def test_position_past_end_is_clamped(self, source):
        window = extract(source, CursorLocation(40, 2))
        assert window.cursor == CursorLocation(5, 5)
        assert window.line_prefix == "line5"

    def test_character_past_end_is_clamped(self, source):
        assert clamp_position(source, CursorLocation(0, 99)) == CursorLocation(0, 5)

    def test_line_suffix(self, source):
        assert extract_line_suffix(source, CursorLocation(4, 5)) == " tail"
        assert extract_line_suffix(source, CursorLocation(4, 10)) == ""
