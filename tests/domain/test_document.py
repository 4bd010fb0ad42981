"""Tests for the in-memory text buffer."""

from gocomplete.domain.document import TextDocument
from gocomplete.domain.types import Position


class TestTextDocument:
    """Line access and offset conversion."""

    def test_line_at_strips_carriage_return(self):
        document = TextDocument("package main\r\nfunc main() {}\r\n")
        assert document.line_at(0) == "package main"
        assert document.line_count == 3

    def test_offset_and_position_round_trip(self):
        document = TextDocument("package main\n\nfunc main() {\n\tfmt.\n}\n")
        position = Position(line=3, character=5)
        offset = document.offset_at(position)
        assert document.text[offset - 1] == "."
        assert document.position_at(offset) == position

    def test_offset_at_clamps_character_to_line(self):
        document = TextDocument("ab\ncd")
        assert document.offset_at(Position(line=0, character=40)) == 2

    def test_byte_offset_counts_utf8_bytes(self):
        document = TextDocument('s := "é"\nx')
        position = Position(line=1, character=0)
        assert document.offset_at(position) == 9
        assert document.byte_offset_at(position) == 10


class TestWordsAndStrings:
    """Word ranges and the in-string heuristic."""

    def test_word_range_touching_cursor(self):
        document = TextDocument("\tfmt.Pri")
        word = document.word_range_at(Position(line=0, character=8))
        assert (word.start.character, word.end.character) == (5, 8)

    def test_no_word_after_dot(self):
        document = TextDocument("\tfmt.")
        assert document.word_range_at(Position(line=0, character=5)) is None

    def test_inside_open_string(self):
        document = TextDocument('import "fm')
        assert document.is_position_in_string(Position(line=0, character=10))

    def test_after_closed_string(self):
        document = TextDocument('x := "a" + ')
        assert not document.is_position_in_string(Position(line=0, character=11))

    def test_escaped_quote_does_not_close_string(self):
        line = 's := "say \\"hi'
        document = TextDocument(line)
        assert document.is_position_in_string(Position(line=0, character=len(line)))
