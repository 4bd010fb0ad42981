"""In-memory text buffer.

A minimal stand-in for the editor's document model: line access, offset and
position conversion, word ranges and the in-string heuristic the completion
core needs to build a request.
"""

import re

from gocomplete.domain.types import Position, Range
from gocomplete.utils import byte_length

__all__ = ["TextDocument", "WORD_PATTERN"]

WORD_PATTERN = re.compile(r"\w+")


class TextDocument:
    """Read-only view over a document's text."""

    def __init__(self, text: str, filename: str = "") -> None:
        self.text = text
        self.filename = filename
        self._lines = text.split("\n")
        self._line_starts: list[int] = []
        start = 0
        for line in self._lines:
            self._line_starts.append(start)
            start += len(line) + 1

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> str:
        """Return the text of ``line`` without its line terminator."""
        return self._lines[line].rstrip("\r")

    def offset_at(self, position: Position) -> int:
        """Character offset of ``position`` in the full text."""
        line = min(position.line, self.line_count - 1)
        return self._line_starts[line] + min(position.character, len(self._lines[line]))

    def position_at(self, offset: int) -> Position:
        """Inverse of :meth:`offset_at`, clamped to the document."""
        offset = max(0, min(offset, len(self.text)))
        line = 0
        for index, start in enumerate(self._line_starts):
            if start > offset:
                break
            line = index
        return Position(line=line, character=offset - self._line_starts[line])

    def byte_offset_at(self, position: Position) -> int:
        """UTF-8 byte offset of ``position``; gocode counts bytes, not characters."""
        return byte_length(self.text[: self.offset_at(position)])

    def word_range_at(self, position: Position) -> Range | None:
        """Range of the identifier touching ``position``, if any."""
        line_text = self.line_at(position.line)
        for match in WORD_PATTERN.finditer(line_text):
            if match.start() <= position.character <= match.end():
                return Range.from_coordinates(position.line, match.start(), position.line, match.end())
        return None

    def is_position_in_string(self, position: Position) -> bool:
        """True when an odd number of unescaped double quotes precede the cursor."""
        prefix = self.line_at(position.line)[: position.character]
        quotes = prefix.count('"') - prefix.count('\\"')
        return quotes % 2 == 1
