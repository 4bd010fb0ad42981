"""
Completion request snapshot.

Everything the pipeline needs about the cursor is captured once, up front,
so that each stage works on the same immutable view.
"""

from __future__ import annotations

from dataclasses import dataclass

from gocomplete.config import SuggestConfig
from gocomplete.domain.document import TextDocument
from gocomplete.domain.types import Position


@dataclass(frozen=True, slots=True)
class CompletionRequest:
    """Snapshot of the document state used by every pipeline stage."""

    filename: str
    text: str
    position: Position
    byte_offset: int
    line_text: str
    line_prefix: str
    next_line: str | None
    current_word: str
    word_start: int | None
    in_string: bool
    config: SuggestConfig

    @property
    def text_after_cursor(self) -> str:
        """Remainder of the current line after the cursor."""
        return self.line_text[self.position.character :]


def build_request(document: TextDocument, position: Position, config: SuggestConfig) -> CompletionRequest:
    """Capture the cursor context of ``document`` at ``position``."""
    line_text = document.line_at(position.line)
    line_prefix = line_text[: position.character]
    next_line = document.line_at(position.line + 1) if position.line + 1 < document.line_count else None

    current_word = ""
    word_start: int | None = None
    word_range = document.word_range_at(position)
    if word_range is not None:
        word_start = word_range.start.character
        if word_start < position.character:
            current_word = line_text[word_start : position.character]

    return CompletionRequest(
        filename=document.filename,
        text=document.text,
        position=position,
        byte_offset=document.byte_offset_at(position),
        line_text=line_text,
        line_prefix=line_prefix,
        next_line=next_line,
        current_word=current_word,
        word_start=word_start,
        in_string=document.is_position_in_string(position),
        config=config,
    )
