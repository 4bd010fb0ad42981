"""Completion domain models.

These Pydantic models describe what gocode reports (``RawSuggestion``) and
what the completion core hands back to the editor (``CompletionItem``).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "SuggestionClass",
    "CompletionItemKind",
    "Position",
    "Range",
    "TextEdit",
    "Command",
    "SnippetString",
    "RawSuggestion",
    "CompletionItem",
    "kind_from_class",
]


class SuggestionClass(str, Enum):
    """Candidate classes reported by gocode."""

    CONST = "const"
    PACKAGE = "package"
    TYPE = "type"
    FUNC = "func"
    VAR = "var"
    IMPORT = "import"


class CompletionItemKind(str, Enum):
    """Categorical kind of a completion item."""

    CONSTANT = "constant"
    MODULE = "module"
    CLASS = "class"
    FUNCTION = "function"
    VARIABLE = "variable"
    PROPERTY = "property"
    KEYWORD = "keyword"
    SNIPPET = "snippet"


_KIND_BY_CLASS = {
    "const": CompletionItemKind.CONSTANT,
    "package": CompletionItemKind.MODULE,
    "type": CompletionItemKind.CLASS,
    "func": CompletionItemKind.FUNCTION,
    "var": CompletionItemKind.VARIABLE,
    "import": CompletionItemKind.MODULE,
}


def kind_from_class(suggestion_class: str) -> CompletionItemKind:
    """Map a gocode class (or Go declaration keyword) to an item kind."""
    return _KIND_BY_CLASS.get(suggestion_class, CompletionItemKind.PROPERTY)


class Position(BaseModel):
    """Zero-based line/character position in a document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., ge=0)
    character: int = Field(..., ge=0)


class Range(BaseModel):
    """Half-open range between two positions."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def from_coordinates(cls, start_line: int, start_char: int, end_line: int, end_char: int) -> "Range":
        return cls(
            start=Position(line=start_line, character=start_char),
            end=Position(line=end_line, character=end_char),
        )


class TextEdit(BaseModel):
    """Replace ``range`` with ``new_text``. An empty range is an insertion."""

    model_config = ConfigDict(frozen=True)

    range: Range
    new_text: str


class Command(BaseModel):
    """Editor command to run after a completion item is accepted."""

    model_config = ConfigDict(frozen=True)

    title: str
    command: str
    arguments: list[Any] = Field(default_factory=list)


class SnippetString(BaseModel):
    """Insertion template with ``${n:default}`` placeholders and ``$n`` tab stops."""

    model_config = ConfigDict(frozen=True)

    value: str


class RawSuggestion(BaseModel):
    """One candidate as reported by gocode's JSON output."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    class_: str = Field(..., alias="class", description="gocode candidate class (see SuggestionClass)")
    name: str = Field(..., description="Identifier proposed by gocode")
    type: str = Field("", description="Signature or type string reported by gocode")


class CompletionItem(BaseModel):
    """Caller-facing completion candidate."""

    label: str = Field(..., description="Text shown in the suggestion list")
    kind: CompletionItemKind | None = None
    detail: str | None = None
    documentation: str | None = None
    filter_text: str | None = None
    insert_text: str | SnippetString | None = None
    text_edit: TextEdit | None = None
    additional_text_edits: list[TextEdit] | None = None
    sort_key: str | None = None
    command: Command | None = None

    @property
    def effective_sort_text(self) -> str:
        """Text the editor sorts by: the sort key, falling back to the label."""
        return self.sort_key if self.sort_key is not None else self.label

    def to_display_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary (aliases omitted, empties dropped)."""
        return self.model_dump(mode="json", exclude_none=True)
