"""Completion-suggestion core for Go editor integrations.

The public entry point is :class:`GoCompletionProvider`, which turns a
document and cursor position into ranked completion items by driving the
external ``gocode`` process.
"""

from gocomplete.application.merger import SuggestionMerger
from gocomplete.config import SuggestConfig, load_config
from gocomplete.domain.document import TextDocument
from gocomplete.domain.types import CompletionItem, CompletionItemKind, Position
from gocomplete.provider import GoCompletionProvider

__all__ = [
    "GoCompletionProvider",
    "SuggestionMerger",
    "SuggestConfig",
    "load_config",
    "TextDocument",
    "CompletionItem",
    "CompletionItemKind",
    "Position",
]
