"""
Snippet synthesis from gocode signatures.

gocode reports a function's type as ``func(a int, b string) error``; these
helpers turn that into insertion templates with one placeholder per
parameter.
"""

from __future__ import annotations

from dataclasses import dataclass

from gocomplete.config import SuggestConfig
from gocomplete.domain.golang import BUILTIN_TYPES
from gocomplete.domain.types import (
    CompletionItem,
    CompletionItemKind,
    RawSuggestion,
    SnippetString,
    SuggestionClass,
)

FUNC_TYPE_MARKER = "func("
METHOD_STUB_SORT_KEY = "b"

_OPENERS = "([{"
_CLOSERS = ")]}"


@dataclass(frozen=True, slots=True)
class Signature:
    """Parameters and return fragment of a function type."""

    params: list[str]
    return_type: str


def parameters_and_return_type(signature: str) -> Signature:
    """
    Split ``(p1, p2) ret`` into its parameters and return fragment.

    ``signature`` is a function type with the leading ``func`` removed.
    Commas nested in parentheses, brackets or braces belong to the enclosing
    parameter. The return fragment keeps its leading space.

    Examples:
        '(a int, b string) error' -> (['a int', 'b string'], ' error')
        '(f func(int, int) bool)' -> (['f func(int, int) bool'], '')
    """
    params: list[str] = []
    depth = 0
    last_start = 1
    for index in range(1, len(signature)):
        char = signature[index]
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char == "," and depth == 0:
            params.append(signature[last_start:index])
            last_start = index + 2
        if depth < 0:
            if index > last_start:
                params.append(signature[last_start:index])
            return_type = signature[index + 1 :] if index < len(signature) - 1 else ""
            return Signature(params, return_type)
    return Signature([], "")


def escape_placeholder(text: str) -> str:
    """Escape snippet syntax so ``text`` is inserted literally."""
    return text.replace("${", "\\${").replace("}", "\\}")


def is_function_typed(suggestion: RawSuggestion) -> bool:
    return suggestion.type.startswith(FUNC_TYPE_MARKER)


class SnippetSynthesizer:
    """Derives call, callback and method-stub snippets from suggestions."""

    def synthesize(
        self,
        suggestion: RawSuggestion,
        text_after_cursor: str,
        config: SuggestConfig,
    ) -> SnippetString | None:
        """Insertion template for ``suggestion``, or None to insert its name."""
        snippet: SnippetString | None = None
        if config.snippets_enabled and self._wants_call_snippet(suggestion, text_after_cursor):
            snippet = self.function_call_snippet(
                suggestion,
                without_type=config.use_code_snippets_on_function_suggest_without_type,
            )
        if (
            config.use_code_snippets_on_function_suggest
            and suggestion.class_ == SuggestionClass.TYPE
            and is_function_typed(suggestion)
        ):
            snippet = self.callback_snippet(suggestion)
        return snippet

    @staticmethod
    def _wants_call_snippet(suggestion: RawSuggestion, text_after_cursor: str) -> bool:
        if suggestion.class_ == SuggestionClass.FUNC:
            # met() -> method()() otherwise
            return not text_after_cursor.startswith("()")
        if suggestion.class_ == SuggestionClass.VAR and is_function_typed(suggestion):
            # typing arguments of an in-progress call
            return text_after_cursor[:1] not in (")", ",")
        return False

    def function_call_snippet(self, suggestion: RawSuggestion, *, without_type: bool = False) -> SnippetString:
        """``name(${1:a int}, ${2:b string})``, or names only when ``without_type``."""
        signature = parameters_and_return_type(suggestion.type[len("func") :])
        placeholders = []
        for index, raw in enumerate(signature.params):
            param = raw.strip()
            if not param:
                continue
            param = escape_placeholder(param)
            if without_type and " " in param:
                param = param[: param.index(" ")]
            placeholders.append(f"${{{index + 1}:{param}}}")
        return SnippetString(value=f"{suggestion.name}({', '.join(placeholders)})")

    def callback_snippet(self, suggestion: RawSuggestion) -> SnippetString:
        """Wrap a call with a function literal matching a ``func(...)`` type."""
        signature = parameters_and_return_type(suggestion.type[len("func") :])
        placeholders = []
        for index, raw in enumerate(signature.params):
            param = raw.strip()
            if not param:
                continue
            param = escape_placeholder(param)
            if " " not in param:
                param = f"arg{index + 1} {param}"
            split = param.index(" ")
            placeholders.append(f"${{{index + 1}:{param[:split]}}}{param[split:]}")
        body_stop = len(signature.params) + 1
        return SnippetString(
            value=f"{suggestion.name}(func({', '.join(placeholders)}) {{\n\t${body_stop}\n}}){signature.return_type}"
        )

    def method_stub_item(self, suggestion: RawSuggestion, word_start: int | None) -> CompletionItem | None:
        """Method skeleton for a user type, offered when typing at column 0."""
        if word_start != 0 or suggestion.class_ != SuggestionClass.TYPE:
            return None
        if not suggestion.name or suggestion.name in BUILTIN_TYPES:
            return None
        type_name = suggestion.name
        receiver = type_name[0].lower()
        template = f"func ({receiver} *{type_name}) ${{1:methodName}}(${{2}}) ${{3}} {{\n\t$0\n}}"
        return CompletionItem(
            label=f"{type_name} method",
            kind=CompletionItemKind.SNIPPET,
            filter_text=type_name,
            detail="Method snippet",
            sort_key=METHOD_STUB_SORT_KEY,
            insert_text=SnippetString(value=template),
        )
