"""Tests for snippet synthesis from gocode signatures."""

import pytest

from gocomplete.application.snippets import (
    SnippetSynthesizer,
    escape_placeholder,
    parameters_and_return_type,
)
from gocomplete.config import SuggestConfig
from gocomplete.domain.types import CompletionItemKind, RawSuggestion, SnippetString

WITH_TYPES = SuggestConfig(useCodeSnippetsOnFunctionSuggest=True)
WITHOUT_TYPES = SuggestConfig(useCodeSnippetsOnFunctionSuggestWithoutType=True)


def suggestion(class_: str, name: str, type_: str = "") -> RawSuggestion:
    return RawSuggestion.model_validate({"class": class_, "name": name, "type": type_})


class TestSignatureSplitting:
    """Parameter and return fragments of ``func`` types."""

    def test_parameters_and_return(self):
        signature = parameters_and_return_type("(a int, b string) error")
        assert signature.params == ["a int", "b string"]
        assert signature.return_type == " error"

    def test_nested_commas_stay_in_parameter(self):
        signature = parameters_and_return_type("(f func(int, int) bool, m map[string]int)")
        assert signature.params == ["f func(int, int) bool", "m map[string]int"]
        assert signature.return_type == ""

    def test_no_parameters(self):
        signature = parameters_and_return_type("() (int, error)")
        assert signature.params == []
        assert signature.return_type == " (int, error)"

    def test_escape_placeholder(self):
        assert escape_placeholder("x struct{}") == "x struct{\\}"
        assert escape_placeholder("${1}") == "\\${1\\}"


class TestFunctionSnippets:
    """Call snippets for functions and function-typed variables."""

    def test_call_snippet_with_types(self):
        snippet = SnippetSynthesizer().synthesize(suggestion("func", "Foo", "func(a int, b string)"), "", WITH_TYPES)
        assert snippet == SnippetString(value="Foo(${1:a int}, ${2:b string})")

    def test_call_snippet_without_types(self):
        snippet = SnippetSynthesizer().synthesize(
            suggestion("func", "Foo", "func(a int, b string)"), "", WITHOUT_TYPES
        )
        assert snippet == SnippetString(value="Foo(${1:a}, ${2:b})")

    def test_no_snippet_when_disabled(self):
        snippet = SnippetSynthesizer().synthesize(
            suggestion("func", "Foo", "func(a int)"), "", SuggestConfig()
        )
        assert snippet is None

    def test_no_snippet_before_existing_parentheses(self):
        snippet = SnippetSynthesizer().synthesize(suggestion("func", "Foo", "func(a int)"), "()", WITH_TYPES)
        assert snippet is None

    @pytest.mark.parametrize("after", [")", ", b)"])
    def test_function_variable_inside_argument_list(self, after):
        candidate = suggestion("var", "less", "func(i int, j int) bool")
        assert SnippetSynthesizer().synthesize(candidate, after, WITH_TYPES) is None

    def test_function_variable_call_snippet(self):
        candidate = suggestion("var", "less", "func(i int, j int) bool")
        snippet = SnippetSynthesizer().synthesize(candidate, "", WITH_TYPES)
        assert snippet.value == "less(${1:i int}, ${2:j int})"

    def test_plain_variable_has_no_snippet(self):
        assert SnippetSynthesizer().synthesize(suggestion("var", "count", "int"), "", WITH_TYPES) is None


class TestCallbackSnippets:
    """Function-literal snippets for function types."""

    def test_named_parameters(self):
        candidate = suggestion("type", "HandlerFunc", "func(w http.ResponseWriter, r *http.Request)")
        snippet = SnippetSynthesizer().synthesize(candidate, "", WITH_TYPES)
        assert snippet.value == (
            "HandlerFunc(func(${1:w} http.ResponseWriter, ${2:r} *http.Request) {\n\t$3\n})"
        )

    def test_unnamed_parameters_get_argument_names(self):
        candidate = suggestion("type", "Pred", "func(int) bool")
        snippet = SnippetSynthesizer().synthesize(candidate, "", WITH_TYPES)
        assert snippet.value == "Pred(func(${1:arg1} int) {\n\t$2\n}) bool"

    def test_callback_needs_typed_snippets(self):
        candidate = suggestion("type", "Pred", "func(int) bool")
        assert SnippetSynthesizer().synthesize(candidate, "", WITHOUT_TYPES) is None


class TestMethodStub:
    """Method skeletons for user types at column 0."""

    def test_stub_for_user_type(self):
        item = SnippetSynthesizer().method_stub_item(suggestion("type", "Server", "struct"), 0)

        assert item.label == "Server method"
        assert item.kind is CompletionItemKind.SNIPPET
        assert item.filter_text == "Server"
        assert item.sort_key == "b"
        assert item.insert_text.value == "func (s *Server) ${1:methodName}(${2}) ${3} {\n\t$0\n}"

    def test_no_stub_away_from_line_start(self):
        assert SnippetSynthesizer().method_stub_item(suggestion("type", "Server", "struct"), 4) is None

    def test_no_stub_for_builtin_type(self):
        assert SnippetSynthesizer().method_stub_item(suggestion("type", "string", "built-in"), 0) is None

    def test_no_stub_for_functions(self):
        assert SnippetSynthesizer().method_stub_item(suggestion("func", "Serve", "func()"), 0) is None
