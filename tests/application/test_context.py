from gocomplete.application.context import ContextClassifier, ContextMode, find_comment_start
from gocomplete.domain.types import CompletionItemKind

from stubs import make_request


def classify(source: str):
    return ContextClassifier().classify(make_request(source))


def test_doc_comment_offers_exported_function_name() -> None:
    decision = classify("package a\n\n// <|>\nfunc Serve() {}\n")

    assert decision.mode is ContextMode.EXPORTED_MEMBER_DOC
    assert not decision.should_analyze
    assert [(item.label, item.kind) for item in decision.items] == [("Serve", CompletionItemKind.FUNCTION)]


def test_doc_comment_above_method_uses_method_name() -> None:
    decision = classify("package a\n\n// <|>\nfunc (s *Server) Close() error {\n")
    assert [item.label for item in decision.items] == ["Close"]


def test_doc_comment_above_exported_type() -> None:
    decision = classify("package a\n\n// <|>\ntype Config struct {\n")
    assert [(item.label, item.kind) for item in decision.items] == [("Config", CompletionItemKind.CLASS)]


def test_doc_comment_above_unexported_member_is_empty() -> None:
    decision = classify("package a\n\n// <|>\nfunc helper() {}\n")
    assert decision.mode is ContextMode.EXPORTED_MEMBER_DOC
    assert decision.items == []


def test_comment_on_last_line_is_suppressed() -> None:
    decision = classify("package a\n// <|>")
    assert decision.mode is ContextMode.SUPPRESSED_IN_COMMENT


def test_trailing_comment_is_suppressed() -> None:
    decision = classify("package a\n\nvar x = 1 // no<|>\n")
    assert decision.mode is ContextMode.SUPPRESSED_IN_COMMENT
    assert decision.items == []


def test_cursor_before_comment_is_analyzed() -> None:
    decision = classify("package a\n\nvar x = fm<|> // note\n")
    assert decision.mode is ContextMode.NORMAL


def test_slashes_inside_string_are_not_a_comment() -> None:
    decision = classify('package a\n\nvar u = "http://<|>"\n')
    assert decision.should_analyze


def test_right_after_closing_quote_is_suppressed() -> None:
    decision = classify('package a\n\nfunc f() {\n\tfmt.Println("hi"<|>)\n}\n')
    assert decision.mode is ContextMode.SUPPRESSED_AT_STRING


def test_numeral_prefix_is_suppressed() -> None:
    decision = classify("package a\n\nvar x = 12<|>\n")
    assert decision.mode is ContextMode.NUMERAL_PREFIX
    assert decision.items == []


def test_identifier_with_digits_is_analyzed() -> None:
    decision = classify("package a\n\nvar x = a12<|>\n")
    assert decision.mode is ContextMode.NORMAL


def test_find_comment_start_skips_literals() -> None:
    assert find_comment_start('s := "a//b" // c') == 12
    assert find_comment_start("r := '/'") == -1
    assert find_comment_start("q := `//` + x") == -1
    assert find_comment_start('e := "\\"//"') == -1
