"""
Context classification.

Decides, from the current line alone, whether gocode should be asked at all:
completing in the middle of a comment, right after a closing quote, or on a
bare number only produces noise from an expensive external process.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from gocomplete.domain.types import CompletionItem, kind_from_class
from gocomplete.logger import get_logger

from .request import CompletionRequest

logger = get_logger("context")

LINE_COMMENT_RE = re.compile(r"^\s*//\s+")
EXPORTED_MEMBER_RE = re.compile(r"(const|func|type|var)(\s+\(.*\))?\s+([A-Z]\w*)")
NUMERAL_RE = re.compile(r"^\d+$")


class ContextMode(Enum):
    """How the completion request should be served."""

    EXPORTED_MEMBER_DOC = "exported_member_doc"
    SUPPRESSED_IN_COMMENT = "suppressed_in_comment"
    SUPPRESSED_AT_STRING = "suppressed_at_string"
    NUMERAL_PREFIX = "numeral_prefix"
    NORMAL = "normal"


@dataclass(slots=True)
class ContextDecision:
    """Outcome of classification; ``items`` is the full answer unless mode is NORMAL."""

    mode: ContextMode
    items: list[CompletionItem] = field(default_factory=list)

    @property
    def should_analyze(self) -> bool:
        return self.mode is ContextMode.NORMAL


def find_comment_start(line: str) -> int:
    """Index of the first ``//`` that is not inside a string or rune literal, or -1."""
    quote: str | None = None
    index = 0
    while index < len(line):
        char = line[index]
        if quote is not None:
            if char == "\\" and quote != "`":
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in "\"'`":
            quote = char
        elif line.startswith("//", index):
            return index
        index += 1
    return -1


def exported_member_item(next_line: str) -> CompletionItem | None:
    """Item naming the exported declaration on ``next_line``, if there is one."""
    match = EXPORTED_MEMBER_RE.search(next_line.strip())
    if match is None:
        return None
    return CompletionItem(label=match.group(3), kind=kind_from_class(match.group(1)))


class ContextClassifier:
    """Classifies the cursor context of a completion request."""

    def classify(self, request: CompletionRequest) -> ContextDecision:
        prefix = request.line_prefix

        # doc comment right above an exported declaration: offer its name
        if LINE_COMMENT_RE.match(prefix) and request.next_line is not None:
            item = exported_member_item(request.next_line)
            logger.debug(f"Doc comment context, exported member: {item.label if item else None}")
            return ContextDecision(ContextMode.EXPORTED_MEMBER_DOC, [item] if item else [])

        comment_start = find_comment_start(request.line_text)
        if 0 <= comment_start < request.position.character:
            return ContextDecision(ContextMode.SUPPRESSED_IN_COMMENT)

        if not request.in_string and prefix.endswith('"'):
            return ContextDecision(ContextMode.SUPPRESSED_AT_STRING)

        if NUMERAL_RE.match(request.current_word):
            return ContextDecision(ContextMode.NUMERAL_PREFIX)

        return ContextDecision(ContextMode.NORMAL)
