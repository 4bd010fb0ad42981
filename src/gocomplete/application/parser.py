"""Decoding of gocode's ``-f=json`` output."""

from __future__ import annotations

import json

from pydantic import TypeAdapter, ValidationError

from gocomplete.domain.exceptions import MalformedOutput
from gocomplete.domain.types import RawSuggestion, SuggestionClass
from gocomplete.logger import get_logger

logger = get_logger("parser")

_SUGGESTIONS = TypeAdapter(list[RawSuggestion])


class SuggestionParser:
    """Turns gocode's stdout into typed suggestion records."""

    def parse(self, stdout: bytes | str, *, in_string: bool = False) -> list[RawSuggestion]:
        """
        Decode ``[position, [{class, name, type}, ...]]``.

        gocode prints ``[]`` (or ``null``) when it has nothing to offer; both
        mean no suggestions. Inside a string literal only import paths are
        meaningful, so every other class is dropped.

        Raises:
            MalformedOutput: If the payload is not valid JSON of that shape
        """
        if isinstance(stdout, bytes):
            stdout = stdout.decode("utf-8", errors="replace")

        try:
            payload = json.loads(stdout)
        except json.JSONDecodeError as e:
            logger.error(f"gocode output is not valid JSON: {e}")
            raise MalformedOutput(f"Cannot decode gocode output: {e}") from e

        if payload is None or payload == []:
            return []
        if not isinstance(payload, list) or len(payload) != 2 or not isinstance(payload[1], list):
            logger.error(f"Unexpected gocode payload shape: {stdout[:200]!r}")
            raise MalformedOutput("gocode output is not a [position, suggestions] pair")

        try:
            suggestions = _SUGGESTIONS.validate_python(payload[1])
        except ValidationError as e:
            logger.error(f"Invalid gocode suggestion record: {e}")
            raise MalformedOutput(f"Invalid gocode suggestion record: {e}") from e

        if in_string:
            suggestions = [s for s in suggestions if s.class_ == SuggestionClass.IMPORT]

        logger.debug(f"Parsed {len(suggestions)} suggestion(s) from gocode")
        return suggestions
