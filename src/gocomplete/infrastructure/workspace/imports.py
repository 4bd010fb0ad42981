"""Text edits that add an import to a Go file."""

import re

from gocomplete.domain.prelude import parse_file_prelude
from gocomplete.domain.types import Range, TextEdit

_IMPORT_KEYWORD_RE = re.compile(r"^\s*import\s*")


def _insert(line: int, text: str) -> TextEdit:
    return TextEdit(range=Range.from_coordinates(line, 0, line, 0), new_text=text)


class PreludeImportEditor:
    """Adds ``import "<path>"`` next to the existing import declarations."""

    def import_edits(self, document_text: str, import_path: str) -> list[TextEdit]:
        prelude = parse_file_prelude(document_text)
        lines = document_text.split("\n")
        multis = [decl for decl in prelude.imports if decl.kind == "multi"]

        if multis:
            last = multis[-1]
            if last.end == -1:
                return [_insert(last.start, f'import "{import_path}"\n')]
            # first in the block so goimports can reorder it
            return [_insert(last.start + 1, f'\t"{import_path}"\n')]

        if prelude.imports:
            # collapse single-line imports into one block
            edits = [_insert(prelude.imports[0].start, f'import (\n\t"{import_path}"\n')]
            for decl in prelude.imports:
                current = lines[decl.start].rstrip("\r")
                edits.append(
                    TextEdit(
                        range=Range.from_coordinates(decl.start, 0, decl.start, len(current)),
                        new_text=_IMPORT_KEYWORD_RE.sub("\t", current, count=1),
                    )
                )
            edits.append(_insert(prelude.imports[-1].end + 1, ")\n"))
            return edits

        if prelude.package is not None:
            return [_insert(prelude.package.line + 1, f'\nimport (\n\t"{import_path}"\n)\n')]
        return []
