"""Go file prelude parsing: the package clause and import declarations."""

import re
from dataclasses import dataclass, field

__all__ = ["ImportDecl", "PackageClause", "FilePrelude", "parse_file_prelude", "PACKAGE_CLAUSE_RE"]

PACKAGE_CLAUSE_RE = re.compile(r"package\s+(\w+)")

_PACKAGE_LINE_RE = re.compile(r"^\s*package\s+(\w+)")
_MULTI_IMPORT_RE = re.compile(r"^\s*import\s+\(")
_SINGLE_IMPORT_RE = re.compile(r"^\s*import\s+[^(]")
_CLOSE_PAREN_RE = re.compile(r"^\s*\)")
_DECLARATION_RE = re.compile(r"^\s*(func|const|type|var)")


@dataclass(slots=True)
class ImportDecl:
    """An ``import`` declaration; ``end`` is -1 for an unterminated block."""

    kind: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class PackageClause:
    line: int
    name: str


@dataclass(slots=True)
class FilePrelude:
    package: PackageClause | None = None
    imports: list[ImportDecl] = field(default_factory=list)


def parse_file_prelude(text: str) -> FilePrelude:
    """Scan lines up to the first top-level declaration."""
    prelude = FilePrelude()
    for index, line in enumerate(text.split("\n")):
        match = _PACKAGE_LINE_RE.match(line)
        if match:
            prelude.package = PackageClause(line=index, name=match.group(1))
        if _MULTI_IMPORT_RE.match(line):
            prelude.imports.append(ImportDecl("multi", index, -1))
        if _SINGLE_IMPORT_RE.match(line):
            prelude.imports.append(ImportDecl("single", index, index))
        if _CLOSE_PAREN_RE.match(line) and prelude.imports and prelude.imports[-1].end == -1:
            prelude.imports[-1].end = index
        if _DECLARATION_RE.match(line):
            break
    return prelude
