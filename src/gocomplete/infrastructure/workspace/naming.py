"""Package clause name guessing for files that have none yet."""

import os
import re

_IDENTIFIER_RE = re.compile(r"[a-zA-Z_]\w*")


def guess_package_names(filename: str) -> list[str]:
    """
    Propose package names for ``filename`` from its location.

    ``main.go`` (or any file next to one) belongs to ``main``; otherwise the
    last ``.``/``-`` separated segment of the directory name, ignoring ``go``,
    plus the external test package for ``_test.go`` files.
    """
    base = os.path.basename(filename)
    if base == "main.go":
        return ["main"]

    directory = os.path.dirname(os.path.abspath(filename))
    segments = [segment for segment in re.split(r"[.-]", os.path.basename(directory)) if segment != "go"]
    if not segments or not _IDENTIFIER_RE.search(segments[-1]):
        return []
    proposed = segments[-1]

    if os.path.isfile(os.path.join(directory, "main.go")):
        return ["main"]
    if base.endswith("_test.go"):
        return [proposed, f"{proposed}_test"]
    return [proposed]


class FilenamePackageGuesser:
    async def guess_package_names(self, filename: str) -> list[str]:
        return guess_package_names(filename)
