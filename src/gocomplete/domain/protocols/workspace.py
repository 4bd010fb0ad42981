"""Workspace collaborator protocols.

Package discovery, module detection, workspace roots, import edits and
package-name guessing are services the completion core consumes; defaults
live in :mod:`gocomplete.infrastructure.workspace`.
"""

from typing import Mapping, Protocol

from gocomplete.domain.types import TextEdit

__all__ = [
    "PackageSource",
    "ModuleDetector",
    "PackageRootResolver",
    "ImportEditProvider",
    "PackageNameGuesser",
]


class PackageSource(Protocol):
    """Lists importable packages as ``{import path: package name}``."""

    async def importable_packages(self, filename: str, module_aware: bool) -> Mapping[str, str]:
        ...


class ModuleDetector(Protocol):
    """Decides whether a directory belongs to a module-aware workspace."""

    async def is_module_aware(self, directory: str) -> bool:
        ...


class PackageRootResolver(Protocol):
    """Import path prefix of the package tree the current file lives in."""

    def package_root(self, filename: str) -> str | None:
        ...


class ImportEditProvider(Protocol):
    """Builds the edits that add ``import "<path>"`` to a document."""

    def import_edits(self, document_text: str, import_path: str) -> list[TextEdit]:
        ...


class PackageNameGuesser(Protocol):
    """Proposes package clause names for a file without one."""

    async def guess_package_names(self, filename: str) -> list[str]:
        ...
