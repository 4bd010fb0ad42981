"""
Importable package index and matching.

The index maps import path to package name for the directory being edited.
It is rebuilt only when the directory changes and is swapped as a whole, so
a request always reads one complete snapshot.
"""

from __future__ import annotations

import asyncio
import os
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from gocomplete.domain.protocols import ModuleDetector, PackageSource
from gocomplete.domain.types import Command, CompletionItem, CompletionItemKind
from gocomplete.logger import get_logger

logger = get_logger("packages")

IMPORT_COMMAND = "go.import.add"
STDLIB_SORT_KEY = "za"
SAME_ROOT_SORT_KEY = "zb"
OTHER_SORT_KEY = "zc"

_TRAILING_IDENTIFIER_RE = re.compile(r"(\w+)\.$")


@dataclass(frozen=True, slots=True)
class PackageIndex:
    """Immutable snapshot of importable packages for one directory context."""

    directory: str | None = None
    module_aware: bool = False
    packages: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, directory: str, module_aware: bool, packages: Mapping[str, str]) -> "PackageIndex":
        return cls(directory, module_aware, MappingProxyType(dict(packages)))

    def __len__(self) -> int:
        return len(self.packages)


class PackageIndexCache:
    """Holds the current :class:`PackageIndex` and refreshes it on directory change.

    Module awareness is re-detected whenever the directory changes. At most
    one rebuild per (directory, module mode) context is in flight; concurrent
    callers await the same task. A rebuild only becomes the shared snapshot
    if its directory is still the most recently requested one.
    """

    def __init__(self, source: PackageSource, detector: ModuleDetector) -> None:
        self._source = source
        self._detector = detector
        self._snapshot = PackageIndex()
        self._latest_directory: str | None = None
        self._inflight: dict[tuple[str, bool], asyncio.Task[PackageIndex]] = {}

    @property
    def snapshot(self) -> PackageIndex:
        return self._snapshot

    async def refresh(self, filename: str) -> PackageIndex:
        """Make sure the snapshot matches the directory of ``filename``."""
        directory = os.path.dirname(os.path.abspath(filename))
        self._latest_directory = directory
        if directory == self._snapshot.directory:
            return self._snapshot

        module_aware = await self._detector.is_module_aware(directory)
        context = (directory, module_aware)
        task = self._inflight.get(context)
        if task is None:
            task = asyncio.create_task(self._rebuild(filename, directory, module_aware))
            self._inflight[context] = task
            task.add_done_callback(lambda _: self._inflight.pop(context, None))
        return await asyncio.shield(task)

    async def _rebuild(self, filename: str, directory: str, module_aware: bool) -> PackageIndex:
        logger.debug(f"Rebuilding package index: dir={directory}, module_aware={module_aware}")
        try:
            packages = await self._source.importable_packages(filename, module_aware)
        except Exception as e:
            logger.warning(f"Failed to list importable packages for {directory}: {e}")
            return self._snapshot

        snapshot = PackageIndex.build(directory, module_aware, packages)
        if directory != self._latest_directory:
            # a newer request moved to another directory while this one ran
            logger.debug(f"Discarding package index for {directory}, now serving {self._latest_directory}")
            return snapshot
        self._snapshot = snapshot
        logger.info(f"Package index ready: {len(snapshot)} package(s) for {directory}")
        return snapshot


def package_sort_key(import_path: str, package_root: str | None) -> str:
    """Tier unimported packages: standard library, same root, everything else."""
    if "." not in import_path:
        return STDLIB_SORT_KEY
    if package_root and import_path.startswith(package_root):
        return SAME_ROOT_SORT_KEY
    return OTHER_SORT_KEY


class PackageMatcher:
    """Matches partial identifiers against the current package index."""

    def __init__(self, cache: PackageIndexCache) -> None:
        self._cache = cache

    def match_by_prefix(
        self,
        word: str,
        exclude_labels: Iterable[str] = (),
        package_root: str | None = None,
        index: PackageIndex | None = None,
    ) -> list[CompletionItem]:
        """Completion items for packages whose name starts with ``word``.

        ``index`` defaults to the cache's current snapshot.
        """
        if not word:
            return []

        excluded = set(exclude_labels)
        packages = (index if index is not None else self._cache.snapshot).packages
        items = []
        for import_path, name in packages.items():
            if not name.startswith(word) or name in excluded:
                continue
            items.append(
                CompletionItem(
                    label=name,
                    kind=CompletionItemKind.MODULE,
                    detail=import_path,
                    documentation="Imports the package",
                    insert_text=name,
                    command=Command(title="Import Package", command=IMPORT_COMMAND, arguments=[import_path]),
                    sort_key=package_sort_key(import_path, package_root),
                )
            )
        return items

    def resolve_trailing_identifier(self, line_prefix: str, index: PackageIndex | None = None) -> list[str]:
        """Import paths whose package name is the identifier before a trailing dot."""
        match = _TRAILING_IDENTIFIER_RE.search(line_prefix)
        if match is None:
            return []
        name = match.group(1)
        packages = (index if index is not None else self._cache.snapshot).packages
        return [path for path, pkg_name in packages.items() if pkg_name == name]
