"""
Caller-facing completion provider.

Wires the default collaborators (gocode, gopkgs, the JSON settings store,
the logging notifier) into a :class:`SuggestionMerger`; editor integrations
pass their own implementations instead.
"""

from __future__ import annotations

import asyncio

from gocomplete.application.merger import SuggestionMerger
from gocomplete.application.packages import PackageIndexCache
from gocomplete.application.request import build_request
from gocomplete.config import SuggestConfig
from gocomplete.domain.document import TextDocument
from gocomplete.domain.exceptions import AnalyzerError, MalformedOutput
from gocomplete.domain.protocols import (
    Analyzer,
    ImportEditProvider,
    ModuleDetector,
    Notifier,
    PackageNameGuesser,
    PackageRootResolver,
    PackageSource,
    SettingsStore,
)
from gocomplete.domain.types import CompletionItem, Position
from gocomplete.infrastructure.gocode import GocodeAnalyzer, GocodeOptions
from gocomplete.infrastructure.notifier import LoggingNotifier
from gocomplete.infrastructure.state import InMemorySettingsStore
from gocomplete.infrastructure.workspace import (
    FilenamePackageGuesser,
    GoEnvModuleDetector,
    GopathPackageRoot,
    GopkgsPackageSource,
    PreludeImportEditor,
)
from gocomplete.logger import get_logger

logger = get_logger("provider")

__all__ = ["GoCompletionProvider"]


class GoCompletionProvider:
    """One completion session: owns the handshake state and the package index.

    Example:
        >>> provider = GoCompletionProvider(SuggestConfig(autocompleteUnimportedPackages=True))
        >>> document = TextDocument(source, filename="/work/src/app/main.go")
        >>> items = await provider.provide_completions(document, Position(line=5, character=9))
    """

    def __init__(
        self,
        config: SuggestConfig | None = None,
        *,
        analyzer: Analyzer | None = None,
        settings: SettingsStore | None = None,
        notifier: Notifier | None = None,
        package_source: PackageSource | None = None,
        module_detector: ModuleDetector | None = None,
        import_editor: ImportEditProvider | None = None,
        package_guesser: PackageNameGuesser | None = None,
        root_resolver: PackageRootResolver | None = None,
    ) -> None:
        self.config = config or SuggestConfig()
        notifier = notifier or LoggingNotifier()
        self.options = GocodeOptions(settings or InMemorySettingsStore(), notifier)
        self.index_cache = PackageIndexCache(
            package_source or GopkgsPackageSource(self.config),
            module_detector or GoEnvModuleDetector(self.config),
        )
        self.merger = SuggestionMerger(
            analyzer=analyzer or GocodeAnalyzer(self.config),
            options=self.options,
            index_cache=self.index_cache,
            notifier=notifier,
            import_editor=import_editor or PreludeImportEditor(),
            package_guesser=package_guesser or FilenamePackageGuesser(),
            root_resolver=root_resolver or GopathPackageRoot(self.config),
        )

    async def provide_completions(
        self,
        document: TextDocument,
        position: Position,
        token: asyncio.Event | None = None,
        config: SuggestConfig | None = None,
    ) -> list[CompletionItem]:
        """
        Completion items for ``position`` in ``document``.

        Classified gocode failures degrade to an empty list (after the user
        was prompted where that applies). A result that arrives after
        ``token`` was set is discarded.

        Raises:
            MalformedOutput: If gocode's output could not be decoded
        """
        request = build_request(document, position, config or self.config)
        try:
            items = await self.merger.complete(request)
        except MalformedOutput:
            raise
        except AnalyzerError as e:
            logger.debug(f"No completions for {document.filename}: {type(e).__name__}: {e}")
            return []

        if token is not None and token.is_set():
            logger.debug("Completion request superseded, discarding result")
            return []
        return items
