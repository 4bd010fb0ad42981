"""
Suggestion merger: the completion orchestrator.

Coordinates context classification, the gocode run, snippet synthesis, the
speculative re-import flow and the locally known candidates (keywords,
unimported packages, package clauses) into one ranked, deduplicated list.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Iterable

from gocomplete.domain.exceptions import StaleServerProcess, ToolMissing, ToolOutdated
from gocomplete.domain.golang import KEYWORDS
from gocomplete.domain.prelude import PACKAGE_CLAUSE_RE, parse_file_prelude
from gocomplete.domain.protocols import (
    AnalysisResult,
    Analyzer,
    ImportEditProvider,
    Notifier,
    OptionsHandshake,
    PackageNameGuesser,
    PackageRootResolver,
)
from gocomplete.domain.types import (
    Command,
    CompletionItem,
    CompletionItemKind,
    Range,
    SuggestionClass,
    TextEdit,
    kind_from_class,
)
from gocomplete.logger import get_logger
from gocomplete.utils import byte_length

from .context import ContextClassifier
from .packages import PackageIndex, PackageIndexCache, PackageMatcher
from .parser import SuggestionParser
from .request import CompletionRequest
from .snippets import SnippetSynthesizer

logger = get_logger("merger")

__all__ = ["SuggestionMerger", "resolve_items", "ANALYZER_SORT_KEY"]

ANALYZER_SORT_KEY = "a"
TRIGGER_SUGGEST_COMMAND = "editor.action.triggerSuggest"
STALE_SERVER_MESSAGE = (
    "Auto-completion feature failed as an older gocode process is still running. "
    "Please kill the running process for gocode and try again."
)

_IMPORT_OR_PACKAGE_LINE_RE = re.compile(r"^\s*(import|package)\s+")


def resolve_items(items: Iterable[CompletionItem]) -> list[CompletionItem]:
    """Drop repeated labels (first one wins) and order by effective sort text."""
    seen: set[str] = set()
    unique = []
    for item in items:
        if item.label in seen:
            continue
        seen.add(item.label)
        unique.append(item)
    return sorted(unique, key=lambda item: item.effective_sort_text)


def _line_start_offset(text: str, line: int) -> int:
    offset = 0
    for index, content in enumerate(text.split("\n")):
        if index == line:
            return offset
        offset += len(content) + 1
    return len(text)


class SuggestionMerger:
    """Produces the completion list for one request.

    Session state (handshake, package index, the stale-server warning) lives
    on the collaborators and on this object; requests themselves are
    independent.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        options: OptionsHandshake,
        index_cache: PackageIndexCache,
        notifier: Notifier,
        import_editor: ImportEditProvider,
        package_guesser: PackageNameGuesser,
        root_resolver: PackageRootResolver,
        classifier: ContextClassifier | None = None,
        parser: SuggestionParser | None = None,
        synthesizer: SnippetSynthesizer | None = None,
    ) -> None:
        self._analyzer = analyzer
        self._options = options
        self._index_cache = index_cache
        self._matcher = PackageMatcher(index_cache)
        self._notifier = notifier
        self._import_editor = import_editor
        self._package_guesser = package_guesser
        self._root_resolver = root_resolver
        self._classifier = classifier or ContextClassifier()
        self._parser = parser or SuggestionParser()
        self._synthesizer = synthesizer or SnippetSynthesizer()
        self._stale_warning_shown = False

    @property
    def matcher(self) -> PackageMatcher:
        return self._matcher

    async def complete(self, request: CompletionRequest) -> list[CompletionItem]:
        """
        Run the full pipeline for ``request``.

        Raises:
            AnalyzerError: Any classified gocode failure, after the user was
                notified where that applies
        """
        decision = self._classifier.classify(request)
        if not decision.should_analyze:
            logger.debug(f"Completion short-circuited: {decision.mode.value}")
            return decision.items

        config = request.config
        _, index = await asyncio.gather(
            self._options.ensure_configured(config),
            self._index_cache.refresh(request.filename),
        )

        items = await self._suggest(request, request.text, request.byte_offset)

        if not items and not request.in_string and request.line_prefix.endswith("."):
            items = await self._speculative_import(request, index)

        if self._wants_unimported_packages(request):
            seen = {item.label for item in items}
            package_root = self._root_resolver.package_root(request.filename)
            items += self._matcher.match_by_prefix(request.current_word, seen, package_root, index)

        if not PACKAGE_CLAUSE_RE.search(request.text):
            items += await self._package_clause_items(request.filename)

        resolved = resolve_items(items)
        logger.debug(f"Returning {len(resolved)} completion item(s) for {request.filename}")
        return resolved

    async def _suggest(self, request: CompletionRequest, source: str, byte_offset: int) -> list[CompletionItem]:
        """gocode candidates for ``source`` plus matching keywords."""
        result = await self._analyze(request, source, byte_offset)
        suggestions = self._parser.parse(result.stdout, in_string=request.in_string)

        items: list[CompletionItem] = []
        for suggestion in suggestions:
            item = CompletionItem(
                label=suggestion.name,
                kind=kind_from_class(suggestion.class_),
                detail=suggestion.type,
                sort_key=ANALYZER_SORT_KEY,
            )
            if request.in_string and suggestion.class_ == SuggestionClass.IMPORT:
                item.text_edit = self._import_path_edit(request, suggestion.name)
            snippet = self._synthesizer.synthesize(suggestion, request.text_after_cursor, request.config)
            if snippet is not None:
                item.insert_text = snippet

            stub = self._synthesizer.method_stub_item(suggestion, request.word_start)
            if stub is not None:
                items.append(stub)
            items.append(item)

        # gocode does not propose keywords
        if request.current_word and not request.in_string:
            items += [
                CompletionItem(label=keyword, kind=CompletionItemKind.KEYWORD)
                for keyword in KEYWORDS
                if keyword.startswith(request.current_word)
            ]
        return items

    async def _analyze(self, request: CompletionRequest, source: str, byte_offset: int) -> AnalysisResult:
        try:
            return await self._analyzer.analyze(
                source,
                request.filename,
                byte_offset,
                legacy=self._options.legacy,
                config=request.config,
            )
        except ToolMissing as e:
            await self._notifier.prompt_for_missing_tool(e.tool)
            raise
        except ToolOutdated as e:
            await self._notifier.prompt_for_updating_tool(e.tool)
            raise
        except StaleServerProcess:
            if not self._stale_warning_shown:
                self._stale_warning_shown = True
                await self._notifier.show_error(STALE_SERVER_MESSAGE)
            raise

    @staticmethod
    def _import_path_edit(request: CompletionRequest, import_path: str) -> TextEdit:
        line = request.position.line
        start = request.line_prefix.rfind('"') + 1
        return TextEdit(
            range=Range.from_coordinates(line, start, line, request.position.character),
            new_text=import_path,
        )

    async def _speculative_import(self, request: CompletionRequest, index: PackageIndex) -> list[CompletionItem]:
        """Re-run gocode as if the package before the trailing dot were imported."""
        paths = self._matcher.resolve_trailing_identifier(request.line_prefix, index)
        if len(paths) == 1:
            return await self._complete_with_import(request, paths[0])
        if len(paths) > 1:
            expression = request.line_prefix[:-1].strip()
            logger.debug(f"Ambiguous package '{expression}': {paths}")
            return [
                CompletionItem(
                    label=f"{expression} ({path})",
                    kind=CompletionItemKind.MODULE,
                    detail=path,
                    insert_text="",
                    additional_text_edits=self._import_editor.import_edits(request.text, path),
                    command=Command(title="Trigger Suggest", command=TRIGGER_SUGGEST_COMMAND),
                )
                for path in paths
            ]
        return []

    async def _complete_with_import(self, request: CompletionRequest, import_path: str) -> list[CompletionItem]:
        prelude = parse_file_prelude(request.text)
        if prelude.package is None:
            return []

        insert_at = _line_start_offset(request.text, prelude.package.line + 1)
        text_to_add = f'import "{import_path}"\n'
        if insert_at == len(request.text) and not request.text.endswith("\n"):
            text_to_add = "\n" + text_to_add
        source = request.text[:insert_at] + text_to_add + request.text[insert_at:]

        byte_offset = request.byte_offset
        if byte_length(request.text[:insert_at]) <= byte_offset:
            # gocode offsets are in bytes, so shift by the encoded length
            byte_offset += byte_length(text_to_add)

        logger.debug(f"Retrying gocode with hypothetical import of {import_path}")
        items = await self._suggest(request, source, byte_offset)
        edits = self._import_editor.import_edits(request.text, import_path)
        for item in items:
            item.additional_text_edits = list(edits)
        return items

    @staticmethod
    def _wants_unimported_packages(request: CompletionRequest) -> bool:
        return (
            request.config.autocomplete_unimported_packages
            and not request.in_string
            and not _IMPORT_OR_PACKAGE_LINE_RE.match(request.line_text)
        )

    async def _package_clause_items(self, filename: str) -> list[CompletionItem]:
        try:
            names = await self._package_guesser.guess_package_names(filename)
        except OSError as e:
            logger.debug(f"Could not guess package name for {filename}: {e}")
            return []
        return [
            CompletionItem(
                label=f"package {name}",
                kind=CompletionItemKind.SNIPPET,
                insert_text=f"package {name}\n\n",
            )
            for name in names
        ]
