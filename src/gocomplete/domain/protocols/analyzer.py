"""Analyzer protocol: the external process that proposes completions."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gocomplete.config import SuggestConfig

__all__ = ["Analyzer", "AnalysisResult", "OptionsHandshake"]


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Fully collected output of one successful analyzer run."""

    stdout: bytes
    returncode: int = 0
    stderr: str = ""


class Analyzer(Protocol):
    """Contract for the gocode process adapter.

    Implementations make exactly one attempt per call and raise one of the
    :mod:`gocomplete.domain.exceptions` classes on failure.
    """

    async def analyze(
        self,
        source: str,
        filename: str,
        byte_offset: int,
        *,
        legacy: bool = False,
        config: "SuggestConfig | None" = None,
    ) -> AnalysisResult:
        """Run the analyzer over ``source`` with the cursor at ``byte_offset``.

        Args:
            source: Full (possibly unsaved) document text, sent on stdin
            filename: Path of the document, used by the tool for context
            byte_offset: UTF-8 byte offset of the cursor
            legacy: True when the tool does not support persistent options
            config: Settings for this request (tool path, timeout)

        Returns:
            The collected process output

        Raises:
            ToolMissing, ToolOutdated, StaleServerProcess, AnalysisFailed
        """
        ...


class OptionsHandshake(Protocol):
    """One-time configuration of the analyzer's persistent options."""

    @property
    def legacy(self) -> bool:
        """True when the analyzer lacks runtime option support."""
        ...

    async def ensure_configured(self, config: "SuggestConfig") -> None:
        """Configure the analyzer once per session; later calls return immediately."""
        ...
