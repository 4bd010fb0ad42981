"""
gocode process adapter.

Runs ``gocode -f=json autocomplete <file> <offset>`` over the in-memory
document and classifies how the process failed, if it did.
"""

import asyncio
import os

from gocomplete.config import SuggestConfig
from gocomplete.domain.exceptions import (
    AnalysisFailed,
    AnalyzerError,
    StaleServerProcess,
    ToolMissing,
    ToolOutdated,
)
from gocomplete.domain.protocols import AnalysisResult
from gocomplete.logger import get_logger

from .process import run_tool
from .tools import get_bin_path, tools_env

logger = get_logger("gocode.analyzer")

TOOL_NAME = "gocode"
STALE_SERVER_MARKER = "rpc: can't find service Server.AutoComplete"
UNKNOWN_FLAG_PREFIX = "flag provided but not defined"

# gocode cannot complete for a cross-compilation target, force the host one
CROSS_COMPILE_OVERRIDES = {"GOOS": "", "GOARCH": ""}


class GocodeAnalyzer:
    """Implements the :class:`~gocomplete.domain.protocols.Analyzer` protocol with gocode.

    Each call is a single attempt; nothing is retried.
    """

    def __init__(self, config: SuggestConfig | None = None) -> None:
        self._config = config or SuggestConfig()

    def build_args(self, filename: str, byte_offset: int, *, legacy: bool) -> list[str]:
        flags = ["-f=json"]
        if legacy:
            flags.append("-builtin")
        return [*flags, "autocomplete", filename, str(byte_offset)]

    def build_env(self, config: SuggestConfig | None = None) -> dict[str, str]:
        env = tools_env(config or self._config)
        env.update(CROSS_COMPILE_OVERRIDES)
        return env

    async def analyze(
        self,
        source: str,
        filename: str,
        byte_offset: int,
        *,
        legacy: bool = False,
        config: SuggestConfig | None = None,
    ) -> AnalysisResult:
        config = config or self._config
        gocode = get_bin_path(TOOL_NAME, config)
        if not os.path.isabs(gocode):
            logger.warning("gocode executable not found")
            raise ToolMissing("gocode is not installed", tool=TOOL_NAME)

        args = self.build_args(filename, byte_offset, legacy=legacy)
        try:
            output = await run_tool(
                gocode,
                args,
                self.build_env(config),
                input_text=source,
                timeout=config.analyzer_timeout,
            )
        except FileNotFoundError as e:
            logger.warning(f"gocode executable vanished: {e}")
            raise ToolMissing(f"Cannot run {gocode}", tool=TOOL_NAME) from e
        except asyncio.TimeoutError as e:
            raise AnalysisFailed(f"gocode timed out after {config.analyzer_timeout}s", tool=TOOL_NAME) from e
        except OSError as e:
            logger.error(f"Failed to spawn gocode: {e}")
            raise AnalysisFailed(f"Cannot run {gocode}: {e}", tool=TOOL_NAME) from e

        if output.returncode != 0:
            raise self.classify_failure(output.returncode, output.stderr)

        return AnalysisResult(stdout=output.stdout, returncode=output.returncode, stderr=output.stderr)

    @staticmethod
    def classify_failure(returncode: int, stderr: str) -> AnalyzerError:
        """Map a nonzero gocode exit onto the failure taxonomy."""
        if STALE_SERVER_MARKER in stderr:
            logger.warning("An older gocode server process is still running")
            return StaleServerProcess("A stale gocode process is running", tool=TOOL_NAME, stderr=stderr)
        if stderr.startswith(UNKNOWN_FLAG_PREFIX):
            logger.warning(f"gocode rejected a flag: {stderr.strip()}")
            return ToolOutdated("gocode does not support the requested flags", tool=TOOL_NAME, stderr=stderr)
        logger.debug(f"gocode exited with {returncode}: {stderr.strip()}")
        return AnalysisFailed(f"gocode exited with status {returncode}", tool=TOOL_NAME, stderr=stderr)
