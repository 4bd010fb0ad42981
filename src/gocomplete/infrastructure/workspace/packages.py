"""Importable package listing backed by the ``gopkgs`` tool."""

import asyncio
import os

from gocomplete.config import SuggestConfig
from gocomplete.infrastructure.gocode.process import run_tool
from gocomplete.infrastructure.gocode.tools import get_bin_path, tools_env
from gocomplete.logger import get_logger

logger = get_logger("workspace.packages")

GOPKGS_FORMAT = "{{.Name}};{{.ImportPath}}"


def parse_gopkgs_output(output: str) -> dict[str, str]:
    """
    Parse ``name;importpath`` lines into ``{import path: name}``.

    ``main`` packages and ``internal`` trees are not importable from an
    arbitrary file and are skipped.
    """
    packages: dict[str, str] = {}
    for line in output.splitlines():
        name, sep, import_path = line.strip().partition(";")
        if not sep or not name or not import_path:
            continue
        if name == "main" or "/internal/" in f"/{import_path}/":
            continue
        packages[import_path] = name
    return packages


class GopkgsPackageSource:
    """Lists packages with ``gopkgs``; in module mode the file's directory is the work dir."""

    def __init__(self, config: SuggestConfig | None = None) -> None:
        self._config = config or SuggestConfig()

    async def importable_packages(self, filename: str, module_aware: bool) -> dict[str, str]:
        gopkgs = get_bin_path("gopkgs", self._config)
        if not os.path.isabs(gopkgs):
            logger.warning("gopkgs not installed, unimported package suggestions disabled")
            return {}

        args = ["-format", GOPKGS_FORMAT]
        if module_aware:
            args += ["-workDir", os.path.dirname(os.path.abspath(filename))]
        try:
            output = await run_tool(gopkgs, args, tools_env(self._config), timeout=self._config.analyzer_timeout * 3)
        except (OSError, asyncio.TimeoutError) as e:
            logger.warning(f"gopkgs failed to run: {e}")
            return {}
        if output.returncode != 0:
            logger.warning(f"gopkgs exited with {output.returncode}: {output.stderr.strip()}")
            return {}
        return parse_gopkgs_output(output.stdout_text)
