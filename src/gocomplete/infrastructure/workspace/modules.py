"""Module-mode detection via ``go env GOMOD``."""

import asyncio
import os

from gocomplete.config import SuggestConfig
from gocomplete.infrastructure.gocode.process import run_tool
from gocomplete.infrastructure.gocode.tools import get_bin_path, tools_env
from gocomplete.logger import get_logger

logger = get_logger("workspace.modules")


class GoEnvModuleDetector:
    """A directory is module-aware when ``go env GOMOD`` names a go.mod file."""

    def __init__(self, config: SuggestConfig | None = None) -> None:
        self._config = config or SuggestConfig()

    async def is_module_aware(self, directory: str) -> bool:
        go = get_bin_path("go", self._config)
        if not os.path.isabs(go) or not os.path.isdir(directory):
            return False
        try:
            output = await run_tool(go, ["env", "GOMOD"], tools_env(self._config), timeout=10.0, cwd=directory)
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug(f"go env GOMOD failed in {directory}: {e}")
            return False
        gomod = output.stdout_text.strip()
        module_aware = output.returncode == 0 and gomod not in ("", os.devnull)
        logger.debug(f"Module mode for {directory}: {module_aware}")
        return module_aware
