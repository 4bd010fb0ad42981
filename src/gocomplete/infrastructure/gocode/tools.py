"""Locating Go tools and preparing their environment."""

import os
import shutil

from gocomplete.config import SuggestConfig
from gocomplete.logger import get_logger

logger = get_logger("gocode.tools")

__all__ = ["get_bin_path", "tools_env"]

_PATH_OVERRIDE_ENV = {"gocode": "GOCODE_PATH"}


def _executable(directory: str, tool: str) -> str | None:
    for name in (tool, f"{tool}.exe"):
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate
    return None


def get_bin_path(tool: str, config: SuggestConfig | None = None) -> str:
    """
    Resolve the absolute path of ``tool``.

    Lookup order: the configured path (``gocodePath`` / ``GOCODE_PATH`` for
    gocode), ``GOBIN``, ``<entry>/bin`` for each GOPATH entry, then ``PATH``.

    Returns:
        The absolute path, or the bare tool name when nothing was found (the
        caller treats a relative result as "tool missing").
    """
    explicit = None
    if tool == "gocode" and config is not None:
        explicit = config.gocode_path
    explicit = explicit or os.getenv(_PATH_OVERRIDE_ENV.get(tool, ""), "") or None
    if explicit:
        return os.path.abspath(os.path.expanduser(explicit))

    env = tools_env(config)
    search_dirs = []
    if env.get("GOBIN"):
        search_dirs.append(env["GOBIN"])
    for entry in env.get("GOPATH", "").split(os.pathsep):
        if entry:
            search_dirs.append(os.path.join(entry, "bin"))
    for directory in search_dirs:
        found = _executable(directory, tool)
        if found:
            return found

    found = shutil.which(tool, path=env.get("PATH"))
    if found:
        return os.path.abspath(found)

    logger.debug(f"Tool {tool} not found in GOBIN, GOPATH or PATH")
    return tool


def tools_env(config: SuggestConfig | None = None) -> dict[str, str]:
    """Environment for Go tool processes, with the configured GOPATH applied."""
    env = dict(os.environ)
    if config is not None and config.tools_gopath:
        env["GOPATH"] = os.path.expanduser(config.tools_gopath)
    return env
