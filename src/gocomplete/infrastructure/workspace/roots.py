"""Current package root relative to ``$GOPATH/src``."""

import os

from gocomplete.config import SuggestConfig
from gocomplete.infrastructure.gocode.tools import tools_env


class GopathPackageRoot:
    """Import path prefix of the workspace (or file directory) inside a GOPATH."""

    def __init__(self, config: SuggestConfig | None = None, workspace_folder: str | None = None) -> None:
        self._config = config or SuggestConfig()
        self._workspace_folder = workspace_folder

    def package_root(self, filename: str) -> str | None:
        cwd = os.path.dirname(os.path.abspath(filename))
        folder = os.path.abspath(self._workspace_folder) if self._workspace_folder else cwd
        gopath = tools_env(self._config).get("GOPATH", "")
        for entry in gopath.split(os.pathsep):
            if not entry:
                continue
            src = os.path.join(os.path.abspath(os.path.expanduser(entry)), "src")
            if cwd.startswith(src + os.sep) and folder.startswith(src + os.sep):
                return os.path.relpath(folder, src).replace(os.sep, "/")
        return None
