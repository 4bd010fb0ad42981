"""File-based settings store.

All keys are kept in one pretty-printed JSON document, rewritten atomically
on every update.
"""

import json
from pathlib import Path
from typing import Any

from gocomplete.logger import get_logger

logger = get_logger(__name__)


class FileSettingsStore:
    """JSON file backed :class:`~gocomplete.domain.protocols.SettingsStore`.

    Features:
    - Parent directory created on first write
    - Atomic writes (write to temp, then rename)
    - A missing file reads as empty

    Example:
        >>> store = FileSettingsStore("~/.gocomplete/state.json")
        >>> await store.update("dontshowNoSupportForgb", True)
        >>> # Creates: ~/.gocomplete/state.json
    """

    def __init__(self, path: str | Path = "~/.gocomplete/state.json"):
        self.path = Path(path).expanduser().resolve()
        logger.info(f"FileSettingsStore initialized: path={self.path}")

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted JSON in settings file '{self.path}': {e}")
            raise ValueError(f"Corrupted settings file: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read settings file '{self.path}': {e}")
            raise IOError(f"Cannot read settings file: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {self.path} does not hold a JSON object")
        return data

    async def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key`` or ``default``.

        Raises:
            IOError: If the file cannot be read
            ValueError: If the file is corrupted
        """
        return self._read().get(key, default)

    async def update(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``.

        Raises:
            IOError: If the file cannot be written
            ValueError: If ``value`` is not JSON-serializable
        """
        data = self._read()
        data[key] = value
        temp_path = self.path.with_suffix(".json.tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self.path)
            logger.debug(f"Saved setting: key='{key}', path={self.path}")

        except (TypeError, ValueError) as e:
            logger.error(f"Setting not JSON-serializable for key '{key}': {e}")
            if temp_path.exists():
                temp_path.unlink()
            raise ValueError(f"Cannot serialize setting: {e}") from e

        except OSError as e:
            logger.error(f"Failed to write settings file '{self.path}': {e}")
            if temp_path.exists():
                temp_path.unlink()
            raise IOError(f"Cannot write settings file: {e}") from e
