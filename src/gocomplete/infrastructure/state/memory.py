"""In-memory settings store.

Values live in a dictionary and are lost when the process exits; used by
tests and when no state directory is available.
"""

import copy
from typing import Any

from gocomplete.logger import get_logger

logger = get_logger(__name__)


class InMemorySettingsStore:
    """Dict-backed :class:`~gocomplete.domain.protocols.SettingsStore`.

    Example:
        >>> store = InMemorySettingsStore()
        >>> await store.update("dontshowNoSupportForgb", True)
        >>> await store.get("dontshowNoSupportForgb")
        True
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        logger.debug("InMemorySettingsStore initialized (settings will not persist)")

    async def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._data.get(key, default))

    async def update(self, key: str, value: Any) -> None:
        # Deep copy to prevent external mutations
        self._data[key] = copy.deepcopy(value)
        logger.debug(f"Updated setting: key='{key}'")
