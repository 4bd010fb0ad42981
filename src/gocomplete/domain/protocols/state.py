"""Settings store protocol for durable per-installation flags.

Mirrors the key-value "memento" editors provide to extensions: values are
JSON-serializable and survive restarts.
"""

from typing import Any, Protocol

__all__ = ["SettingsStore"]


class SettingsStore(Protocol):
    """Protocol for persistent key-value settings.

    Example implementations:
    - InMemorySettingsStore: dict-based storage for tests
    - FileSettingsStore: a single JSON file on disk

    Example:
        >>> store = FileSettingsStore("~/.gocomplete/state.json")
        >>> await store.update("dontshowNoSupportForgb", True)
        >>> await store.get("dontshowNoSupportForgb", False)
        True
    """

    async def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key`` or ``default``."""
        ...

    async def update(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        ...
