"""Settings store implementations."""

from gocomplete.infrastructure.state.file import FileSettingsStore
from gocomplete.infrastructure.state.memory import InMemorySettingsStore

__all__ = ["FileSettingsStore", "InMemorySettingsStore"]
