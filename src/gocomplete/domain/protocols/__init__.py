"""Domain protocols - interfaces for the services the completion core calls.

Using protocols keeps the orchestration testable with small stubs and lets
an editor integration substitute its own buffer, settings and UI services.
"""

from gocomplete.domain.protocols.analyzer import Analyzer, AnalysisResult, OptionsHandshake
from gocomplete.domain.protocols.notifier import Notifier
from gocomplete.domain.protocols.state import SettingsStore
from gocomplete.domain.protocols.workspace import (
    ImportEditProvider,
    ModuleDetector,
    PackageNameGuesser,
    PackageRootResolver,
    PackageSource,
)

__all__ = [
    "Analyzer",
    "AnalysisResult",
    "OptionsHandshake",
    "Notifier",
    "SettingsStore",
    "ImportEditProvider",
    "ModuleDetector",
    "PackageNameGuesser",
    "PackageRootResolver",
    "PackageSource",
]
