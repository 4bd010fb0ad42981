"""gocode process integration."""

from gocomplete.infrastructure.gocode.analyzer import GocodeAnalyzer
from gocomplete.infrastructure.gocode.options import GocodeOptions, HandshakeState
from gocomplete.infrastructure.gocode.process import ProcessOutput, run_tool
from gocomplete.infrastructure.gocode.tools import get_bin_path, tools_env

__all__ = [
    "GocodeAnalyzer",
    "GocodeOptions",
    "HandshakeState",
    "ProcessOutput",
    "run_tool",
    "get_bin_path",
    "tools_env",
]
