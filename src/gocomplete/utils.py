"""
Utility functions for gocomplete.
"""

import os
from pathlib import Path


def get_state_dir() -> Path:
    """
    Get the per-installation directory used for logs and persisted flags.

    ``GOCOMPLETE_HOME`` overrides the default of ``~/.gocomplete``.

    Returns:
        Absolute path to the state directory (not created here)
    """
    override = os.getenv("GOCOMPLETE_HOME")
    if override:
        return Path(override).expanduser().resolve()
    return Path.home() / ".gocomplete"


def byte_length(text: str) -> int:
    """Return the UTF-8 encoded length of ``text``."""
    return len(text.encode("utf-8"))
