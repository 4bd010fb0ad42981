"""loguru setup for gocomplete.

Every module binds its own name (``get_logger("merger")``); records land in
one rotating file under the state directory. A console sink is only added on
request, since the library usually runs inside an editor host.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from gocomplete.utils import get_state_dir

LOG_FILE_ENV_VAR = "GOCOMPLETE_LOG_FILE"
LOG_LEVEL_ENV_VAR = "GOCOMPLETE_LOG_LEVEL"

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Sticky across reconfiguration so a level change keeps writing to the same file
_active_log_file: Optional[Path] = None


def _resolve_log_file(log_file: Optional[str]) -> Path:
    global _active_log_file
    if log_file is not None:
        _active_log_file = Path(log_file).expanduser().resolve()
    elif _active_log_file is None:
        override = os.getenv(LOG_FILE_ENV_VAR)
        _active_log_file = Path(override).expanduser() if override else get_state_dir() / "gocomplete.log"
    return _active_log_file


def setup_logger(
    log_file: Optional[str] = None,
    log_level: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: str = "zip",
    console_output: bool = False,
) -> Path:
    """
    (Re)configure the loguru sinks.

    Args:
        log_file: Log file path; defaults to the last configured one, then
            ``GOCOMPLETE_LOG_FILE``, then ``gocomplete.log`` in the state dir
        log_level: Minimum level; defaults to ``GOCOMPLETE_LOG_LEVEL`` or INFO
        rotation: Size or age at which the file is rotated
        retention: How long rotated files are kept
        compression: Archive format for rotated files
        console_output: Also log to stderr with colours

    Returns:
        The file the file sink writes to
    """
    level = (log_level or os.getenv(LOG_LEVEL_ENV_VAR) or "INFO").upper()
    path = _resolve_log_file(log_file)

    logger.remove()
    if console_output:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)
    logger.add(
        path,
        level=level,
        format=FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        compression=compression,
        encoding="utf-8",
    )
    return path


def get_logger(name: Optional[str] = None):
    """Logger bound to ``name`` (shown in the ``extra[name]`` column)."""
    return logger.bind(name=name or "gocomplete")


# Unbound records still need extra[name] for the formats above
logger.configure(extra={"name": "gocomplete"})
setup_logger()
