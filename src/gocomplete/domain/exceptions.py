"""Failure taxonomy for the gocode analysis process."""

__all__ = [
    "AnalyzerError",
    "ToolMissing",
    "ToolOutdated",
    "StaleServerProcess",
    "AnalysisFailed",
    "MalformedOutput",
]


class AnalyzerError(Exception):
    """Base class for every failure raised while asking gocode for suggestions."""

    def __init__(self, message: str, *, tool: str = "gocode", stderr: str = "") -> None:
        super().__init__(message)
        self.tool = tool
        self.stderr = stderr


class ToolMissing(AnalyzerError):
    """The tool executable could not be found; the user should install it."""


class ToolOutdated(AnalyzerError):
    """The tool rejected a flag it should know; the user should update it."""


class StaleServerProcess(AnalyzerError):
    """An older gocode server is still running and cannot serve the request."""


class AnalysisFailed(AnalyzerError):
    """Any other nonzero exit, spawn failure or timeout."""


class MalformedOutput(AnalyzerError):
    """gocode exited cleanly but its stdout is not the expected JSON payload."""
