"""Notifier protocol: user-facing prompts raised by the completion core."""

from typing import Protocol

__all__ = ["Notifier"]


class Notifier(Protocol):
    """Surface actionable messages to the user.

    An editor integration maps these onto its own UI. The completion core
    never waits on :meth:`prompt_for_missing_tool` or
    :meth:`prompt_for_updating_tool` to decide anything.
    """

    async def prompt_for_missing_tool(self, tool: str) -> None:
        """Offer to install ``tool``."""
        ...

    async def prompt_for_updating_tool(self, tool: str) -> None:
        """Offer to update ``tool``."""
        ...

    async def show_error(self, message: str) -> None:
        """Show an error message."""
        ...

    async def show_information(self, message: str, *actions: str) -> str | None:
        """Show an informational message and return the chosen action, if any."""
        ...
