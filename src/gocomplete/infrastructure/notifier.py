"""Notifier that routes user prompts to the log."""

from gocomplete.logger import get_logger

logger = get_logger("notifier")


class LoggingNotifier:
    """Headless :class:`~gocomplete.domain.protocols.Notifier`; never picks an action."""

    async def prompt_for_missing_tool(self, tool: str) -> None:
        logger.warning(f"{tool} is not installed. Install it to get completions.")

    async def prompt_for_updating_tool(self, tool: str) -> None:
        logger.warning(f"{tool} is outdated. Update it to get completions.")

    async def show_error(self, message: str) -> None:
        logger.error(message)

    async def show_information(self, message: str, *actions: str) -> str | None:
        logger.info(message)
        return None
