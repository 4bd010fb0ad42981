"""
One-time gocode option handshake.

gocode keeps persistent options (``gocode set``). Once per session they are
compared with the configured values and the differing ones are written, one
after another. Builds of gocode without the ``set`` subcommand are
remembered as legacy for the rest of the session.
"""

import asyncio
import os
from enum import Enum

from gocomplete.config import SuggestConfig
from gocomplete.domain.protocols import Notifier, SettingsStore
from gocomplete.logger import get_logger

from .process import run_tool
from .tools import get_bin_path, tools_env

logger = get_logger("gocode.options")

__all__ = ["HandshakeState", "GocodeOptions", "NO_SUPPORT_FOR_GB_KEY"]

NO_SUPPORT_FOR_GB_KEY = "dontshowNoSupportForgb"
DONT_SHOW_AGAIN = "Don't show again"
UNKNOWN_SUBCOMMAND_PREFIX = "gocode: unknown subcommand:"
GB_ADVISORY = (
    "The go.gocodePackageLookupMode setting for gb will not be honored as "
    "github.com/mdempsky/gocode doesn't support it yet."
)


class HandshakeState(Enum):
    """Lifecycle of the option handshake for one session."""

    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    CONFIGURED = "configured"
    LEGACY = "legacy"


def desired_options(config: SuggestConfig) -> list[tuple[str, str]]:
    return [
        ("propose-builtins", "true"),
        ("autobuild", config.gocode_auto_build),
        ("package-lookup-mode", config.gocode_package_lookup_mode),
    ]


class GocodeOptions:
    """Session-wide handshake state machine.

    ``UNCONFIGURED -> CONFIGURING -> CONFIGURED`` on a gocode that supports
    ``set``; ``UNCONFIGURED -> CONFIGURING -> LEGACY`` otherwise. A failed
    attempt (gocode missing, listing failed) returns to ``UNCONFIGURED`` so
    the next request tries again. Concurrent callers share one attempt.
    """

    def __init__(self, settings: SettingsStore | None = None, notifier: Notifier | None = None) -> None:
        self._settings = settings
        self._notifier = notifier
        self._state = HandshakeState.UNCONFIGURED
        self._task: asyncio.Task[None] | None = None
        self._advisories: set[asyncio.Task] = set()

    @property
    def state(self) -> HandshakeState:
        return self._state

    @property
    def legacy(self) -> bool:
        """True once gocode was found not to support ``set``."""
        return self._state is HandshakeState.LEGACY

    async def ensure_configured(self, config: SuggestConfig) -> None:
        if self._state in (HandshakeState.CONFIGURED, HandshakeState.LEGACY):
            return
        if self._task is None or self._task.done():
            self._state = HandshakeState.CONFIGURING
            self._task = asyncio.create_task(self._configure(config))
        await asyncio.shield(self._task)

    async def wait_for_advisories(self) -> None:
        """Wait for pending user advisories (used on shutdown and in tests)."""
        if self._advisories:
            await asyncio.gather(*self._advisories, return_exceptions=True)

    async def _configure(self, config: SuggestConfig) -> None:
        gocode = get_bin_path("gocode", config)
        if not os.path.isabs(gocode):
            logger.debug("gocode not installed, option handshake postponed")
            self._state = HandshakeState.UNCONFIGURED
            return

        env = tools_env(config)
        try:
            listing = await run_tool(gocode, ["set"], env, timeout=config.analyzer_timeout)
        except (OSError, asyncio.TimeoutError) as e:
            logger.warning(f"Could not list gocode options: {e}")
            self._state = HandshakeState.UNCONFIGURED
            return

        if listing.returncode != 0 and (
            listing.stdout_text.startswith(UNKNOWN_SUBCOMMAND_PREFIX)
            or listing.stderr.startswith(UNKNOWN_SUBCOMMAND_PREFIX)
        ):
            logger.info("gocode has no 'set' subcommand, switching to legacy mode")
            self._state = HandshakeState.LEGACY
            self._schedule_gb_advisory(config)
            return

        existing = set(listing.stdout_text.splitlines())
        pending = [(name, value) for name, value in desired_options(config) if f"{name} {value}" not in existing]
        for name, value in pending:
            # each write must land before the next one is issued
            try:
                result = await run_tool(gocode, ["set", name, value], env, timeout=config.analyzer_timeout)
            except (OSError, asyncio.TimeoutError) as e:
                logger.warning(f"Could not set gocode option {name}={value}: {e}")
                continue
            if result.returncode != 0:
                logger.warning(f"gocode set {name} {value} failed: {result.stderr.strip()}")
            else:
                logger.debug(f"gocode option set: {name}={value}")

        self._state = HandshakeState.CONFIGURED
        logger.info(f"gocode options configured ({len(pending)} updated)")

    def _schedule_gb_advisory(self, config: SuggestConfig) -> None:
        if config.gocode_package_lookup_mode != "gb" or self._settings is None or self._notifier is None:
            return
        task = asyncio.create_task(self._show_gb_advisory())
        self._advisories.add(task)
        task.add_done_callback(self._advisories.discard)

    async def _show_gb_advisory(self) -> None:
        if await self._settings.get(NO_SUPPORT_FOR_GB_KEY, False):
            return
        selected = await self._notifier.show_information(GB_ADVISORY, DONT_SHOW_AGAIN)
        if selected == DONT_SHOW_AGAIN:
            await self._settings.update(NO_SUPPORT_FOR_GB_KEY, True)
