"""Buffered execution of tool subprocesses."""

import asyncio
from dataclasses import dataclass
from typing import Optional

from gocomplete.logger import get_logger

logger = get_logger("gocode.process")

__all__ = ["ProcessOutput", "run_tool"]


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Exit code and fully collected output streams."""

    returncode: int
    stdout: bytes
    stderr: str

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")


async def run_tool(
    executable: str,
    args: list[str],
    env: dict[str, str],
    input_text: Optional[str] = None,
    timeout: Optional[float] = None,
    cwd: Optional[str] = None,
) -> ProcessOutput:
    """
    Run ``executable`` to completion and collect its output.

    ``input_text`` is written to stdin, which is then closed. ``cwd`` defaults
    to the current process directory.

    Raises:
        OSError: If the process cannot be spawned (FileNotFoundError when the
            executable does not exist)
        asyncio.TimeoutError: If ``timeout`` expires; the process is killed
    """
    logger.debug(f"Running {executable} {' '.join(args)}")
    process = await asyncio.create_subprocess_exec(
        executable,
        *args,
        stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=env,
        cwd=cwd,
    )
    data = input_text.encode("utf-8") if input_text is not None else None
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(data), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"{executable} did not finish within {timeout}s, killing pid {process.pid}")
        process.kill()
        await process.wait()
        raise
    except asyncio.CancelledError:
        if process.returncode is None:
            process.kill()
            await asyncio.shield(process.wait())
        raise

    returncode = process.returncode if process.returncode is not None else -1
    return ProcessOutput(returncode, stdout, stderr.decode("utf-8", errors="replace"))
