"""Process spawning seam for the inference binary.

Sessions depend only on the ``ProcessSpawner`` and ``ProcessHandle``
protocols. ``asyncio.subprocess.Process`` satisfies ``ProcessHandle``; tests
substitute fakes backed by ``asyncio.StreamReader``.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any, Protocol
from collections.abc import Sequence

logger = logging.getLogger(__name__)


class ProcessHandle(Protocol):
    pid: int | None
    returncode: int | None
    stdin: Any
    stdout: Any
    stderr: Any

    def terminate(self) -> None: ...

    def kill(self) -> None: ...

    async def wait(self) -> int: ...


class ProcessSpawner(Protocol):
    async def spawn(
        self,
        program: str,
        args: Sequence[str],
        *,
        interactive: bool = False,
    ) -> ProcessHandle: ...


class AsyncioProcessSpawner:
    """Spawns the binary with piped stdout/stderr via asyncio."""

    async def spawn(
        self,
        program: str,
        args: Sequence[str],
        *,
        interactive: bool = False,
    ) -> ProcessHandle:
        process = await asyncio.create_subprocess_exec(
            program,
            *args,
            stdin=asyncio.subprocess.PIPE if interactive else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        logger.debug("process: spawned program=%s pid=%s interactive=%s", program, process.pid, interactive)
        return process


def signal_process(process: ProcessHandle, *, kill: bool = False) -> None:
    """Send SIGTERM (or SIGKILL) unless the process already exited."""
    if process.returncode is not None:
        return
    with contextlib.suppress(ProcessLookupError):
        if kill:
            process.kill()
        else:
            process.terminate()


__all__ = [
    "AsyncioProcessSpawner",
    "ProcessHandle",
    "ProcessSpawner",
    "signal_process",
]
