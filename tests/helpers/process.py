"""Fake inference processes backed by asyncio.StreamReader.

A ``FakeProcess`` must be created inside a running event loop. Scripts passed
to ``FakeSpawner`` run as tasks right after spawn and drive the process by
emitting output and exiting.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence

Script = Callable[["FakeProcess"], Awaitable[None]]


class FakeStdin:
    def __init__(self) -> None:
        self.writes: list[bytes] = []
        self.closed = False

    def write(self, data: bytes) -> None:
        self.writes.append(data)

    async def drain(self) -> None:
        return None

    def close(self) -> None:
        self.closed = True

    @property
    def text(self) -> str:
        return b"".join(self.writes).decode("utf-8")


class FakeProcess:
    def __init__(self, *, pid: int = 4242, exit_on_terminate: bool = True) -> None:
        self.pid = pid
        self.returncode: int | None = None
        self.stdin = FakeStdin()
        self.stdout = asyncio.StreamReader()
        self.stderr = asyncio.StreamReader()
        self.signals: list[str] = []
        self.exit_on_terminate = exit_on_terminate
        self._exited = asyncio.Event()

    def emit(self, text: str) -> None:
        if self.returncode is None:
            self.stdout.feed_data(text.encode("utf-8"))

    def emit_bytes(self, data: bytes) -> None:
        if self.returncode is None:
            self.stdout.feed_data(data)

    def emit_stderr(self, text: str) -> None:
        if self.returncode is None:
            self.stderr.feed_data(text.encode("utf-8"))

    def exit(self, code: int = 0) -> None:
        if self.returncode is not None:
            return
        self.returncode = code
        self.stdout.feed_eof()
        self.stderr.feed_eof()
        self._exited.set()

    def terminate(self) -> None:
        self.signals.append("SIGTERM")
        if self.exit_on_terminate:
            self.exit(-15)

    def kill(self) -> None:
        self.signals.append("SIGKILL")
        self.exit(-9)

    async def wait(self) -> int:
        await self._exited.wait()
        return self.returncode  # type: ignore[return-value]


class FakeSpawner:
    def __init__(
        self,
        script: Script | None = None,
        *,
        error: Exception | None = None,
        exit_on_terminate: bool = True,
        spawn_delay: float = 0.0,
    ) -> None:
        self.calls: list[tuple[str, list[str], bool]] = []
        self.processes: list[FakeProcess] = []
        self.tasks: list[asyncio.Task[None]] = []
        self._script = script
        self._error = error
        self._exit_on_terminate = exit_on_terminate
        self._spawn_delay = spawn_delay

    async def spawn(
        self,
        program: str,
        args: Sequence[str],
        *,
        interactive: bool = False,
    ) -> FakeProcess:
        self.calls.append((program, list(args), interactive))
        if self._spawn_delay:
            await asyncio.sleep(self._spawn_delay)
        if self._error is not None:
            raise self._error
        process = FakeProcess(exit_on_terminate=self._exit_on_terminate)
        self.processes.append(process)
        if self._script is not None:
            self.tasks.append(asyncio.get_running_loop().create_task(self._script(process)))
        return process

    @property
    def last_process(self) -> FakeProcess:
        return self.processes[-1]

    @property
    def last_args(self) -> list[str]:
        return self.calls[-1][1]


__all__ = ["FakeProcess", "FakeSpawner", "FakeStdin", "Script"]
