"""Generation session: one inference process from spawn to terminal outcome.

Lifecycle:
    starting -> running -> completed | failed | timed_out | cancelled

While running, four independent event sources may try to finish the session:

- stdout reader: a stop marker appears in the accumulated output
- exit watcher: the process exits on its own
- timeout timer: the deadline expires
- cancel(): the caller stops the generation

All of them resolve through a one-shot ``OutcomeCell``; the first terminal
transition wins and later events are discarded. Process, timer, and reader
tasks are released exactly once on every exit path.
"""

from __future__ import annotations

import time
import uuid
import codecs
import asyncio
import logging
import contextlib
from collections.abc import Sequence

from ..config import STDERR_TAIL_CHARS, STDOUT_READ_BYTES, TERMINATE_GRACE_S
from ..detection import ModelDescriptor
from ..errors import (
    EmptyOutputError,
    GenerationCancelledError,
    GenerationError,
    GenerationTimeoutError,
    ProcessError,
    SpawnError,
)
from ..messages.sanitize import sanitize_response
from ..state import GenerationResult, SessionPhase
from .outcome import OutcomeCell, SessionOutcome
from .process import ProcessHandle, ProcessSpawner, signal_process
from .streaming import StreamState, initial_stream_state, reduce_chunk

logger = logging.getLogger(__name__)


class GenerationSession:
    """Drives a single inference process to a single terminal outcome."""

    def __init__(
        self,
        *,
        spawner: ProcessSpawner,
        program: str,
        args: Sequence[str],
        descriptor: ModelDescriptor,
        prompt: str,
        timeout_ms: int,
        session_id: str | None = None,
    ) -> None:
        self.session_id = session_id or f"gen-{uuid.uuid4().hex[:12]}"
        self._spawner = spawner
        self._program = program
        self._args = list(args)
        self._descriptor = descriptor
        self._prompt = prompt
        self._timeout_ms = timeout_ms

        self._loop = asyncio.get_running_loop()
        self._cell = OutcomeCell(self._loop)
        self._phase = SessionPhase.STARTING
        self._process: ProcessHandle | None = None
        self._stream: StreamState = initial_stream_state(descriptor)
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._stderr_tail = ""
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: list[asyncio.Task[None]] = []
        self._stdout_task: asyncio.Task[None] | None = None
        self._stderr_task: asyncio.Task[None] | None = None
        self._released = False
        self._started_at = time.perf_counter()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def is_active(self) -> bool:
        return not self._cell.done

    @property
    def stream_state(self) -> StreamState:
        return self._stream

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    async def run(self) -> SessionOutcome:
        """Spawn the process and wait for the first terminal outcome."""
        self._started_at = time.perf_counter()
        logger.info(
            "generation_session: start id=%s family=%s interactive=%s timeout_ms=%d",
            self.session_id,
            self._descriptor.family.value,
            self._descriptor.interactive_drive_mode,
            self._timeout_ms,
        )
        # The deadline covers spawn time as well
        self._timer = self._loop.call_later(self._timeout_ms / 1000.0, self._on_timeout)
        try:
            self._process = await self._spawner.spawn(
                self._program,
                self._args,
                interactive=self._descriptor.interactive_drive_mode,
            )
        except (OSError, ValueError) as exc:
            # ValueError: arguments the OS cannot pass (e.g. embedded NUL)
            logger.error("generation_session: spawn failed id=%s program=%s err=%s", self.session_id, self._program, exc)
            self._resolve(
                SessionPhase.FAILED,
                error=SpawnError(f"failed to start {self._program}: {exc}", detail=str(exc)),
            )
            self._released = True
            return self._final_outcome()
        except asyncio.CancelledError:
            self._resolve(
                SessionPhase.CANCELLED,
                error=GenerationCancelledError("generation abandoned by caller"),
            )
            self._released = True
            raise

        try:
            if not self._cell.done:
                self._phase = SessionPhase.RUNNING
                self._stdout_task = self._start_task(self._read_stdout(), "stdout")
                self._stderr_task = self._start_task(self._read_stderr(), "stderr")
                self._start_task(self._watch_exit(), "exit")
            return await self._cell.wait()
        finally:
            await self._release()

    def cancel(self) -> bool:
        """Cooperatively stop the process; return False if already finished."""
        if self._cell.done:
            return False
        if self._process is not None:
            signal_process(self._process)
        resolved = self._resolve(
            SessionPhase.CANCELLED,
            error=GenerationCancelledError("generation cancelled"),
        )
        if resolved:
            logger.info("generation_session: cancelled id=%s", self.session_id)
        return resolved

    # ------------------------------------------------------------------ #
    # Event sources
    # ------------------------------------------------------------------ #
    async def _read_stdout(self) -> None:
        stdout = self._process.stdout
        while not self._cell.done:
            data = await stdout.read(STDOUT_READ_BYTES)
            if not data:
                break
            self._handle_output(self._decoder.decode(data))
        tail = self._decoder.decode(b"", final=True)
        if tail:
            self._handle_output(tail)

    async def _read_stderr(self) -> None:
        stderr = self._process.stderr
        if stderr is None:
            return
        while True:
            data = await stderr.read(STDOUT_READ_BYTES * 4)
            if not data:
                return
            text = data.decode("utf-8", errors="replace")
            self._stderr_tail = (self._stderr_tail + text)[-STDERR_TAIL_CHARS:]
            logger.debug("generation_session: stderr id=%s text=%r", self.session_id, text[:200])

    async def _watch_exit(self) -> None:
        returncode = await self._process.wait()
        readers = [task for task in (self._stdout_task, self._stderr_task) if task is not None]
        if readers:
            # Judge the output only after every byte has been folded
            await asyncio.wait(readers)
        if self._cell.done:
            return

        logger.info(
            "generation_session: process exited id=%s code=%s chunks=%d",
            self.session_id,
            returncode,
            self._stream.chunk_count,
        )
        reply = sanitize_response(self._stream.text, self._descriptor)
        if reply:
            self._complete(reply)
        elif returncode in (0, None):
            self._resolve(
                SessionPhase.FAILED,
                error=EmptyOutputError("empty response from inference process", detail=self._stderr_tail or None),
            )
        else:
            self._resolve(
                SessionPhase.FAILED,
                error=ProcessError(
                    f"inference process exited with code {returncode}",
                    detail=self._stderr_tail or None,
                    returncode=returncode,
                ),
            )

    def _on_timeout(self) -> None:
        if self._cell.done:
            return
        logger.warning(
            "generation_session: timeout id=%s timeout_ms=%d chunks=%d",
            self.session_id,
            self._timeout_ms,
            self._stream.chunk_count,
        )
        if self._process is not None:
            signal_process(self._process, kill=True)
        reply = sanitize_response(self._stream.text, self._descriptor)
        if reply:
            self._complete(reply)
            return
        self._resolve(
            SessionPhase.TIMED_OUT,
            error=GenerationTimeoutError(f"no response within {self._timeout_ms} ms"),
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _handle_output(self, text: str) -> None:
        if self._cell.done:
            return
        step = reduce_chunk(self._stream, text, self._descriptor, echo=self._prompt)
        self._stream = step.state
        if step.write_prompt:
            self._write_prompt()
        if not step.stop_detected:
            return

        logger.info("generation_session: stop marker detected id=%s chunks=%d", self.session_id, self._stream.chunk_count)
        signal_process(self._process)
        reply = sanitize_response(self._stream.text, self._descriptor)
        if reply:
            self._complete(reply)
        else:
            self._resolve(
                SessionPhase.FAILED,
                error=EmptyOutputError("inference process stopped before producing a reply"),
            )

    def _write_prompt(self) -> None:
        stdin = self._process.stdin
        if stdin is None:
            logger.error("generation_session: interactive process has no stdin id=%s", self.session_id)
            return
        # A trailing backslash continues the input line in interactive mode
        payload = "\\\n".join(self._prompt.splitlines() or [""]) + "\n"
        stdin.write(payload.encode("utf-8"))
        self._start_task(self._drain_stdin(), "stdin")
        logger.debug("generation_session: prompt written id=%s chars=%d", self.session_id, len(payload))

    async def _drain_stdin(self) -> None:
        try:
            await self._process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as exc:
            # The exit watcher reports the failure
            logger.warning("generation_session: stdin closed id=%s err=%s", self.session_id, exc)

    def _complete(self, reply: str) -> None:
        result = GenerationResult.from_reply(reply, self._elapsed_ms())
        self._resolve(SessionPhase.COMPLETED, result=result)

    def _resolve(
        self,
        phase: SessionPhase,
        *,
        result: GenerationResult | None = None,
        error: GenerationError | None = None,
    ) -> bool:
        if not self._cell.try_set(SessionOutcome(phase=phase, result=result, error=error)):
            return False
        self._phase = phase
        if self._timer is not None:
            self._timer.cancel()
        logger.info(
            "generation_session: resolved id=%s phase=%s error=%s ms=%d",
            self.session_id,
            phase.value,
            error.kind if error is not None else "-",
            self._elapsed_ms(),
        )
        return True

    def _start_task(self, coro, name: str) -> asyncio.Task[None]:
        task = self._loop.create_task(coro, name=f"{self.session_id}-{name}")
        task.add_done_callback(self._on_task_done)
        self._tasks.append(task)
        return task

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None or self._cell.done:
            return
        logger.error("generation_session: %s failed id=%s err=%s", task.get_name(), self.session_id, exc)
        if self._process is not None:
            signal_process(self._process, kill=True)
        self._resolve(
            SessionPhase.FAILED,
            error=ProcessError(f"inference process stream failed: {exc}", detail=self._stderr_tail or None),
        )

    async def _release(self) -> None:
        if self._released:
            return
        self._released = True
        if self._timer is not None:
            self._timer.cancel()

        process = self._process
        if process is not None:
            if process.stdin is not None:
                with contextlib.suppress(Exception):
                    process.stdin.close()
            if process.returncode is None:
                signal_process(process)
                try:
                    async with asyncio.timeout(TERMINATE_GRACE_S):
                        await process.wait()
                except TimeoutError:
                    logger.warning("generation_session: terminate grace expired; killing id=%s", self.session_id)
                    signal_process(process, kill=True)
                    await process.wait()

        for task in self._tasks:
            if not task.done():
                task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

        # Caller-side cancellation (e.g. a dropped client) still needs an outcome
        self._resolve(
            SessionPhase.CANCELLED,
            error=GenerationCancelledError("generation abandoned by caller"),
        )
        self._process = None

    def _final_outcome(self) -> SessionOutcome:
        outcome = self._cell.outcome
        if outcome is None:
            raise RuntimeError("session finished without an outcome")
        return outcome

    def _elapsed_ms(self) -> int:
        return int((time.perf_counter() - self._started_at) * 1000.0)


__all__ = ["GenerationSession"]
