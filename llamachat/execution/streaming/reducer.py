"""Pure reducer over raw stdout chunks of the inference binary.

The stream moves through three tagged phases:

    idle              nothing received yet (prompt passed as an argument)
    interactive_wait  the binary is loading; waiting for its "> " input prompt
    streaming         reply text is being accumulated

``reduce_chunk`` folds one decoded chunk into a new ``StreamState`` and reports
whether the prompt must now be written to stdin and whether a stop marker is
present in the accumulated text. It performs no I/O, so chunk interleavings
can be tested without a subprocess.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, replace

from ...config.filters import (
    INTERACTIVE_ARTIFACT_LINE_PATTERNS,
    INTERACTIVE_READY_PATTERN,
    METRICS_BANNER_PATTERN,
)
from ...detection import ModelDescriptor
from ...messages.sanitize import find_stop_marker

# Loading banners can be long; only the tail matters for the ready check
_WAIT_TAIL_CHARS = 256


class StreamPhase(str, Enum):
    IDLE = "idle"
    INTERACTIVE_WAIT = "interactive_wait"
    STREAMING = "streaming"


@dataclass(frozen=True, slots=True)
class StreamState:
    """Accumulated view of the output stream.

    Attributes:
        phase: Current tagged phase.
        interactive: Whether the stream is driven over stdin.
        buffer: Accepted reply text (complete lines in interactive mode).
        pending_line: Trailing partial line not yet filtered (interactive only).
        wait_text: Tail of pre-prompt output while waiting for the input prompt.
        prompt_written: The prompt has been requested to go to stdin.
        stop_detected: A stop marker was found; later chunks are ignored.
        chunk_count: Number of non-empty chunks folded so far.
    """

    phase: StreamPhase
    interactive: bool = False
    buffer: str = ""
    pending_line: str = ""
    wait_text: str = ""
    prompt_written: bool = False
    stop_detected: bool = False
    chunk_count: int = 0

    @property
    def text(self) -> str:
        """Everything accepted so far, including the unfinished line."""
        return self.buffer + self.pending_line


@dataclass(frozen=True, slots=True)
class StreamStep:
    state: StreamState
    write_prompt: bool = False
    stop_detected: bool = False


def initial_stream_state(descriptor: ModelDescriptor) -> StreamState:
    if descriptor.interactive_drive_mode:
        return StreamState(phase=StreamPhase.INTERACTIVE_WAIT, interactive=True)
    return StreamState(phase=StreamPhase.IDLE)


def reduce_chunk(
    state: StreamState,
    chunk: str,
    descriptor: ModelDescriptor,
    *,
    echo: str = "",
) -> StreamStep:
    """Fold one chunk into the stream state.

    Args:
        state: Current stream state.
        chunk: Newly decoded stdout text.
        descriptor: Descriptor of the active model (stop markers, mode).
        echo: Text written to stdin; its lines echoed back before the reply
            starts are dropped.
    """
    if not chunk or state.stop_detected:
        return StreamStep(state=state)

    state = replace(state, chunk_count=state.chunk_count + 1)

    if state.phase is StreamPhase.INTERACTIVE_WAIT:
        return _reduce_waiting(state, chunk)

    if state.interactive:
        state = _accept_interactive(state, chunk, echo)
    else:
        state = replace(state, phase=StreamPhase.STREAMING, buffer=state.buffer + chunk)

    if find_stop_marker(state.text, descriptor.stop_markers) != -1:
        return StreamStep(state=replace(state, stop_detected=True), stop_detected=True)
    return StreamStep(state=state)


def _reduce_waiting(state: StreamState, chunk: str) -> StreamStep:
    wait_text = (state.wait_text + chunk)[-_WAIT_TAIL_CHARS:]
    if not INTERACTIVE_READY_PATTERN.search(wait_text):
        return StreamStep(state=replace(state, wait_text=wait_text))
    ready = replace(
        state,
        phase=StreamPhase.STREAMING,
        wait_text="",
        prompt_written=True,
    )
    return StreamStep(state=ready, write_prompt=True)


def _accept_interactive(state: StreamState, chunk: str, echo: str) -> StreamState:
    lines = (state.pending_line + chunk).split("\n")
    echo_lines = frozenset(line.strip() for line in echo.splitlines() if line.strip())
    buffer = state.buffer
    for line in lines[:-1]:
        if _is_interactive_artifact(line, buffer, echo_lines):
            continue
        buffer += line + "\n"
    return replace(state, buffer=buffer, pending_line=lines[-1])


def _is_interactive_artifact(line: str, buffer: str, echo_lines: frozenset[str]) -> bool:
    stripped = line.strip()
    if not stripped:
        # Blank lines only count once the reply has started
        return not buffer.strip()
    # Continued input lines are echoed with their trailing backslash
    if stripped.rstrip("\\").rstrip() in echo_lines and not buffer.strip():
        return True
    if METRICS_BANNER_PATTERN.match(line):
        return True
    return any(pattern.match(line) for pattern in INTERACTIVE_ARTIFACT_LINE_PATTERNS)


__all__ = [
    "StreamPhase",
    "StreamState",
    "StreamStep",
    "initial_stream_state",
    "reduce_chunk",
]
