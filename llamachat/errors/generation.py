"""Generation outcome exceptions.

Every failed generation surfaces as one of these classes. The ``kind``
attribute is the machine-readable label carried into logs and HTTP payloads:

    - no_active_model: precondition failure, raised before any spawn
    - spawn_failed: the inference binary could not be started
    - empty_output: the process exited without a usable reply
    - timeout: the deadline expired and nothing usable was produced
    - cancelled: the caller stopped the generation
    - process_error: the process failed at the OS/exit-code level
    - busy: another generation is already running
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for classified generation failures."""

    kind = "generation_error"

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class NoActiveModelError(GenerationError):
    """Raised when no model is active; nothing is spawned."""

    kind = "no_active_model"


class SpawnError(GenerationError):
    """Raised when the inference binary cannot be started."""

    kind = "spawn_failed"


class EmptyOutputError(GenerationError):
    """Raised when the process exits cleanly but produced nothing usable."""

    kind = "empty_output"


class GenerationTimeoutError(GenerationError):
    """Raised when the deadline expires before any usable output exists."""

    kind = "timeout"


class GenerationCancelledError(GenerationError):
    """Raised when an explicit cancel request stops the generation."""

    kind = "cancelled"


class ProcessError(GenerationError):
    """Raised when the process fails with a non-zero exit and no output.

    Attributes:
        returncode: Exit status reported by the process, if any.
    """

    kind = "process_error"

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(message, detail=detail)
        self.returncode = returncode


class GenerationBusyError(GenerationError):
    """Raised when a generation is requested while another one is running."""

    kind = "busy"


__all__ = [
    "GenerationError",
    "NoActiveModelError",
    "SpawnError",
    "EmptyOutputError",
    "GenerationTimeoutError",
    "GenerationCancelledError",
    "ProcessError",
    "GenerationBusyError",
]
