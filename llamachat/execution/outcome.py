"""One-shot outcome cell for generation sessions.

Output, exit, timeout, and cancel events may each try to finish a session.
The cell accepts only the first outcome; later attempts are reported as
rejected and leave the stored outcome untouched.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from ..errors import GenerationError
from ..state import GenerationResult, SessionPhase


@dataclass(frozen=True, slots=True)
class SessionOutcome:
    """Terminal outcome of a session: a result or a classified error."""

    phase: SessionPhase
    result: GenerationResult | None = None
    error: GenerationError | None = None

    def unwrap(self) -> GenerationResult:
        """Return the result or raise the classified error."""
        if self.error is not None:
            raise self.error
        if self.result is None:
            raise RuntimeError(f"outcome in phase {self.phase.value} carries no result")
        return self.result


class OutcomeCell:
    """Single-assignment holder backed by an asyncio.Future."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._future: asyncio.Future[SessionOutcome] = (loop or asyncio.get_running_loop()).create_future()

    @property
    def done(self) -> bool:
        return self._future.done()

    @property
    def outcome(self) -> SessionOutcome | None:
        return self._future.result() if self._future.done() else None

    def try_set(self, outcome: SessionOutcome) -> bool:
        """Store the outcome if none is stored yet; return whether it was stored."""
        if self._future.done():
            return False
        self._future.set_result(outcome)
        return True

    async def wait(self) -> SessionOutcome:
        # shield: a cancelled waiter must not cancel the shared future
        return await asyncio.shield(self._future)


__all__ = ["OutcomeCell", "SessionOutcome"]
