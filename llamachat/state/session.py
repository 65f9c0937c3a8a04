"""Lifecycle phases of a generation session."""

from __future__ import annotations

from enum import Enum


class SessionPhase(str, Enum):
    """Generation session states.

    ``STARTING`` and ``RUNNING`` are live; every other phase is terminal and
    a session enters exactly one of them.
    """

    STARTING = "starting"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self not in (SessionPhase.STARTING, SessionPhase.RUNNING)


__all__ = ["SessionPhase"]
