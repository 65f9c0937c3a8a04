"""Generation execution: parameters, process seam, sessions, service."""

from .outcome import OutcomeCell, SessionOutcome
from .params import build_args, compute_timeout_ms, resolve_parameters
from .probe import probe_binary
from .process import AsyncioProcessSpawner, ProcessHandle, ProcessSpawner, signal_process
from .service import GenerationService
from .session import GenerationSession

__all__ = [
    "AsyncioProcessSpawner",
    "GenerationService",
    "GenerationSession",
    "OutcomeCell",
    "ProcessHandle",
    "ProcessSpawner",
    "SessionOutcome",
    "build_args",
    "compute_timeout_ms",
    "probe_binary",
    "resolve_parameters",
    "signal_process",
]
