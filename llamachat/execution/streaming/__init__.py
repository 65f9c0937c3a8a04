"""Stream state reduction for inference output."""

from .reducer import (
    StreamPhase,
    StreamState,
    StreamStep,
    initial_stream_state,
    reduce_chunk,
)

__all__ = [
    "StreamPhase",
    "StreamState",
    "StreamStep",
    "initial_stream_state",
    "reduce_chunk",
]
