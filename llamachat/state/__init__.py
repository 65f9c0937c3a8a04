"""Generation state dataclasses."""

from .session import SessionPhase
from .generation import (
    ChatTurn,
    GenerationRequest,
    GenerationParameters,
    GenerationResult,
    estimate_tokens,
)

__all__ = [
    "ChatTurn",
    "GenerationRequest",
    "GenerationParameters",
    "GenerationResult",
    "SessionPhase",
    "estimate_tokens",
]
