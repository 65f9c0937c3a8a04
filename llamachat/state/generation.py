"""Request, parameter, and result dataclasses for a generation.

ChatTurn:
    One prior message in the conversation (user or assistant).

GenerationRequest:
    The caller's immutable request: the new message plus prior turns and
    optional per-request sampling fields.

GenerationParameters:
    Fully resolved sampling parameters handed to the inference binary.

GenerationResult:
    The cleaned reply plus a length-based token estimate and wall time.
"""

from __future__ import annotations

import math
from datetime import datetime
from dataclasses import field, dataclass

from ..config.limits import CHARS_PER_TOKEN


@dataclass(frozen=True, slots=True)
class ChatTurn:
    role: str  # "user" | "assistant"
    content: str
    timestamp: datetime | None = None


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    message: str
    history: tuple[ChatTurn, ...] = field(default_factory=tuple)
    max_tokens: int | None = None
    temperature: float | None = None


@dataclass(frozen=True, slots=True)
class GenerationParameters:
    temperature: float
    max_tokens: int
    top_p: float
    repeat_penalty: float
    context_size: int
    seed: int = -1

    def as_dict(self) -> dict[str, float | int]:
        return {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "repeat_penalty": self.repeat_penalty,
            "context_size": self.context_size,
            "seed": self.seed,
        }


@dataclass(frozen=True, slots=True)
class GenerationResult:
    reply: str
    estimated_tokens: int
    elapsed_ms: int

    @classmethod
    def from_reply(cls, reply: str, elapsed_ms: int) -> GenerationResult:
        return cls(
            reply=reply,
            estimated_tokens=estimate_tokens(reply),
            elapsed_ms=elapsed_ms,
        )

    def as_dict(self) -> dict[str, str | int]:
        return {
            "response": self.reply,
            "tokens_used": self.estimated_tokens,
            "processing_time_ms": self.elapsed_ms,
        }


def estimate_tokens(text: str) -> int:
    """Approximate token usage from character length."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


__all__ = [
    "ChatTurn",
    "GenerationRequest",
    "GenerationParameters",
    "GenerationResult",
    "estimate_tokens",
]
