"""Descriptor and request builders for tests."""

from __future__ import annotations

from llamachat.config.families import ModelFamily
from llamachat.detection import ModelDescriptor
from llamachat.state import ChatTurn, GenerationRequest


def descriptor_for(family: ModelFamily) -> ModelDescriptor:
    return ModelDescriptor.for_family(family)


def make_request(message: str = "Hi", turns: int = 0, **kwargs: int | float) -> GenerationRequest:
    history = tuple(
        ChatTurn(role="user" if idx % 2 == 0 else "assistant", content=f"turn-{idx}")
        for idx in range(turns)
    )
    return GenerationRequest(message=message, history=history, **kwargs)  # type: ignore[arg-type]


__all__ = ["descriptor_for", "make_request"]
