"""Model catalog access."""

from .registry import MODEL_SUFFIX, ModelRegistry

__all__ = ["MODEL_SUFFIX", "ModelRegistry"]
