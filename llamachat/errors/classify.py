"""Exception classification helpers for log and response labels."""

from __future__ import annotations

from .catalog import ModelNotFoundError
from .generation import GenerationError
from .validation import ValidationError

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (ValidationError, "validation"),
    (ModelNotFoundError, "model_not_found"),
    (TimeoutError, "timeout"),
    (OSError, "os_error"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a stable category label."""

    if isinstance(exc, GenerationError):
        return exc.kind
    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
