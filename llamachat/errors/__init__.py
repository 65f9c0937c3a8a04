"""Centralized exception classes for the generation core.

This module re-exports all domain-specific exceptions from their respective
modules, providing a single import point for error handling.

Organization:
    - generation.py: Generation outcome errors (precondition, spawn, empty
      output, timeout, cancel, process failure, busy)
    - validation.py: Input validation errors with error codes
    - catalog.py: Model catalog lookup errors
    - classify.py: Exception-to-label mapping
"""

from .catalog import ModelNotFoundError
from .classify import classify_error
from .validation import ValidationError
from .generation import (
    GenerationError,
    NoActiveModelError,
    SpawnError,
    EmptyOutputError,
    GenerationTimeoutError,
    GenerationCancelledError,
    ProcessError,
    GenerationBusyError,
)

__all__ = [
    # Generation outcomes
    "GenerationError",
    "NoActiveModelError",
    "SpawnError",
    "EmptyOutputError",
    "GenerationTimeoutError",
    "GenerationCancelledError",
    "ProcessError",
    "GenerationBusyError",
    # Catalog
    "ModelNotFoundError",
    # Validation
    "ValidationError",
    # Classification
    "classify_error",
]
