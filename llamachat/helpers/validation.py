"""Environment validation helpers."""

from __future__ import annotations

import os
import shutil
import logging

from ..config import (
    GEN_TIMEOUT_FLOOR_MS,
    GEN_TIMEOUT_PER_TOKEN_MS,
    HISTORY_MAX_TURNS,
    LLAMA_CPP_PATH,
    MODELS_DIR,
    PROBE_TIMEOUT_S,
    STDOUT_READ_BYTES,
)

logger = logging.getLogger(__name__)


def validate_env() -> None:
    """Validate required configuration once during startup."""
    errors: list[str] = []

    if not LLAMA_CPP_PATH:
        errors.append("LLAMA_CPP_PATH must not be empty")
    if STDOUT_READ_BYTES <= 0:
        errors.append("STDOUT_READ_BYTES must be positive")
    if HISTORY_MAX_TURNS < 0:
        errors.append("HISTORY_MAX_TURNS must be >= 0")
    if GEN_TIMEOUT_FLOOR_MS <= 0 or GEN_TIMEOUT_PER_TOKEN_MS <= 0:
        errors.append("GEN_TIMEOUT_FLOOR_MS and GEN_TIMEOUT_PER_TOKEN_MS must be positive")
    if PROBE_TIMEOUT_S <= 0:
        errors.append("PROBE_TIMEOUT_S must be positive")

    if errors:
        raise RuntimeError("Configuration errors:\n  - " + "\n  - ".join(errors))

    # Soft checks: the binary or models may be installed after startup
    if LLAMA_CPP_PATH and shutil.which(LLAMA_CPP_PATH) is None and not os.path.isfile(LLAMA_CPP_PATH):
        logger.warning("validate_env: inference binary not found path=%s", LLAMA_CPP_PATH)
    if not os.path.isdir(MODELS_DIR):
        logger.warning("validate_env: models directory missing path=%s", MODELS_DIR)


__all__ = ["validate_env"]
