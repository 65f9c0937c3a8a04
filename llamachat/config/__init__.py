"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- process: inference binary, model directory, stream sizes
- sampling: baseline generation parameters
- limits: parameter bounds and history limits
- timeouts: generation deadline and probe timeout
- families: model family routing table
- logging: log level and format

Patterns live in ``config.filters`` and are imported directly by their users.
"""

from .process import (
    LLAMA_CPP_PATH,
    MODELS_DIR,
    ACTIVE_MODEL,
    STDOUT_READ_BYTES,
    STDERR_TAIL_CHARS,
    PROMPT_ARG_FLAGS,
    CONVERSATION_ARG_FLAGS,
    PROBE_ARGS,
    PROBE_BANNER,
)
from .sampling import (
    CHAT_TEMPERATURE,
    CHAT_MAX_TOKENS,
    CHAT_TOP_P,
    CHAT_REPEAT_PENALTY,
    CHAT_CONTEXT_SIZE,
    CHAT_SEED,
    SEED_UNSET,
)
from .limits import (
    HISTORY_MAX_TURNS,
    CHAT_MESSAGE_MAX_CHARS,
    CHAT_HISTORY_MAX_ITEMS,
    CHARS_PER_TOKEN,
)
from .timeouts import (
    GEN_TIMEOUT_FLOOR_MS,
    GEN_TIMEOUT_PER_TOKEN_MS,
    PROBE_TIMEOUT_S,
    TERMINATE_GRACE_S,
)
from .families import ModelFamily


__all__ = [
    # process
    "LLAMA_CPP_PATH",
    "MODELS_DIR",
    "ACTIVE_MODEL",
    "STDOUT_READ_BYTES",
    "STDERR_TAIL_CHARS",
    "PROMPT_ARG_FLAGS",
    "CONVERSATION_ARG_FLAGS",
    "PROBE_ARGS",
    "PROBE_BANNER",
    # sampling
    "CHAT_TEMPERATURE",
    "CHAT_MAX_TOKENS",
    "CHAT_TOP_P",
    "CHAT_REPEAT_PENALTY",
    "CHAT_CONTEXT_SIZE",
    "CHAT_SEED",
    "SEED_UNSET",
    # limits
    "HISTORY_MAX_TURNS",
    "CHAT_MESSAGE_MAX_CHARS",
    "CHAT_HISTORY_MAX_ITEMS",
    "CHARS_PER_TOKEN",
    # timeouts
    "GEN_TIMEOUT_FLOOR_MS",
    "GEN_TIMEOUT_PER_TOKEN_MS",
    "PROBE_TIMEOUT_S",
    "TERMINATE_GRACE_S",
    # families
    "ModelFamily",
]
