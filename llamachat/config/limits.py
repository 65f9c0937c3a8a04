"""Parameter bounds and history limits."""

import os


# Generation parameter bounds (inclusive)
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0
MAX_TOKENS_MIN = 1
MAX_TOKENS_MAX = 4096
TOP_P_MIN = 0.0
TOP_P_MAX = 1.0
REPEAT_PENALTY_MIN = 0.0
REPEAT_PENALTY_MAX = 2.0
CONTEXT_SIZE_MIN = 512
CONTEXT_SIZE_MAX = 8192

# Only the most recent turns are rendered into the prompt
HISTORY_MAX_TURNS = int(os.getenv("HISTORY_MAX_TURNS", "10"))

# Incoming chat message length cap (characters)
CHAT_MESSAGE_MAX_CHARS = int(os.getenv("CHAT_MESSAGE_MAX_CHARS", "4000"))

# Accepted history entries per request before truncation
CHAT_HISTORY_MAX_ITEMS = int(os.getenv("CHAT_HISTORY_MAX_ITEMS", "200"))

# Rough characters-per-token ratio used for usage estimates
CHARS_PER_TOKEN = 4


__all__ = [
    "TEMPERATURE_MIN",
    "TEMPERATURE_MAX",
    "MAX_TOKENS_MIN",
    "MAX_TOKENS_MAX",
    "TOP_P_MIN",
    "TOP_P_MAX",
    "REPEAT_PENALTY_MIN",
    "REPEAT_PENALTY_MAX",
    "CONTEXT_SIZE_MIN",
    "CONTEXT_SIZE_MAX",
    "HISTORY_MAX_TURNS",
    "CHAT_MESSAGE_MAX_CHARS",
    "CHAT_HISTORY_MAX_ITEMS",
    "CHARS_PER_TOKEN",
]
