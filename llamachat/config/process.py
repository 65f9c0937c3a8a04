"""External inference process configuration.

The inference binary is a llama.cpp style CLI (``llama-cli`` or the older
``main``). Model files are GGUF checkpoints stored under ``MODELS_DIR``.
"""

import os


# Path (or PATH-resolvable name) of the inference binary
LLAMA_CPP_PATH = os.getenv("LLAMA_CPP_PATH", "llama-cli")

# Directory scanned for *.gguf model files
MODELS_DIR = os.getenv("MODELS_DIR", os.path.join(os.getcwd(), "models"))

# Optional model activated at startup (file name inside MODELS_DIR or absolute path)
ACTIVE_MODEL = os.getenv("ACTIVE_MODEL", "")

# Bytes requested per stdout read; small reads keep stop detection responsive
STDOUT_READ_BYTES = int(os.getenv("STDOUT_READ_BYTES", "256"))

# Trailing stderr kept for error detail when the process fails
STDERR_TAIL_CHARS = int(os.getenv("STDERR_TAIL_CHARS", "2000"))

# Flags for the two prompt delivery modes
PROMPT_ARG_FLAGS: tuple[str, ...] = ("--no-display-prompt",)
CONVERSATION_ARG_FLAGS: tuple[str, ...] = ("-cnv",)

# Argument and banner used by the liveness probe
PROBE_ARGS: tuple[str, ...] = ("--help",)
PROBE_BANNER = os.getenv("PROBE_BANNER", "usage:")


__all__ = [
    "LLAMA_CPP_PATH",
    "MODELS_DIR",
    "ACTIVE_MODEL",
    "STDOUT_READ_BYTES",
    "STDERR_TAIL_CHARS",
    "PROMPT_ARG_FLAGS",
    "CONVERSATION_ARG_FLAGS",
    "PROBE_ARGS",
    "PROBE_BANNER",
]
