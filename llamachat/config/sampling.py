"""Baseline sampling defaults for the inference binary.

These values are the lowest-priority layer when generation parameters are
resolved:

    baseline (this module) < model family defaults < caller overrides

Sampling Parameters:
    temperature: Controls randomness (0=deterministic, higher=more random).
    max_tokens: Output length cap passed as ``-n``.
    top_p (nucleus sampling): Cumulative probability threshold.
    repeat_penalty: Penalty for repeating tokens (1.0 = no penalty).
    context_size: Context window passed as ``-c``.
    seed: RNG seed; -1 leaves the binary's own random seed in place.

All values can be overridden via environment variables or per-request.
"""

import os


CHAT_TEMPERATURE = float(os.getenv("CHAT_TEMPERATURE", "0.7"))
CHAT_MAX_TOKENS = int(os.getenv("CHAT_MAX_TOKENS", "2048"))
CHAT_TOP_P = float(os.getenv("CHAT_TOP_P", "0.9"))
CHAT_REPEAT_PENALTY = float(os.getenv("CHAT_REPEAT_PENALTY", "1.1"))
CHAT_CONTEXT_SIZE = int(os.getenv("CHAT_CONTEXT_SIZE", "4096"))
CHAT_SEED = int(os.getenv("CHAT_SEED", "-1"))

# Sentinel seed value meaning "do not pass --seed"
SEED_UNSET = -1


__all__ = [
    "CHAT_TEMPERATURE",
    "CHAT_MAX_TOKENS",
    "CHAT_TOP_P",
    "CHAT_REPEAT_PENALTY",
    "CHAT_CONTEXT_SIZE",
    "CHAT_SEED",
    "SEED_UNSET",
]
