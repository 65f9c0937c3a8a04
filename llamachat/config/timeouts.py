"""Generation and probe timeouts.

The generation deadline scales with the requested output length:

    timeout_ms = max(GEN_TIMEOUT_FLOOR_MS, max_tokens * GEN_TIMEOUT_PER_TOKEN_MS)
"""

import os


# Lower bound for the generation deadline in milliseconds
GEN_TIMEOUT_FLOOR_MS = int(os.getenv("GEN_TIMEOUT_FLOOR_MS", "30000"))

# Deadline budget per requested output token in milliseconds
GEN_TIMEOUT_PER_TOKEN_MS = int(os.getenv("GEN_TIMEOUT_PER_TOKEN_MS", "100"))

# Liveness probe deadline in seconds
PROBE_TIMEOUT_S = float(os.getenv("PROBE_TIMEOUT_S", "5"))

# How long a terminated process may take to exit before it is killed
TERMINATE_GRACE_S = float(os.getenv("TERMINATE_GRACE_S", "2"))


__all__ = [
    "GEN_TIMEOUT_FLOOR_MS",
    "GEN_TIMEOUT_PER_TOKEN_MS",
    "PROBE_TIMEOUT_S",
    "TERMINATE_GRACE_S",
]
