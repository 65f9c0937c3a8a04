"""Regex assets shared by the stream reducer and the response sanitizer."""

from __future__ import annotations

import re

# ============================================================================
# INTERACTIVE MODE MARKERS
# ============================================================================

# The binary prints "> " at the start of a line when it waits for stdin input
INTERACTIVE_READY_PATTERN = re.compile(r"(?:^|\n)>[ \t]*$")

# Lines emitted around the interactive loop that never belong to a reply
INTERACTIVE_ARTIFACT_LINE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\s*(?:<\|im_start\|>)?\s*(?:user|system)\s*:?\s*$", re.IGNORECASE),
    re.compile(r"^\s*==\s*Running in interactive mode", re.IGNORECASE),
    re.compile(r"^\s*-\s*(?:Press|To return|If you want|Not using system)", re.IGNORECASE),
)

# Performance and timing banners printed by llama.cpp
METRICS_BANNER_PATTERN = re.compile(
    r"^\s*(?:llama_perf_\w+|llama_print_timings|common_perf_print|main:\s|\[\s*Prompt:|"
    r"(?:load|sample|sampling|prompt eval|eval|total) time\s*=)",
    re.IGNORECASE,
)

# ============================================================================
# RESPONSE SANITIZATION PATTERNS
# ============================================================================

# Whole role headers such as "<|start_header_id|>assistant<|end_header_id|>" or "<|im_start|>assistant"
TEMPLATE_ROLE_HEADER_PATTERN = re.compile(
    r"<\|start_header_id\|>\s*\w+\s*<\|end_header_id\|>|<\|im_start\|>\s*\w+",
)

# Remaining special tokens ("<|eot_id|>", "<|im_end|>", "<s>", "</s>", ...)
TEMPLATE_TAG_PATTERN = re.compile(r"<\|[A-Za-z0-9_]+\|>|</?s>")

# A role label alone on the first line, or followed by a colon
LEADING_ROLE_LABEL_PATTERN = re.compile(
    r"\A\s*(?:assistant|system|user)(?:[ \t]*:[ \t]*|[ \t]*(?:\n|\Z))",
    re.IGNORECASE,
)

# Echoed interactive input lines ("> some text")
ECHOED_PROMPT_LINE_PATTERN = re.compile(r"^>(?:[ \t].*)?$\n?", re.MULTILINE)

# Runs of blank lines left behind after stripping
BLANK_LINE_RUN_PATTERN = re.compile(r"\n{3,}")


__all__ = [
    "INTERACTIVE_READY_PATTERN",
    "INTERACTIVE_ARTIFACT_LINE_PATTERNS",
    "METRICS_BANNER_PATTERN",
    "TEMPLATE_ROLE_HEADER_PATTERN",
    "TEMPLATE_TAG_PATTERN",
    "LEADING_ROLE_LABEL_PATTERN",
    "ECHOED_PROMPT_LINE_PATTERN",
    "BLANK_LINE_RUN_PATTERN",
]
