"""Response sanitizer for raw inference output.

Pipeline:
    1. Truncate at the earliest stop marker
    2. For templated families: drop role headers and special tokens, echoed
       interactive input lines, and a leading role label
    3. Trim surrounding whitespace

The pipeline is pure and idempotent; sanitizing an already sanitized reply
returns it unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..config.filters import (
    BLANK_LINE_RUN_PATTERN,
    ECHOED_PROMPT_LINE_PATTERN,
    LEADING_ROLE_LABEL_PATTERN,
    TEMPLATE_ROLE_HEADER_PATTERN,
    TEMPLATE_TAG_PATTERN,
)
from ..detection import ModelDescriptor


def find_stop_marker(text: str, markers: Iterable[str]) -> int:
    """Return the index of the earliest stop marker, or -1 if none occurs."""
    earliest = -1
    for marker in markers:
        if not marker:
            continue
        idx = text.find(marker)
        if idx != -1 and (earliest == -1 or idx < earliest):
            earliest = idx
    return earliest


def truncate_at_stop(text: str, markers: Iterable[str]) -> str:
    idx = find_stop_marker(text, markers)
    return text if idx == -1 else text[:idx]


def sanitize_response(raw: str, descriptor: ModelDescriptor) -> str:
    """Clean accumulated raw output into the final reply text."""
    if not raw:
        return ""

    cleaned = truncate_at_stop(raw, descriptor.stop_markers)
    if descriptor.uses_internal_chat_template:
        cleaned = _strip_template_artifacts(cleaned)
    return cleaned.strip()


def _strip_template_artifacts(text: str) -> str:
    cleaned = TEMPLATE_ROLE_HEADER_PATTERN.sub("", text)
    cleaned = TEMPLATE_TAG_PATTERN.sub("", cleaned)
    cleaned = ECHOED_PROMPT_LINE_PATTERN.sub("", cleaned)
    cleaned = _strip_leading_role_labels(cleaned)
    return BLANK_LINE_RUN_PATTERN.sub("\n\n", cleaned)


def _strip_leading_role_labels(text: str) -> str:
    # Loop so stacked labels ("assistant\nAssistant: ...") collapse in one pass
    while True:
        match = LEADING_ROLE_LABEL_PATTERN.match(text)
        if not match or match.end() == 0:
            return text
        text = text[match.end():]


__all__ = [
    "find_stop_marker",
    "sanitize_response",
    "truncate_at_stop",
]
