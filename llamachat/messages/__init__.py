"""Inbound payload validation and outbound reply sanitization."""

from .sanitize import find_stop_marker, sanitize_response, truncate_at_stop
from .validators import parse_chat_request, parse_history, require_message, require_model_name

__all__ = [
    "find_stop_marker",
    "parse_chat_request",
    "parse_history",
    "require_message",
    "require_model_name",
    "sanitize_response",
    "truncate_at_stop",
]
