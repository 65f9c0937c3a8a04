"""Validation of incoming chat and model payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ..config.limits import CHAT_HISTORY_MAX_ITEMS, CHAT_MESSAGE_MAX_CHARS
from ..errors import ValidationError
from ..state import ChatTurn, GenerationRequest

_VALID_ROLES = frozenset({"user", "assistant"})

# Process arguments cannot carry NUL characters
_NUL = "\x00"


def require_message(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("missing_message", "message is required and cannot be empty")
    message = raw.strip()
    if _NUL in message:
        raise ValidationError("invalid_message", "message must not contain NUL characters")
    if len(message) > CHAT_MESSAGE_MAX_CHARS:
        raise ValidationError(
            "message_too_long",
            f"message must be at most {CHAT_MESSAGE_MAX_CHARS} characters",
        )
    return message


def parse_history(raw: Any) -> tuple[ChatTurn, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValidationError("invalid_history", "history must be a list of messages")
    if len(raw) > CHAT_HISTORY_MAX_ITEMS:
        raise ValidationError(
            "history_too_long",
            f"history must contain at most {CHAT_HISTORY_MAX_ITEMS} messages",
        )
    return tuple(_parse_turn(item, idx) for idx, item in enumerate(raw))


def _parse_turn(item: Any, idx: int) -> ChatTurn:
    if not isinstance(item, dict):
        raise ValidationError("invalid_history", f"history[{idx}] must be an object")
    role = item.get("role")
    if role not in _VALID_ROLES:
        raise ValidationError("invalid_history", f"history[{idx}].role must be 'user' or 'assistant'")
    content = item.get("content")
    if not isinstance(content, str):
        raise ValidationError("invalid_history", f"history[{idx}].content must be a string")
    if _NUL in content:
        raise ValidationError("invalid_history", f"history[{idx}].content must not contain NUL characters")
    return ChatTurn(role=role, content=content, timestamp=_parse_timestamp(item.get("timestamp"), idx))


def _parse_timestamp(raw: Any, idx: int) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValidationError("invalid_history", f"history[{idx}].timestamp must be an ISO-8601 string")
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValidationError(
            "invalid_history",
            f"history[{idx}].timestamp must be an ISO-8601 string",
        ) from exc


def _optional_int(raw: Any, field: str) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValidationError(f"invalid_{field}", f"{field} must be an integer")
    return raw


def _optional_float(raw: Any, field: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValidationError(f"invalid_{field}", f"{field} must be a number")
    return float(raw)


def parse_chat_request(
    payload: Any,
) -> tuple[GenerationRequest, str | None, dict[str, float | int] | None]:
    """Turn a JSON body into (request, preamble, parameter overrides).

    Range checks on sampling values happen later, when parameters are merged.
    """
    if not isinstance(payload, dict):
        raise ValidationError("invalid_payload", "request body must be a JSON object")

    request = GenerationRequest(
        message=require_message(payload.get("message")),
        history=parse_history(payload.get("history")),
        max_tokens=_optional_int(payload.get("max_tokens"), "max_tokens"),
        temperature=_optional_float(payload.get("temperature"), "temperature"),
    )

    preamble = payload.get("preprompt")
    if preamble is not None and not isinstance(preamble, str):
        raise ValidationError("invalid_preprompt", "preprompt must be a string")
    if preamble is not None and _NUL in preamble:
        raise ValidationError("invalid_preprompt", "preprompt must not contain NUL characters")

    overrides = payload.get("parameters")
    if overrides is not None and not isinstance(overrides, dict):
        raise ValidationError("invalid_parameters", "parameters must be an object")

    return request, preamble, overrides


def require_model_name(payload: Any) -> str:
    if not isinstance(payload, dict):
        raise ValidationError("invalid_payload", "request body must be a JSON object")
    name = payload.get("filename") or payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("missing_filename", "filename is required")
    return name.strip()


__all__ = [
    "parse_chat_request",
    "parse_history",
    "require_message",
    "require_model_name",
]
