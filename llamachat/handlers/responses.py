"""JSON response helpers shared by the HTTP handlers."""

from __future__ import annotations

from typing import Any

from fastapi.responses import ORJSONResponse

from ..errors import GenerationError, ValidationError, classify_error

_STATUS_BY_LABEL: dict[str, int] = {
    "validation": 400,
    "model_not_found": 404,
    "no_active_model": 409,
    "busy": 409,
    "cancelled": 499,
    "empty_output": 502,
    "process_error": 502,
    "spawn_failed": 503,
    "timeout": 504,
}


def ok_response(data: Any, *, message: str | None = None, status_code: int = 200) -> ORJSONResponse:
    body: dict[str, Any] = {"ok": True, "data": data}
    if message:
        body["message"] = message
    return ORJSONResponse(body, status_code=status_code)


def error_response(exc: Exception) -> ORJSONResponse:
    label = classify_error(exc)
    body: dict[str, Any] = {"ok": False, "error": label, "message": str(exc)}
    if isinstance(exc, ValidationError):
        body["code"] = exc.error_code
        body["message"] = exc.message
    elif isinstance(exc, GenerationError) and exc.detail:
        body["detail"] = exc.detail[-500:]
    return ORJSONResponse(body, status_code=_STATUS_BY_LABEL.get(label, 500))


__all__ = ["error_response", "ok_response"]
