"""HTTP handlers for listing and activating model files."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from ..errors import ModelNotFoundError, ValidationError
from ..messages import require_model_name
from .instances import AppServices
from .responses import error_response, ok_response

router = APIRouter(prefix="/models")


def _services(request: Request) -> AppServices:
    return request.app.state.services


@router.get("")
async def list_models(request: Request):
    return ok_response(_services(request).registry.list_models())


@router.post("/active")
async def set_active_model(request: Request, payload: Any = Body(default=None)):
    registry = _services(request).registry
    try:
        path = registry.set_active_model(require_model_name(payload))
    except (ValidationError, ModelNotFoundError) as err:
        return error_response(err)
    return ok_response({"active_model": path}, message="active model updated")


__all__ = ["router"]
