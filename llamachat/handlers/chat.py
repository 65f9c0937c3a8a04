"""HTTP handlers for chat generation."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request

from ..errors import GenerationError, ValidationError
from ..messages import parse_chat_request
from .instances import AppServices
from .responses import error_response, ok_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat")


def _services(request: Request) -> AppServices:
    return request.app.state.services


@router.post("")
async def send_message(request: Request, payload: Any = Body(default=None)):
    services = _services(request)
    try:
        chat_request, preamble, overrides = parse_chat_request(payload)
    except ValidationError as err:
        return error_response(err)

    logger.info("chat: request message_chars=%d history=%d", len(chat_request.message), len(chat_request.history))
    try:
        result = await services.generation.generate(chat_request, preamble, overrides)
    except (GenerationError, ValidationError) as err:
        logger.warning("chat: generation failed err=%s", err)
        return error_response(err)
    return ok_response(result.as_dict(), message="response generated")


@router.post("/stop")
async def stop_generation(request: Request):
    stopped = _services(request).generation.cancel_active()
    message = "generation stopped" if stopped else "no active generation"
    return ok_response({"stopped": stopped}, message=message)


@router.get("/status")
async def get_status(request: Request):
    return ok_response(_services(request).generation.get_status())


@router.get("/test")
async def test_connection(request: Request):
    alive = await _services(request).generation.test_external_process()
    return ok_response({"connection_ok": alive}, status_code=200 if alive else 503)


__all__ = ["router"]
