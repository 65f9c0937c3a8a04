"""Main FastAPI server for the llamachat generation core.

This module wires the service graph into an HTTP app:

- REST endpoints for health checks (/healthz, /)
- Chat generation, stop, status, and binary liveness (/chat/...)
- Model listing and activation (/models/...)

Server Lifecycle:
    1. On startup: validate configuration, probe the inference binary
    2. Serve chat requests, one generation at a time
    3. On shutdown: cancel any running generation so its process is reaped

Example:
    Run directly with uvicorn:
        $ uvicorn llamachat.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from .handlers import AppServices, build_services, chat_router, models_router
from .helpers import validate_env
from .logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(services: AppServices | None = None) -> FastAPI:
    """Build the app around an explicit service graph."""
    graph = services or build_services()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        alive = await graph.generation.test_external_process()
        logger.info("startup: inference binary reachable=%s", alive)
        try:
            yield
        finally:
            if graph.generation.cancel_active():
                logger.info("shutdown: cancelled running generation")

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=lifespan)
    app.state.services = graph

    @app.get("/")
    async def root():
        """Root endpoint for load balancer health checks."""
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz():
        """Health check endpoint."""
        status = graph.generation.get_status()
        return {"status": "ok", "model_loaded": status["model_loaded"]}

    app.include_router(chat_router)
    app.include_router(models_router)
    return app


def _create_default_app() -> FastAPI:
    configure_logging()
    validate_env()
    return create_app()


app = _create_default_app()


__all__ = ["app", "create_app"]
