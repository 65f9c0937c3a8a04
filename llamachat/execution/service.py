"""Generation service: the caller-facing entry point of the core.

The service owns at most one live ``GenerationSession``. A request arriving
while a session is running is rejected with ``GenerationBusyError``; there is
no queue and no preemption.
"""

from __future__ import annotations

import logging
from pathlib import Path
from datetime import datetime, timezone
from collections.abc import Mapping
from typing import Any

from ..catalog import ModelRegistry
from ..config import LLAMA_CPP_PATH
from ..detection import ModelTypeDetector
from ..errors import GenerationBusyError, NoActiveModelError
from ..logging import log_context
from ..prompting import build_prompt
from ..state import GenerationRequest, GenerationResult
from .params import build_args, compute_timeout_ms, resolve_parameters
from .probe import probe_binary
from .process import AsyncioProcessSpawner, ProcessSpawner
from .session import GenerationSession

logger = logging.getLogger(__name__)


class GenerationService:
    """Resolves model behavior, renders the prompt, and runs one session."""

    def __init__(
        self,
        registry: ModelRegistry,
        detector: ModelTypeDetector,
        *,
        spawner: ProcessSpawner | None = None,
        program: str = LLAMA_CPP_PATH,
    ) -> None:
        self._registry = registry
        self._detector = detector
        self._spawner = spawner or AsyncioProcessSpawner()
        self._program = program
        self._active: GenerationSession | None = None
        self._last_request_at: datetime | None = None

    @property
    def active_session(self) -> GenerationSession | None:
        return self._active

    async def generate(
        self,
        request: GenerationRequest,
        preamble: str | None = None,
        parameter_overrides: Mapping[str, float | int] | None = None,
    ) -> GenerationResult:
        """Produce a reply for ``request``.

        Args:
            request: Message plus bounded history and optional sampling fields.
            preamble: Optional system text placed ahead of the conversation.
            parameter_overrides: Sampling values that win over every default.

        Raises:
            GenerationBusyError: Another generation is running.
            NoActiveModelError: No model is active.
            ValidationError: Overrides are unknown or out of range.
            GenerationError: Any other classified session failure.
        """
        # Everything up to self._active assignment runs without awaiting
        if self._active is not None:
            raise GenerationBusyError("a generation is already running")

        descriptor = self._detector.describe_active_model()
        model_path = self._registry.get_active_model_path()
        params = resolve_parameters(descriptor, request, parameter_overrides)
        prompt = build_prompt(
            request.message,
            descriptor,
            preamble=preamble,
            history=request.history,
        )
        session = GenerationSession(
            spawner=self._spawner,
            program=self._program,
            args=build_args(model_path, params, prompt, descriptor),
            descriptor=descriptor,
            prompt=prompt,
            timeout_ms=compute_timeout_ms(params.max_tokens),
        )
        self._active = session
        self._last_request_at = datetime.now(timezone.utc)

        with log_context(session_id=session.session_id):
            logger.info(
                "generation_service: generate model=%s prompt_chars=%d history=%d params=%s",
                Path(model_path).name,
                len(prompt),
                len(request.history),
                params.as_dict(),
            )
            try:
                outcome = await session.run()
            finally:
                if self._active is session:
                    self._active = None
        return outcome.unwrap()

    def cancel_active(self) -> bool:
        """Cancel the running session; False when nothing is running."""
        session = self._active
        if session is None:
            logger.info("generation_service: cancel requested with no active generation")
            return False
        return session.cancel()

    def get_status(self) -> dict[str, Any]:
        path = self._registry.get_active_model_path()
        family = None
        if path:
            try:
                family = self._detector.describe_active_model().family.value
            except NoActiveModelError:
                family = None
        return {
            "model_loaded": bool(path),
            "model_name": Path(path).name if path else None,
            "model_family": family,
            "is_generating": self._active is not None,
            "last_request_at": self._last_request_at.isoformat() if self._last_request_at else None,
        }

    async def test_external_process(self) -> bool:
        """Liveness probe of the inference binary."""
        return await probe_binary(self._spawner, self._program)


__all__ = ["GenerationService"]
