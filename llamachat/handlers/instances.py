"""Assembly point for the process-wide service graph.

Components are constructed explicitly and handed to the FastAPI app, which
owns their lifetime. Tests build their own graph with a fake spawner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..catalog import ModelRegistry
from ..config import ACTIVE_MODEL, LLAMA_CPP_PATH, MODELS_DIR
from ..detection import ModelTypeDetector
from ..errors import ModelNotFoundError
from ..execution import GenerationService, ProcessSpawner

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppServices:
    registry: ModelRegistry
    detector: ModelTypeDetector
    generation: GenerationService


def build_services(
    *,
    models_dir: str = MODELS_DIR,
    program: str = LLAMA_CPP_PATH,
    spawner: ProcessSpawner | None = None,
    active_model: str = ACTIVE_MODEL,
) -> AppServices:
    registry = ModelRegistry(models_dir)
    detector = ModelTypeDetector(registry)
    generation = GenerationService(registry, detector, spawner=spawner, program=program)
    if active_model:
        try:
            registry.set_active_model(active_model, allow_absolute=True)
        except ModelNotFoundError:
            logger.warning("instances: configured ACTIVE_MODEL not found name=%s", active_model)
    return AppServices(registry=registry, detector=detector, generation=generation)


__all__ = ["AppServices", "build_services"]
