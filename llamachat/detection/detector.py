"""Model type detection with a per-path cache."""

from __future__ import annotations

import logging

from ..catalog import ModelRegistry
from ..config.families import FAMILY_NAME_HINTS, ModelFamily
from ..errors import NoActiveModelError
from .descriptor import ModelDescriptor

logger = logging.getLogger(__name__)


def detect_family(model_path: str) -> ModelFamily:
    """Pick the first family whose name hint appears in the path."""
    lowered = model_path.lower()
    for family, hints in FAMILY_NAME_HINTS:
        if any(hint in lowered for hint in hints):
            return family
    return ModelFamily.GENERIC


class ModelTypeDetector:
    """Resolves and caches the descriptor for the registry's active model.

    The cache holds a single entry keyed by model path. It is dropped whenever
    the registry reports an active model change, or on an explicit reset().
    """

    def __init__(self, registry: ModelRegistry) -> None:
        self._registry = registry
        self._cached_path: str | None = None
        self._cached: ModelDescriptor | None = None
        registry.on_active_model_changed(self._handle_model_changed)

    def describe_active_model(self) -> ModelDescriptor:
        """Return the descriptor for the active model.

        Raises:
            NoActiveModelError: If no model is active.
        """
        path = self._registry.get_active_model_path()
        if not path:
            raise NoActiveModelError("no active model; activate a model first")
        if self._cached is not None and self._cached_path == path:
            return self._cached

        family = detect_family(path)
        descriptor = ModelDescriptor.for_family(family)
        self._cached_path = path
        self._cached = descriptor
        logger.info(
            "model_detector: detected family=%s template=%s interactive=%s path=%s",
            family.value,
            descriptor.uses_internal_chat_template,
            descriptor.interactive_drive_mode,
            path,
        )
        return descriptor

    def cached_descriptor(self) -> ModelDescriptor | None:
        return self._cached

    def reset(self) -> None:
        """Drop the cached descriptor so the next call re-detects."""
        self._cached_path = None
        self._cached = None

    def _handle_model_changed(self, _path: str) -> None:
        logger.debug("model_detector: active model changed; cache reset")
        self.reset()


__all__ = ["ModelTypeDetector", "detect_family"]
