"""Active model registry.

Tracks which GGUF file under the models directory is active and notifies
subscribers when it changes so cached per-model state can be dropped.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path
from datetime import datetime, timezone
from collections.abc import Callable

from ..errors import ModelNotFoundError

logger = logging.getLogger(__name__)

MODEL_SUFFIX = ".gguf"

ActiveModelListener = Callable[[str], None]


class ModelRegistry:
    """Holds the active model path and change listeners."""

    def __init__(self, models_dir: str | os.PathLike[str]) -> None:
        self._models_dir = Path(models_dir)
        self._active_path = ""
        self._listeners: list[ActiveModelListener] = []

    @property
    def models_dir(self) -> Path:
        return self._models_dir

    def get_active_model_path(self) -> str:
        """Return the active model path, or an empty string if none is set."""
        return self._active_path

    def on_active_model_changed(self, listener: ActiveModelListener) -> None:
        """Register a callback invoked with the new path after every change."""
        self._listeners.append(listener)

    def list_models(self) -> list[dict[str, object]]:
        """List GGUF files in the models directory, sorted by name."""
        if not self._models_dir.is_dir():
            return []
        models: list[dict[str, object]] = []
        for entry in sorted(self._models_dir.iterdir()):
            if not entry.is_file() or entry.suffix.lower() != MODEL_SUFFIX:
                continue
            stat = entry.stat()
            models.append({
                "name": entry.stem,
                "filename": entry.name,
                "size": stat.st_size,
                "path": str(entry),
                "is_active": str(entry) == self._active_path,
                "modified_at": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
            })
        return models

    def set_active_model(self, name: str, *, allow_absolute: bool = False) -> str:
        """Activate a GGUF model by file name inside the models dir.

        Args:
            name: File name of the model. Directory parts are ignored.
            allow_absolute: Accept an absolute path outside the models dir
                (startup configuration only, never caller input).

        Raises:
            ModelNotFoundError: If the file does not exist or is not a GGUF file.
        """
        path = self._resolve(name, allow_absolute=allow_absolute)
        if path.suffix.lower() != MODEL_SUFFIX or not path.is_file():
            raise ModelNotFoundError(name)
        self._set_active(str(path))
        logger.info("model_registry: active model set name=%s", path.name)
        return self._active_path

    def clear_active_model(self) -> None:
        if not self._active_path:
            return
        self._set_active("")
        logger.info("model_registry: active model cleared")

    def _resolve(self, name: str, *, allow_absolute: bool) -> Path:
        candidate = Path(name)
        if allow_absolute and candidate.is_absolute():
            return candidate
        # Only the file name counts; paths never leave the models directory
        return self._models_dir / candidate.name

    def _set_active(self, path: str) -> None:
        changed = path != self._active_path
        self._active_path = path
        if not changed:
            return
        for listener in list(self._listeners):
            listener(path)


__all__ = ["MODEL_SUFFIX", "ModelRegistry"]
