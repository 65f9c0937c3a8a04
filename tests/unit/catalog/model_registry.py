"""Unit tests for the active model registry."""

from __future__ import annotations

import pytest

from llamachat.catalog import ModelRegistry
from llamachat.errors import ModelNotFoundError


def test_list_models_only_gguf_sorted(tmp_path) -> None:
    (tmp_path / "b-model.gguf").write_bytes(b"12345")
    (tmp_path / "a-model.GGUF").write_bytes(b"1")
    (tmp_path / "notes.txt").write_text("x")
    (tmp_path / "subdir.gguf").mkdir()

    models = ModelRegistry(tmp_path).list_models()

    assert [m["filename"] for m in models] == ["a-model.GGUF", "b-model.gguf"]
    assert models[1]["name"] == "b-model"
    assert models[1]["size"] == 5
    assert models[1]["is_active"] is False


def test_list_models_missing_dir_is_empty(tmp_path) -> None:
    assert ModelRegistry(tmp_path / "missing").list_models() == []


def test_set_active_model_by_filename(tmp_path) -> None:
    (tmp_path / "phi3.gguf").write_bytes(b"x")
    registry = ModelRegistry(tmp_path)

    path = registry.set_active_model("phi3.gguf")

    assert path == str(tmp_path / "phi3.gguf")
    assert registry.get_active_model_path() == path
    assert registry.list_models()[0]["is_active"] is True


def test_set_active_model_rejects_traversal(tmp_path) -> None:
    models_dir = tmp_path / "models"
    models_dir.mkdir()
    (tmp_path / "outside.gguf").write_bytes(b"x")
    registry = ModelRegistry(models_dir)

    with pytest.raises(ModelNotFoundError):
        registry.set_active_model("../outside.gguf")


def test_set_active_model_unknown_keeps_previous(tmp_path) -> None:
    (tmp_path / "phi3.gguf").write_bytes(b"x")
    registry = ModelRegistry(tmp_path)
    registry.set_active_model("phi3.gguf")

    with pytest.raises(ModelNotFoundError) as excinfo:
        registry.set_active_model("nope.gguf")

    assert excinfo.value.name == "nope.gguf"
    assert registry.get_active_model_path().endswith("phi3.gguf")


def test_listeners_fire_only_on_change(tmp_path) -> None:
    (tmp_path / "phi3.gguf").write_bytes(b"x")
    registry = ModelRegistry(tmp_path)
    seen: list[str] = []
    registry.on_active_model_changed(seen.append)

    registry.set_active_model("phi3.gguf")
    registry.set_active_model("phi3.gguf")
    registry.clear_active_model()
    registry.clear_active_model()

    assert seen == [str(tmp_path / "phi3.gguf"), ""]
    assert registry.get_active_model_path() == ""


def test_absolute_path_outside_models_dir_rejected(tmp_path) -> None:
    models_dir = tmp_path / "models"
    models_dir.mkdir()
    outside = tmp_path / "elsewhere.gguf"
    outside.write_bytes(b"x")
    registry = ModelRegistry(models_dir)

    with pytest.raises(ModelNotFoundError):
        registry.set_active_model(str(outside))

    assert registry.get_active_model_path() == ""


def test_absolute_path_inside_models_dir_resolves_by_name(tmp_path) -> None:
    (tmp_path / "phi3.gguf").write_bytes(b"x")
    registry = ModelRegistry(tmp_path)

    assert registry.set_active_model(str(tmp_path / "phi3.gguf")) == str(tmp_path / "phi3.gguf")


def test_non_gguf_file_rejected(tmp_path) -> None:
    (tmp_path / "notes.txt").write_text("x")
    registry = ModelRegistry(tmp_path)

    with pytest.raises(ModelNotFoundError):
        registry.set_active_model("notes.txt")


def test_allow_absolute_accepts_configured_path(tmp_path) -> None:
    models_dir = tmp_path / "models"
    models_dir.mkdir()
    outside = tmp_path / "configured.gguf"
    outside.write_bytes(b"x")
    registry = ModelRegistry(models_dir)

    assert registry.set_active_model(str(outside), allow_absolute=True) == str(outside)
