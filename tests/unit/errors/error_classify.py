"""Unit tests for exception classification."""

from __future__ import annotations

import asyncio

import pytest

from llamachat.errors import (
    EmptyOutputError,
    GenerationBusyError,
    GenerationCancelledError,
    GenerationTimeoutError,
    ModelNotFoundError,
    NoActiveModelError,
    ProcessError,
    SpawnError,
    ValidationError,
    classify_error,
)


@pytest.mark.parametrize(
    ("exc", "label"),
    [
        (NoActiveModelError("x"), "no_active_model"),
        (SpawnError("x"), "spawn_failed"),
        (EmptyOutputError("x"), "empty_output"),
        (GenerationTimeoutError("x"), "timeout"),
        (GenerationCancelledError("x"), "cancelled"),
        (ProcessError("x", returncode=1), "process_error"),
        (GenerationBusyError("x"), "busy"),
        (ValidationError("bad", "x"), "validation"),
        (ModelNotFoundError("m.gguf"), "model_not_found"),
        (asyncio.TimeoutError(), "timeout"),
        (FileNotFoundError("llama-cli"), "os_error"),
        (RuntimeError("boom"), "unknown"),
    ],
)
def test_classify_error(exc: BaseException, label: str) -> None:
    assert classify_error(exc) == label


def test_process_error_carries_detail() -> None:
    exc = ProcessError("exited with code 1", detail="stderr tail", returncode=1)
    assert exc.message == "exited with code 1"
    assert exc.detail == "stderr tail"
    assert exc.returncode == 1
