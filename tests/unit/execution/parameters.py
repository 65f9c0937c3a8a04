"""Unit tests for parameter resolution, process arguments, and deadlines."""

from __future__ import annotations

import pytest

from llamachat.config.families import ModelFamily
from llamachat.errors import ValidationError
from llamachat.execution.params import (
    baseline_parameters,
    build_args,
    compute_timeout_ms,
    resolve_parameters,
)

from tests.helpers import descriptor_for, make_request


# --- merge order ---


def test_family_defaults_override_baseline() -> None:
    params = resolve_parameters(descriptor_for(ModelFamily.LLAMA3))
    assert params.temperature == 0.6
    assert params.context_size == 8192
    assert params.max_tokens == baseline_parameters()["max_tokens"]


def test_request_fields_override_family_defaults() -> None:
    request = make_request(max_tokens=128, temperature=0.2)
    params = resolve_parameters(descriptor_for(ModelFamily.PHI3), request)
    assert params.max_tokens == 128
    assert params.temperature == 0.2


def test_overrides_win_over_request_fields() -> None:
    request = make_request(max_tokens=128, temperature=0.2)
    params = resolve_parameters(
        descriptor_for(ModelFamily.PHI3),
        request,
        {"temperature": 1.5, "seed": 7},
    )
    assert params.temperature == 1.5
    assert params.max_tokens == 128
    assert params.seed == 7


def test_none_override_is_ignored() -> None:
    params = resolve_parameters(descriptor_for(ModelFamily.PHI3), None, {"top_p": None})
    assert params.top_p == 0.9


# --- validation ---


@pytest.mark.parametrize(
    ("overrides", "code"),
    [
        ({"temperature": 2.5}, "invalid_temperature"),
        ({"temperature": -0.1}, "invalid_temperature"),
        ({"max_tokens": 0}, "invalid_max_tokens"),
        ({"max_tokens": 4097}, "invalid_max_tokens"),
        ({"max_tokens": 10.5}, "invalid_max_tokens"),
        ({"top_p": 1.01}, "invalid_top_p"),
        ({"repeat_penalty": 3}, "invalid_repeat_penalty"),
        ({"context_size": 256}, "invalid_context_size"),
        ({"seed": -2}, "invalid_seed"),
        ({"mirostat": 1}, "unknown_parameter"),
    ],
)
def test_out_of_range_parameters_rejected(overrides, code: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        resolve_parameters(descriptor_for(ModelFamily.GENERIC), None, overrides)
    assert excinfo.value.error_code == code


def test_bounds_are_inclusive() -> None:
    params = resolve_parameters(
        descriptor_for(ModelFamily.GENERIC),
        None,
        {"temperature": 0, "max_tokens": 4096, "top_p": 1, "context_size": 512},
    )
    assert params.temperature == 0.0
    assert params.max_tokens == 4096
    assert params.context_size == 512


# --- deadline ---


@pytest.mark.parametrize(
    ("max_tokens", "expected"),
    [(1, 30000), (300, 30000), (301, 30100), (500, 50000), (4096, 409600)],
)
def test_compute_timeout_ms(max_tokens: int, expected: int) -> None:
    assert compute_timeout_ms(max_tokens) == expected


# --- arguments ---


def test_build_args_prompt_mode() -> None:
    descriptor = descriptor_for(ModelFamily.PHI3)
    params = resolve_parameters(descriptor, make_request(max_tokens=64))
    args = build_args("/models/phi3.gguf", params, "User: Hi\nAssistant:", descriptor)

    assert args[:4] == ["-m", "/models/phi3.gguf", "-c", "4096"]
    assert args[args.index("-n") + 1] == "64"
    assert args[args.index("-p") + 1] == "User: Hi\nAssistant:"
    assert "--no-display-prompt" in args
    assert "-cnv" not in args
    assert "--seed" not in args


def test_build_args_interactive_mode_omits_prompt() -> None:
    descriptor = descriptor_for(ModelFamily.CHATML)
    params = resolve_parameters(descriptor, None, {"seed": 42})
    args = build_args("/models/qwen.gguf", params, "Hi", descriptor)

    assert "-cnv" in args
    assert "-p" not in args
    assert "Hi" not in args
    assert args[args.index("--seed") + 1] == "42"
