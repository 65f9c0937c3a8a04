"""Parameter resolution, process arguments, and deadline computation."""

from __future__ import annotations

from collections.abc import Mapping

from ..config import (
    CHAT_CONTEXT_SIZE,
    CHAT_MAX_TOKENS,
    CHAT_REPEAT_PENALTY,
    CHAT_SEED,
    CHAT_TEMPERATURE,
    CHAT_TOP_P,
    CONVERSATION_ARG_FLAGS,
    GEN_TIMEOUT_FLOOR_MS,
    GEN_TIMEOUT_PER_TOKEN_MS,
    PROMPT_ARG_FLAGS,
    SEED_UNSET,
)
from ..config.limits import (
    CONTEXT_SIZE_MAX,
    CONTEXT_SIZE_MIN,
    MAX_TOKENS_MAX,
    MAX_TOKENS_MIN,
    REPEAT_PENALTY_MAX,
    REPEAT_PENALTY_MIN,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
    TOP_P_MAX,
    TOP_P_MIN,
)
from ..detection import ModelDescriptor
from ..errors import ValidationError
from ..state import GenerationParameters, GenerationRequest

_FLOAT_BOUNDS: dict[str, tuple[float, float]] = {
    "temperature": (TEMPERATURE_MIN, TEMPERATURE_MAX),
    "top_p": (TOP_P_MIN, TOP_P_MAX),
    "repeat_penalty": (REPEAT_PENALTY_MIN, REPEAT_PENALTY_MAX),
}
_INT_BOUNDS: dict[str, tuple[int, int]] = {
    "max_tokens": (MAX_TOKENS_MIN, MAX_TOKENS_MAX),
    "context_size": (CONTEXT_SIZE_MIN, CONTEXT_SIZE_MAX),
}
PARAMETER_NAMES: frozenset[str] = frozenset({*_FLOAT_BOUNDS, *_INT_BOUNDS, "seed"})


def baseline_parameters() -> dict[str, float | int]:
    return {
        "temperature": CHAT_TEMPERATURE,
        "max_tokens": CHAT_MAX_TOKENS,
        "top_p": CHAT_TOP_P,
        "repeat_penalty": CHAT_REPEAT_PENALTY,
        "context_size": CHAT_CONTEXT_SIZE,
        "seed": CHAT_SEED,
    }


def resolve_parameters(
    descriptor: ModelDescriptor,
    request: GenerationRequest | None = None,
    overrides: Mapping[str, float | int] | None = None,
) -> GenerationParameters:
    """Merge baseline < family defaults < request fields < explicit overrides.

    Raises:
        ValidationError: For unknown keys or out-of-range values.
    """
    merged: dict[str, float | int] = baseline_parameters()
    merged.update(descriptor.default_parameters)
    if request is not None:
        if request.max_tokens is not None:
            merged["max_tokens"] = request.max_tokens
        if request.temperature is not None:
            merged["temperature"] = request.temperature
    for key, value in (overrides or {}).items():
        if key not in PARAMETER_NAMES:
            raise ValidationError("unknown_parameter", f"unknown generation parameter '{key}'")
        if value is None:
            continue
        merged[key] = value

    return GenerationParameters(
        temperature=_checked_float(merged, "temperature"),
        max_tokens=_checked_int(merged, "max_tokens"),
        top_p=_checked_float(merged, "top_p"),
        repeat_penalty=_checked_float(merged, "repeat_penalty"),
        context_size=_checked_int(merged, "context_size"),
        seed=_checked_seed(merged["seed"]),
    )


def compute_timeout_ms(max_tokens: int) -> int:
    """Deadline scales with output length but never drops below the floor."""
    return max(GEN_TIMEOUT_FLOOR_MS, max_tokens * GEN_TIMEOUT_PER_TOKEN_MS)


def build_args(
    model_path: str,
    params: GenerationParameters,
    prompt: str,
    descriptor: ModelDescriptor,
) -> list[str]:
    """Command-line arguments for the inference binary.

    Interactive families get the conversation flag and receive the prompt on
    stdin; all others get the prompt as ``-p``.
    """
    args: list[str] = [
        "-m", model_path,
        "-c", str(params.context_size),
        "-n", str(params.max_tokens),
        "--temp", str(params.temperature),
        "--top-p", str(params.top_p),
        "--repeat-penalty", str(params.repeat_penalty),
    ]
    if params.seed != SEED_UNSET:
        args.extend(["--seed", str(params.seed)])
    if descriptor.interactive_drive_mode:
        args.extend(CONVERSATION_ARG_FLAGS)
    else:
        args.extend(["-p", prompt])
        args.extend(PROMPT_ARG_FLAGS)
    return args


def _checked_float(values: Mapping[str, float | int], name: str) -> float:
    low, high = _FLOAT_BOUNDS[name]
    raw = values[name]
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValidationError(f"invalid_{name}", f"{name} must be a number")
    value = float(raw)
    if not (low <= value <= high):
        raise ValidationError(f"invalid_{name}", f"{name} must be between {low} and {high}")
    return value


def _checked_int(values: Mapping[str, float | int], name: str) -> int:
    low, high = _INT_BOUNDS[name]
    raw = values[name]
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValidationError(f"invalid_{name}", f"{name} must be an integer")
    if not (low <= raw <= high):
        raise ValidationError(f"invalid_{name}", f"{name} must be between {low} and {high}")
    return raw


def _checked_seed(raw: float | int) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < SEED_UNSET:
        raise ValidationError("invalid_seed", "seed must be an integer >= -1")
    return raw


__all__ = [
    "PARAMETER_NAMES",
    "baseline_parameters",
    "build_args",
    "compute_timeout_ms",
    "resolve_parameters",
]
