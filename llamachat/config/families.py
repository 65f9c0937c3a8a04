"""Model family routing for GGUF checkpoints.

A family is selected by case-insensitive substring match against the active
model path. Each family fixes:

- the stop markers that end a reply
- the default sampling parameters layered over the baseline
- whether the model expects its own chat template
- whether the binary is driven interactively over stdin (``-cnv``)
- whether templating is delegated to the binary entirely
"""

from __future__ import annotations

from enum import Enum


class ModelFamily(str, Enum):
    """Enumerates the supported model families."""

    PHI3 = "phi3"
    LLAMA3 = "llama3"
    CHATML = "chatml"  # Qwen / Hermes style <|im_start|> models
    GENERIC = "generic"


# First match wins; order matters for names carrying several hints
FAMILY_NAME_HINTS: tuple[tuple[ModelFamily, tuple[str, ...]], ...] = (
    (ModelFamily.PHI3, ("phi-3", "phi3", "phi_3")),
    (ModelFamily.LLAMA3, ("llama-3", "llama3", "llama_3")),
    (ModelFamily.CHATML, ("qwen", "chatml", "hermes")),
)

FAMILY_STOP_MARKERS: dict[ModelFamily, tuple[str, ...]] = {
    ModelFamily.PHI3: ("User:", "Human:", "<|endoftext|>", "</s>", "<|end|>"),
    ModelFamily.LLAMA3: ("<|eot_id|>", "<|start_header_id|>user", "</s>"),
    # "\n> " is the binary's next interactive input prompt
    ModelFamily.CHATML: ("<|im_end|>", "\n> ", "</s>"),
    ModelFamily.GENERIC: ("User:", "Human:", "<|endoftext|>", "</s>"),
}

FAMILY_DEFAULT_PARAMETERS: dict[ModelFamily, dict[str, float | int]] = {
    ModelFamily.PHI3: {"temperature": 0.7, "top_p": 0.9, "repeat_penalty": 1.1, "context_size": 4096},
    ModelFamily.LLAMA3: {"temperature": 0.6, "top_p": 0.9, "repeat_penalty": 1.05, "context_size": 8192},
    ModelFamily.CHATML: {"temperature": 0.7, "top_p": 0.8, "repeat_penalty": 1.05, "context_size": 4096},
    ModelFamily.GENERIC: {"temperature": 0.7, "top_p": 0.9, "repeat_penalty": 1.1, "context_size": 2048},
}

FAMILIES_WITH_CHAT_TEMPLATE: frozenset[ModelFamily] = frozenset({
    ModelFamily.LLAMA3,
    ModelFamily.CHATML,
})

FAMILIES_WITH_INTERACTIVE_DRIVE: frozenset[ModelFamily] = frozenset({
    ModelFamily.CHATML,
})

FAMILIES_DELEGATING_TEMPLATE: frozenset[ModelFamily] = frozenset({
    ModelFamily.CHATML,
})

# Tag syntax per templated family: segment openers per role plus the segment terminator
FAMILY_TEMPLATE_TAGS: dict[ModelFamily, dict[str, str]] = {
    ModelFamily.LLAMA3: {
        "system": "<|start_header_id|>system<|end_header_id|>\n\n",
        "user": "<|start_header_id|>user<|end_header_id|>\n\n",
        "assistant": "<|start_header_id|>assistant<|end_header_id|>\n\n",
        "end": "<|eot_id|>",
    },
    ModelFamily.CHATML: {
        "system": "<|im_start|>system\n",
        "user": "<|im_start|>user\n",
        "assistant": "<|im_start|>assistant\n",
        "end": "<|im_end|>\n",
    },
}


__all__ = [
    "ModelFamily",
    "FAMILY_NAME_HINTS",
    "FAMILY_STOP_MARKERS",
    "FAMILY_DEFAULT_PARAMETERS",
    "FAMILIES_WITH_CHAT_TEMPLATE",
    "FAMILIES_WITH_INTERACTIVE_DRIVE",
    "FAMILIES_DELEGATING_TEMPLATE",
    "FAMILY_TEMPLATE_TAGS",
]
