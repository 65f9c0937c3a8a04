"""Prompt rendering per model family.

Three renderings exist, chosen from the model descriptor:

- Delegated: the binary owns templating (interactive conversation mode), so
  only the raw user message is sent; history and preamble are ignored.
- Tagged: role-tagged segments in the family's template syntax, ending with an
  open assistant segment.
- Plain: a ``Role: content`` transcript ending with an ``Assistant:`` cue.

History is always bounded to the most recent turns before rendering.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..config.limits import HISTORY_MAX_TURNS
from ..detection import ModelDescriptor
from ..state import ChatTurn

_PLAIN_ROLE_LABELS = {"user": "User", "assistant": "Assistant"}


def truncate_history(
    history: Sequence[ChatTurn],
    max_turns: int = HISTORY_MAX_TURNS,
) -> list[ChatTurn]:
    """Keep only the last ``max_turns`` turns, oldest first."""
    if max_turns <= 0:
        return []
    return list(history[-max_turns:])


def build_prompt(
    message: str,
    descriptor: ModelDescriptor,
    *,
    preamble: str | None = None,
    history: Sequence[ChatTurn] = (),
) -> str:
    """Render the exact text fed to the inference binary."""
    if descriptor.delegates_templating:
        return message

    turns = truncate_history(history)
    if descriptor.uses_internal_chat_template and descriptor.template_tags:
        return _render_tagged(message, descriptor.template_tags, preamble, turns)
    return _render_plain(message, preamble, turns)


def _render_plain(message: str, preamble: str | None, turns: list[ChatTurn]) -> str:
    parts: list[str] = []
    system = (preamble or "").strip()
    if system:
        parts.append(f"{system}\n\n")
    for turn in turns:
        label = _PLAIN_ROLE_LABELS.get(turn.role, "Assistant")
        parts.append(f"{label}: {turn.content}\n")
    parts.append(f"User: {message}\nAssistant:")
    return "".join(parts)


def _render_tagged(
    message: str,
    tags: dict[str, str],
    preamble: str | None,
    turns: list[ChatTurn],
) -> str:
    end = tags["end"]
    parts: list[str] = []
    system = (preamble or "").strip()
    if system:
        parts.append(f"{tags['system']}{system}{end}")
    for turn in turns:
        role = "user" if turn.role == "user" else "assistant"
        parts.append(f"{tags[role]}{turn.content}{end}")
    parts.append(f"{tags['user']}{message}{end}")
    parts.append(tags["assistant"])
    return "".join(parts)


__all__ = ["build_prompt", "truncate_history"]
