"""Model descriptor built from the family routing table."""

from __future__ import annotations

from dataclasses import field, dataclass

from ..config.families import (
    FAMILY_STOP_MARKERS,
    FAMILY_TEMPLATE_TAGS,
    FAMILY_DEFAULT_PARAMETERS,
    FAMILIES_WITH_CHAT_TEMPLATE,
    FAMILIES_DELEGATING_TEMPLATE,
    FAMILIES_WITH_INTERACTIVE_DRIVE,
    ModelFamily,
)


@dataclass(frozen=True, slots=True)
class ModelDescriptor:
    """Per-model behavior derived from the active model's file name.

    Attributes:
        family: Detected model family.
        uses_internal_chat_template: The model expects role-tagged segments.
        stop_markers: Literal substrings that end a reply.
        default_parameters: Partial sampling parameters for this family.
        interactive_drive_mode: The binary runs an input loop and the prompt
            is written to its stdin instead of passed as an argument.
        delegates_templating: The binary applies the chat template itself, so
            only the raw user message is sent.
        template_tags: Segment openers per role plus the segment terminator.
    """

    family: ModelFamily
    uses_internal_chat_template: bool
    stop_markers: tuple[str, ...]
    default_parameters: dict[str, float | int] = field(default_factory=dict)
    interactive_drive_mode: bool = False
    delegates_templating: bool = False
    template_tags: dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_family(cls, family: ModelFamily) -> ModelDescriptor:
        return cls(
            family=family,
            uses_internal_chat_template=family in FAMILIES_WITH_CHAT_TEMPLATE,
            stop_markers=FAMILY_STOP_MARKERS[family],
            default_parameters=dict(FAMILY_DEFAULT_PARAMETERS[family]),
            interactive_drive_mode=family in FAMILIES_WITH_INTERACTIVE_DRIVE,
            delegates_templating=family in FAMILIES_DELEGATING_TEMPLATE,
            template_tags=dict(FAMILY_TEMPLATE_TAGS.get(family, {})),
        )


__all__ = ["ModelDescriptor"]
