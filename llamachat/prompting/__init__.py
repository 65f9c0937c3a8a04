"""Prompt rendering."""

from .builder import build_prompt, truncate_history

__all__ = ["build_prompt", "truncate_history"]
