"""Unit tests for the response sanitizer."""

from __future__ import annotations

import pytest

from llamachat.config.families import ModelFamily
from llamachat.messages import find_stop_marker, sanitize_response, truncate_at_stop

from tests.helpers import descriptor_for


# --- stop markers ---


def test_find_stop_marker_returns_earliest() -> None:
    assert find_stop_marker("abc</s>def User: x", ("User:", "</s>")) == 3


def test_find_stop_marker_missing() -> None:
    assert find_stop_marker("plain text", ("User:",)) == -1


def test_truncate_at_stop_without_marker_is_identity() -> None:
    assert truncate_at_stop("hello", ("User:",)) == "hello"


def test_plain_reply_truncated_and_trimmed() -> None:
    raw = " Paris is the capital of France.\nUser: and Spain?"
    assert sanitize_response(raw, descriptor_for(ModelFamily.PHI3)) == "Paris is the capital of France."


def test_plain_reply_keeps_template_like_text() -> None:
    raw = "Use <b>bold</b> here"
    assert sanitize_response(raw, descriptor_for(ModelFamily.GENERIC)) == "Use <b>bold</b> here"


def test_empty_input_returns_empty() -> None:
    assert sanitize_response("", descriptor_for(ModelFamily.PHI3)) == ""


def test_reply_made_only_of_marker_is_empty() -> None:
    assert sanitize_response("  User: hi", descriptor_for(ModelFamily.PHI3)) == ""


# --- templated families ---


def test_llama3_strips_headers_and_role_label() -> None:
    raw = "<|start_header_id|>assistant<|end_header_id|>\n\nSure thing.<|eot_id|><|start_header_id|>user"
    assert sanitize_response(raw, descriptor_for(ModelFamily.LLAMA3)) == "Sure thing."


def test_chatml_strips_leading_label_and_echo() -> None:
    raw = "> What is 2+2?\nassistant\n2 + 2 = 4.<|im_end|>"
    assert sanitize_response(raw, descriptor_for(ModelFamily.CHATML)) == "2 + 2 = 4."


def test_chatml_strips_label_with_colon() -> None:
    raw = "Assistant: Hello there<|im_end|>"
    assert sanitize_response(raw, descriptor_for(ModelFamily.CHATML)) == "Hello there"


def test_label_word_inside_sentence_is_kept() -> None:
    raw = "Assistant managers handle scheduling."
    assert sanitize_response(raw, descriptor_for(ModelFamily.LLAMA3)) == raw


@pytest.mark.parametrize(
    ("family", "raw"),
    [
        (ModelFamily.PHI3, "  Hello world!\n\nUser: next"),
        (ModelFamily.GENERIC, "Line one\nLine two </s> trailing"),
        (ModelFamily.LLAMA3, "<|start_header_id|>assistant<|end_header_id|>\n\nA\n\n\n\nB<|eot_id|>"),
        (ModelFamily.CHATML, "assistant\nassistant: <|im_start|>assistant\nDone.\n> x"),
    ],
)
def test_sanitizer_is_idempotent(family: ModelFamily, raw: str) -> None:
    descriptor = descriptor_for(family)
    once = sanitize_response(raw, descriptor)
    assert sanitize_response(once, descriptor) == once
