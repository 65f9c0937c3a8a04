"""Unit tests for prompt rendering and history truncation."""

from __future__ import annotations

from llamachat.config.families import ModelFamily
from llamachat.prompting import build_prompt, truncate_history
from llamachat.state import ChatTurn

from tests.helpers import descriptor_for, make_request


def test_phi3_plain_prompt_for_single_message() -> None:
    prompt = build_prompt("Hi", descriptor_for(ModelFamily.PHI3))
    assert prompt == "User: Hi\nAssistant:"


def test_plain_prompt_includes_preamble_and_history() -> None:
    history = (
        ChatTurn(role="user", content="Hello"),
        ChatTurn(role="assistant", content="Hey there"),
    )
    prompt = build_prompt(
        "How are you?",
        descriptor_for(ModelFamily.GENERIC),
        preamble="  Be concise.  ",
        history=history,
    )
    assert prompt == (
        "Be concise.\n\n"
        "User: Hello\n"
        "Assistant: Hey there\n"
        "User: How are you?\nAssistant:"
    )


def test_history_truncated_to_last_ten_turns() -> None:
    request = make_request("latest", turns=15)
    prompt = build_prompt(request.message, descriptor_for(ModelFamily.PHI3), history=request.history)

    for idx in range(5):
        assert f"turn-{idx}\n" not in prompt
    for idx in range(5, 15):
        assert f"turn-{idx}\n" in prompt
    # 10 history lines plus the current exchange
    assert prompt.count("User: ") + prompt.count("Assistant: ") == 11


def test_truncate_history_keeps_order() -> None:
    request = make_request(turns=15)
    kept = truncate_history(request.history)
    assert [turn.content for turn in kept] == [f"turn-{idx}" for idx in range(5, 15)]


def test_truncate_history_zero_keeps_nothing() -> None:
    assert truncate_history(make_request(turns=3).history, max_turns=0) == []


def test_llama3_tagged_prompt_ends_with_open_assistant_segment() -> None:
    history = (ChatTurn(role="user", content="Hello"), ChatTurn(role="assistant", content="Hi!"))
    prompt = build_prompt(
        "Tell me a joke",
        descriptor_for(ModelFamily.LLAMA3),
        preamble="You are funny.",
        history=history,
    )
    assert prompt == (
        "<|start_header_id|>system<|end_header_id|>\n\nYou are funny.<|eot_id|>"
        "<|start_header_id|>user<|end_header_id|>\n\nHello<|eot_id|>"
        "<|start_header_id|>assistant<|end_header_id|>\n\nHi!<|eot_id|>"
        "<|start_header_id|>user<|end_header_id|>\n\nTell me a joke<|eot_id|>"
        "<|start_header_id|>assistant<|end_header_id|>\n\n"
    )


def test_delegated_template_sends_raw_message_only() -> None:
    request = make_request("What is 2+2?", turns=4)
    prompt = build_prompt(
        request.message,
        descriptor_for(ModelFamily.CHATML),
        preamble="ignored",
        history=request.history,
    )
    assert prompt == "What is 2+2?"
