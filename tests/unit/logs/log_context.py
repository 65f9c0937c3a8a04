"""Unit tests for contextvar-backed log fields."""

from __future__ import annotations

import logging

from llamachat.logging import (
    current_log_context,
    install_log_context,
    log_context,
    reset_log_context,
    set_log_context,
)


def test_log_context_sets_and_restores() -> None:
    assert current_log_context() == {"session_id": "-", "request_id": "-"}
    with log_context(session_id="gen-1"):
        assert current_log_context()["session_id"] == "gen-1"
        with log_context(request_id="req-9"):
            assert current_log_context() == {"session_id": "gen-1", "request_id": "req-9"}
        assert current_log_context()["request_id"] == "-"
    assert current_log_context()["session_id"] == "-"


def test_set_and_reset_tokens() -> None:
    tokens = set_log_context(session_id="a", request_id="b")
    assert len(tokens) == 2
    reset_log_context(tokens)
    assert current_log_context() == {"session_id": "-", "request_id": "-"}


def test_records_carry_context_fields() -> None:
    install_log_context()
    with log_context(session_id="gen-42"):
        record = logging.getLogRecordFactory()("llamachat", logging.INFO, __file__, 1, "msg", (), None)
    assert record.session_id == "gen-42"
    assert record.request_id == "-"
