from __future__ import annotations

import json
import logging

from kudos.core.logging import (
    CorrelationFilter,
    JsonFormatter,
    correlation_scope,
    get_correlation_context,
    setup_logging,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="kudos.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )


def test_correlation_filter_injects_fields() -> None:
    record = _record()

    with correlation_scope(block_time=123, sender="cosmos1alice", msg_type="send_kudos"):
        assert CorrelationFilter().filter(record) is True

    assert record.block_time == 123
    assert record.sender == "cosmos1alice"
    assert record.msg_type == "send_kudos"


def test_nested_scope_inherits_and_restores() -> None:
    baseline = get_correlation_context()

    with correlation_scope(block_time=1, sender="cosmos1outer"):
        outer = get_correlation_context()
        with correlation_scope(msg_type="send_kudos"):
            inner = get_correlation_context()
            assert inner.block_time == 1
            assert inner.sender == "cosmos1outer"
            assert inner.msg_type == "send_kudos"
        assert get_correlation_context() == outer

    assert get_correlation_context() == baseline


def test_json_formatter_includes_correlation() -> None:
    record = _record()
    with correlation_scope(block_time=5, sender="cosmos1bob"):
        CorrelationFilter().filter(record)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["block_time"] == 5
    assert payload["sender"] == "cosmos1bob"
    assert payload["msg_type"] is None


def test_setup_logging_installs_single_correlated_handler() -> None:
    root = logging.getLogger()
    saved_level, saved_handlers, saved_filters = root.level, root.handlers[:], root.filters[:]
    try:
        setup_logging("DEBUG", json_output=True)
        setup_logging("DEBUG", json_output=True)

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)
        assert any(isinstance(f, CorrelationFilter) for f in handler.filters)
    finally:
        root.handlers[:] = saved_handlers
        root.filters[:] = saved_filters
        root.setLevel(saved_level)
