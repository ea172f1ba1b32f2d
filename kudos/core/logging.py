"""Logging for the ledger, tagged with the message being applied.

``MsgServer`` opens a ``correlation_scope`` around each transfer. Any record
logged inside it, whether by the keeper, the quota tracker or a store,
carries ``block_time``, ``sender`` and ``msg_type``. Records logged outside a
scope carry ``None`` for all three.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass, fields, replace
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class CorrelationContext:
    block_time: int | None = None
    sender: str | None = None
    msg_type: str | None = None


CORRELATION_FIELDS = tuple(field.name for field in fields(CorrelationContext))

TEXT_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s "
    "block_time=%(block_time)s sender=%(sender)s msg_type=%(msg_type)s "
    "%(message)s"
)

_NO_MESSAGE = CorrelationContext()
_current_message: contextvars.ContextVar[CorrelationContext] = contextvars.ContextVar(
    "kudos_current_message",
    default=_NO_MESSAGE,
)


def get_correlation_context() -> CorrelationContext:
    return _current_message.get()


class CorrelationFilter(logging.Filter):
    """Copy the current message's fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name, value in asdict(get_correlation_context()).items():
            setattr(record, name, value)
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, message fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object | None] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CORRELATION_FIELDS:
            payload[name] = getattr(record, name, None)
        if record.exc_info is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging(level: int | str = logging.INFO, json_output: bool = False) -> None:
    """Replace the root handlers with a single stdout handler.

    Calling it again reconfigures rather than stacking handlers, so
    ``create_module`` can be called more than once in a process.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.filters.clear()

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    correlation_filter = CorrelationFilter()
    handler.addFilter(correlation_filter)
    root_logger.addFilter(correlation_filter)
    root_logger.addHandler(handler)


@contextmanager
def correlation_scope(
    *,
    block_time: int | None = None,
    sender: str | None = None,
    msg_type: str | None = None,
) -> Iterator[None]:
    """Tag records logged in this block; arguments left as ``None`` keep the outer value."""
    overrides = {
        name: value
        for name, value in (("block_time", block_time), ("sender", sender), ("msg_type", msg_type))
        if value is not None
    }
    token = _current_message.set(replace(get_correlation_context(), **overrides))
    try:
        yield
    finally:
        _current_message.reset(token)


__all__ = [
    "CORRELATION_FIELDS",
    "CorrelationContext",
    "CorrelationFilter",
    "JsonFormatter",
    "correlation_scope",
    "get_correlation_context",
    "setup_logging",
]
