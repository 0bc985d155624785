"""Logging setup with a per-request correlation id."""
from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach a stream handler to the ``writespace`` logger once."""
    logger = logging.getLogger("writespace")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    if name.startswith("writespace"):
        return logging.getLogger(name)
    return logging.getLogger(f"writespace.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or uuid.uuid4().hex
    _correlation_id.set(token)
    return token


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()
