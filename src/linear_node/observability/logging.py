"""Structured logging configuration for the Linear node.

Records emitted while an item is processed carry the resource, operation
and item index via contextvars, so a host collecting JSON logs can tell
which input item a failure belongs to.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

PACKAGE_LOGGER = "linear_node"

_resource: ContextVar[Optional[str]] = ContextVar("resource", default=None)
_operation: ContextVar[Optional[str]] = ContextVar("operation", default=None)
_item_index: ContextVar[Optional[int]] = ContextVar("item_index", default=None)


@contextmanager
def log_context(
    resource: Optional[str] = None,
    operation: Optional[str] = None,
    item_index: Optional[int] = None,
) -> Iterator[None]:
    """Attach item fields to every record logged inside the block.

    The previous values are restored on exit, including after an exception.
    """
    tokens = [
        (_resource, _resource.set(resource)),
        (_operation, _operation.set(operation)),
        (_item_index, _item_index.set(item_index)),
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def current_log_context() -> Dict[str, Any]:
    """The item fields currently set, omitting unset ones."""
    fields = {
        "resource": _resource.get(),
        "operation": _operation.get(),
        "item_index": _item_index.get(),
    }
    return {key: value for key, value in fields.items() if value is not None}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, item fields included."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **current_log_context(),
        }

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Single-line output for development, e.g. ``[op=issue/get, item=2]``."""

    def format(self, record: logging.LogRecord) -> str:
        msg = (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"{record.levelname:8s} {record.name}: {record.getMessage()}"
        )

        context = current_log_context()
        suffix = []
        if "resource" in context or "operation" in context:
            suffix.append(
                f"op={context.get('resource', '?')}/{context.get('operation', '?')}"
            )
        if "item_index" in context:
            suffix.append(f"item={context['item_index']}")
        if suffix:
            msg += f" [{', '.join(suffix)}]"

        if record.exc_info and record.exc_info[1]:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


def configure_logging(
    environment: str = "development", log_level: str = "INFO"
) -> logging.Logger:
    """Configure the ``linear_node`` logger.

    Only the package logger is touched; handlers the host runtime installed
    on the root logger are left alone. Calling this again replaces the
    handler added by the previous call.

    Args:
        environment: "production" for JSON output, anything else for human-readable.
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter(datefmt="%Y-%m-%d %H:%M:%S"))

    logger.addHandler(handler)
    logger.propagate = False

    # Quiet noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logger
