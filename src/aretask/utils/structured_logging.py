r"""Structured logging utilities for machine-readable task logs.

Records emitted by the resilience loop carry ``task_name``, ``attempt``
and ``max_attempts`` as extra fields. ``StructuredFormatter`` renders
each record as one JSON object so that these fields can be indexed by
log aggregation systems.

The structured output is opt-in and is enabled by attaching the
formatter to a handler.

Example:
    ```python
    import logging
    from aretask.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("aretask")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_task_name",
    "get_task_name",
    "set_task_name",
]

import contextvars
import json
import logging
import time
from typing import Any

# Name of the task whose resilience loop is running in the current context
_task_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "task_name", default=None
)

# Attributes every LogRecord has; anything else was passed through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def get_task_name() -> str | None:
    """Get the name of the task running in the current context.

    Returns:
        The task name, or ``None`` outside of a task run.

    Example:
        ```pycon
        >>> from aretask.utils.structured_logging import get_task_name, set_task_name
        >>> token = set_task_name("load-products")
        >>> get_task_name()
        'load-products'

        ```
    """
    return _task_name.get()


def set_task_name(name: str | None) -> contextvars.Token:
    """Set the task name for the current context.

    Args:
        name: The task name to attach to log records.

    Returns:
        A token that restores the previous value when passed to
        ``clear_task_name``.
    """
    return _task_name.set(name)


def clear_task_name(token: contextvars.Token | None = None) -> None:
    """Clear the task name of the current context.

    Args:
        token: Optional token returned by ``set_task_name``. If given,
            the value that was set before that call is restored.
            Otherwise the task name is reset to ``None``.
    """
    if token is None:
        _task_name.set(None)
    else:
        _task_name.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 UTC timestamp with milliseconds
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - module, function, line: Origin of the record
        - task_name: Name of the running task, if any

    Fields passed through the ``extra`` argument of a logging call are
    included as-is. Values that are not JSON serializable are rendered
    with ``str``.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from aretask.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Attempt failed", extra={"attempt": 1})
        >>> '"attempt": 1' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        task_name = get_task_name()
        if task_name is not None:
            log_data["task_name"] = task_name

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )
