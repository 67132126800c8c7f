r"""aretask - Resilient execution of intermittently failing operations.

This package wraps an operation that may fail intermittently, such as a
network call, in a retry loop. The operation is attempted a bounded
number of times with a fixed delay between attempts. The result of the
first successful attempt is handed to an optional success callback and
returned; if every attempt fails, ``TaskExhaustedError`` is raised.

Example:
    ```pycon
    >>> import asyncio
    >>> from aretask import ResilientTask
    >>> from aretask.operations import fetch_json
    >>> task = ResilientTask(
    ...     name="load-products",
    ...     config={"max_attempts": 3, "delay_ms": 1500},
    ...     operation=fetch_json("https://api.example.com/products"),
    ...     on_success=lambda data: print("loaded", data),
    ... )
    >>> asyncio.run(task.start())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY_MS",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_SILENT",
    "DEFAULT_TASK_NAME",
    "ConfigurationError",
    "ResilientTask",
    "TaskConfig",
    "TaskError",
    "TaskExhaustedError",
    "TaskState",
    "__version__",
    "fetch_json",
]

from importlib.metadata import PackageNotFoundError, version

from aretask.config import (
    DEFAULT_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_SILENT,
    DEFAULT_TASK_NAME,
    TaskConfig,
)
from aretask.exceptions import ConfigurationError, TaskError, TaskExhaustedError
from aretask.operations import fetch_json
from aretask.state import TaskState
from aretask.task import ResilientTask

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
