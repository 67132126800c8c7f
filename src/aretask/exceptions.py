r"""Exceptions raised by resilient tasks."""

from __future__ import annotations

__all__ = ["ConfigurationError", "TaskError", "TaskExhaustedError"]


class TaskError(Exception):
    """Base class for all errors raised by aretask."""


class ConfigurationError(TaskError, ValueError):
    """Raised when a task is configured with invalid values."""


class TaskExhaustedError(TaskError):
    """Raised when every configured attempt of a task has failed.

    The last failure raised by the operation is kept in ``last_error``
    and is also chained as ``__cause__`` by the retry loop.

    Args:
        name: The name of the task that failed.
        attempts: The number of attempts that were made.
        last_error: The failure raised by the final attempt, if known.

    Example:
        ```pycon
        >>> from aretask.exceptions import TaskExhaustedError
        >>> error = TaskExhaustedError(name="load-products", attempts=3)
        >>> str(error)
        "Task 'load-products' failed after 3 attempts"
        >>> error.attempts
        3

        ```
    """

    def __init__(
        self,
        name: str,
        attempts: int,
        last_error: BaseException | None = None,
    ) -> None:
        super().__init__(f"Task '{name}' failed after {attempts} attempts")
        self.name = name
        self.attempts = attempts
        self.last_error = last_error
