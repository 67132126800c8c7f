r"""Resilient execution of a single operation.

This module provides ``ResilientTask``, which invokes an operation that
may fail intermittently, retries it a bounded number of times with a
fixed delay between attempts, and hands the result to an optional
success callback.
"""

from __future__ import annotations

__all__ = ["ResilientTask"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from aretask.config import DEFAULT_TASK_NAME, TaskConfig
from aretask.exceptions import TaskExhaustedError
from aretask.state import TaskState
from aretask.utils.structured_logging import clear_task_name, set_task_name

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

logger: logging.Logger = logging.getLogger(__name__)


class ResilientTask:
    """Run an operation with a fixed-delay retry loop.

    The operation is a zero-argument callable, usually a coroutine
    function. It is invoked verbatim on every attempt. A callable that
    returns a plain value is accepted too.

    After each failed attempt a warning is logged unless the task is
    silent. When all attempts have failed, an error naming the task is
    logged, even in silent mode, and ``TaskExhaustedError`` is raised.

    A task can be started several times; each run starts with a fresh
    attempt counter. Starting the same instance concurrently is not
    supported because the counter and the state are shared by the runs.

    Args:
        name: The task name used in log messages. Defaults to
            ``"UnnamedTask"`` when empty.
        config: A ``TaskConfig``, a mapping accepted by
            ``TaskConfig.from_dict``, or ``None`` for the defaults.
        operation: The zero-argument callable to run.
        on_success: Optional callback invoked once with the result of
            the successful attempt. Its exceptions are not retried.

    Raises:
        TypeError: If ``operation`` or ``on_success`` is not callable.
        ConfigurationError: If the configuration is invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretask import ResilientTask
        >>> async def load() -> dict:
        ...     return {"products": []}
        ...
        >>> task = ResilientTask(
        ...     name="load-products",
        ...     config={"max_attempts": 3, "delay_ms": 1500},
        ...     operation=load,
        ... )
        >>> asyncio.run(task.start())
        {'products': []}

        ```
    """

    def __init__(
        self,
        name: str | None = None,
        config: TaskConfig | Mapping[str, Any] | None = None,
        *,
        operation: Callable[[], Awaitable[Any] | Any],
        on_success: Callable[[Any], Any] | None = None,
    ) -> None:
        if not callable(operation):
            msg = f"operation must be callable, got {type(operation).__name__}"
            raise TypeError(msg)
        if on_success is not None and not callable(on_success):
            msg = f"on_success must be callable, got {type(on_success).__name__}"
            raise TypeError(msg)

        self._name = name or DEFAULT_TASK_NAME
        self._config = config if isinstance(config, TaskConfig) else TaskConfig.from_dict(config)
        self._operation = operation
        self._on_success = on_success
        self._attempts = 0
        self._state = TaskState.IDLE

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(name={self._name!r}, config={self._config}, "
            f"state={self._state.name})"
        )

    @property
    def name(self) -> str:
        """The task name used in log messages."""
        return self._name

    @property
    def config(self) -> TaskConfig:
        """The normalized configuration of the task."""
        return self._config

    @property
    def attempts(self) -> int:
        """The number of failed attempts in the current or last run."""
        return self._attempts

    @property
    def state(self) -> TaskState:
        """The lifecycle state of the current or last run.

        The state becomes ``SUCCEEDED`` as soon as an attempt succeeds,
        before the success callback runs. It stays ``SUCCEEDED`` if the
        callback raises. A run interrupted by a ``BaseException`` such as
        ``asyncio.CancelledError`` ends in ``FAILED``.
        """
        return self._state

    async def start(self) -> Any:
        """Run the operation until it succeeds or all attempts fail.

        Returns:
            The result of the first successful attempt.

        Raises:
            TaskExhaustedError: If every attempt failed. The failure of
                the last attempt is chained as the cause.
            Exception: Any exception raised by the success callback.

        Note:
            Cancellation is not retried. If the run is cancelled while an
            attempt or a wait is in progress, the state is set to
            ``FAILED`` and ``asyncio.CancelledError`` propagates.
        """
        token = set_task_name(self._name)
        try:
            self._attempts = 0
            result = await self._run_with_retries()
        except BaseException:
            if not self._state.is_terminal:
                self._state = TaskState.FAILED
            raise
        finally:
            clear_task_name(token)

        if self._on_success is not None:
            self._on_success(result)
        return result

    async def _run_with_retries(self) -> Any:
        max_attempts = self._config.max_attempts
        logger.debug(
            f"Starting task '{self._name}' (max_attempts={max_attempts})",
            extra=self._log_extra(),
        )
        while True:
            self._state = TaskState.ATTEMPTING
            try:
                result = await self._invoke()
            except Exception as exc:  # noqa: BLE001
                self._attempts += 1
                self._log_attempt_failure(exc)
                if self._attempts < max_attempts:
                    await self._wait()
                    continue
                self._state = TaskState.FAILED
                logger.error(
                    f"Error in task '{self._name}': {exc!r}",
                    extra=self._log_extra(),
                )
                raise TaskExhaustedError(
                    name=self._name, attempts=self._attempts, last_error=exc
                ) from exc

            self._state = TaskState.SUCCEEDED
            logger.debug(
                f"Task '{self._name}' succeeded on attempt {self._attempts + 1}",
                extra=self._log_extra(),
            )
            return result

    async def _invoke(self) -> Any:
        result = self._operation()
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _wait(self) -> None:
        self._state = TaskState.WAITING
        delay = self._config.delay_seconds
        logger.debug(
            f"Task '{self._name}' waiting {delay:.3f}s before retry",
            extra=self._log_extra(),
        )
        await asyncio.sleep(delay)

    def _log_attempt_failure(self, exc: Exception) -> None:
        if self._config.silent:
            return
        logger.warning(
            f"Attempt {self._attempts}/{self._config.max_attempts} of task "
            f"'{self._name}' failed: {exc!r}",
            extra=self._log_extra(),
        )

    def _log_extra(self) -> dict[str, Any]:
        return {
            "task_name": self._name,
            "attempt": self._attempts,
            "max_attempts": self._config.max_attempts,
        }
