r"""Parameter validation utilities for resilient task configuration.

This module provides validation functions for task parameters to ensure
they meet the required constraints before being used in the retry loop.
"""

from __future__ import annotations

__all__ = ["validate_task_params", "validate_timeout"]

from aretask.exceptions import ConfigurationError


def validate_task_params(max_attempts: int, delay_ms: int) -> None:
    """Validate task retry parameters.

    Args:
        max_attempts: Maximum number of attempts for the operation.
            Must be >= 0. A value of 0 is replaced by the default
            before the task runs.
        delay_ms: Fixed delay between attempts in milliseconds.
            Must be >= 0.

    Raises:
        ConfigurationError: If max_attempts or delay_ms are negative.

    Example:
        ```pycon
        >>> from aretask.validation import validate_task_params
        >>> validate_task_params(max_attempts=3, delay_ms=1000)
        >>> validate_task_params(max_attempts=-1, delay_ms=1000)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        aretask.exceptions.ConfigurationError: max_attempts must be >= 0, got -1

        ```
    """
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ConfigurationError(msg)
    if delay_ms < 0:
        msg = f"delay_ms must be >= 0, got {delay_ms}"
        raise ConfigurationError(msg)


def validate_timeout(timeout: float) -> None:
    """Validate the timeout of an HTTP operation.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0.

    Raises:
        ConfigurationError: If timeout is <= 0.
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ConfigurationError(msg)
