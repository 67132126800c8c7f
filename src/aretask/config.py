r"""Configuration dataclass and defaults for resilient tasks.

This module provides the default values of the resilience loop and a
dataclass-based configuration object consumed by ``ResilientTask``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY_MS",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_SILENT",
    "DEFAULT_TASK_NAME",
    "TaskConfig",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from aretask.validation import validate_task_params

if TYPE_CHECKING:
    from collections.abc import Mapping


# Default number of attempts, including the first one
DEFAULT_MAX_ATTEMPTS = 3

# Default fixed delay between two attempts, in milliseconds
DEFAULT_DELAY_MS = 1000

# Per-attempt warnings are logged unless silent mode is requested
DEFAULT_SILENT = False

# Name used in log messages when a task is created without one
DEFAULT_TASK_NAME = "UnnamedTask"


@dataclass(frozen=True)
class TaskConfig:
    """Configuration of the resilience loop of a task.

    Missing values fall back to their default. A value is treated as
    missing when it is falsy, so ``0`` and ``None`` both select the
    default. Negative values are rejected.

    Args:
        max_attempts: Maximum number of times the operation is invoked.
        delay_ms: Fixed delay between two attempts, in milliseconds.
        silent: If ``True``, the warning logged after each failed
            attempt is suppressed. The final error is always logged.

    Raises:
        ConfigurationError: If ``max_attempts`` or ``delay_ms`` is
            negative.

    Example:
        ```pycon
        >>> from aretask.config import TaskConfig
        >>> config = TaskConfig()
        >>> config.max_attempts, config.delay_ms, config.silent
        (3, 1000, False)
        >>> TaskConfig(max_attempts=0).max_attempts  # 0 means "use the default"
        3
        >>> TaskConfig(max_attempts=5, delay_ms=1500).delay_seconds
        1.5

        ```
    """

    max_attempts: int | None = DEFAULT_MAX_ATTEMPTS
    delay_ms: int | None = DEFAULT_DELAY_MS
    silent: bool | None = DEFAULT_SILENT

    def __post_init__(self) -> None:
        validate_task_params(
            max_attempts=self.max_attempts or 0,
            delay_ms=self.delay_ms or 0,
        )
        object.__setattr__(self, "max_attempts", self.max_attempts or DEFAULT_MAX_ATTEMPTS)
        object.__setattr__(self, "delay_ms", self.delay_ms or DEFAULT_DELAY_MS)
        object.__setattr__(self, "silent", bool(self.silent or DEFAULT_SILENT))

    @property
    def delay_seconds(self) -> float:
        """The delay between two attempts, in seconds."""
        return self.delay_ms / 1000

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TaskConfig:
        """Create a configuration from a plain mapping.

        Only the ``max_attempts``, ``delay_ms`` and ``silent`` keys are
        read. Other keys are ignored.

        Args:
            data: The mapping to read. ``None`` or an empty mapping
                gives the default configuration.

        Returns:
            The normalized configuration.

        Example:
            ```pycon
            >>> from aretask.config import TaskConfig
            >>> TaskConfig.from_dict({"max_attempts": 5, "silent": True})
            TaskConfig(max_attempts=5, delay_ms=1000, silent=True)
            >>> TaskConfig.from_dict({})
            TaskConfig(max_attempts=3, delay_ms=1000, silent=False)

            ```
        """
        data = data or {}
        return cls(
            max_attempts=data.get("max_attempts"),
            delay_ms=data.get("delay_ms"),
            silent=data.get("silent"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary.

        Returns:
            Dictionary with the normalized configuration values.
        """
        return {
            "max_attempts": self.max_attempts,
            "delay_ms": self.delay_ms,
            "silent": self.silent,
        }
