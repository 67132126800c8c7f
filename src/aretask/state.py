r"""Lifecycle states of a resilient task run."""

from __future__ import annotations

__all__ = ["TaskState"]

from enum import Enum


class TaskState(Enum):
    """States of the resilience loop.

    ``SUCCEEDED`` and ``FAILED`` are terminal for one run. Calling
    ``start()`` again moves the task back to ``ATTEMPTING`` with a fresh
    attempt counter.
    """

    IDLE = "idle"
    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Indicate whether the run has finished."""
        return self in (TaskState.SUCCEEDED, TaskState.FAILED)
