r"""Utility functions for resilient tasks."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_task_name",
    "get_task_name",
    "set_task_name",
]

from aretask.utils.structured_logging import (
    StructuredFormatter,
    clear_task_name,
    get_task_name,
    set_task_name,
)
