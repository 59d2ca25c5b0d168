"""Utility functions for git-workspace-keeper.

This package provides utility modules:
- threading: Worker sizing and all-or-nothing batch execution
"""

from .threading import (
    is_free_threading_enabled,
    get_python_threading_mode,
    get_optimal_worker_count,
    get_threading_info,
    run_batch,
)

__all__ = [
    "is_free_threading_enabled",
    "get_python_threading_mode",
    "get_optimal_worker_count",
    "get_threading_info",
    "run_batch",
]
