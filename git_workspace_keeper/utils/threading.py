"""Threading utilities for running per-project work in parallel."""

import os
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed, Future
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from git_workspace_keeper.logging_config import get_logger

logger = get_logger(__name__)

K = TypeVar("K")
T = TypeVar("T")
R = TypeVar("R")


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with GIL disabled (free-threading mode)
        False if running with GIL enabled or Python < 3.13
    """
    try:
        # sys._is_gil_enabled() returns False when GIL is disabled
        # Available in Python 3.13+
        return hasattr(sys, "_is_gil_enabled") and not sys._is_gil_enabled()
    except Exception:
        return False


def get_python_threading_mode() -> str:
    """Get a description of the current threading mode."""
    if hasattr(sys, "_is_gil_enabled"):
        return "GIL-enabled" if sys._is_gil_enabled() else "free-threading"
    return "GIL-enabled (Python < 3.13)"


def get_optimal_worker_count(user_specified: Optional[int] = None) -> int:
    """Calculate optimal worker count based on threading mode and CPU count.

    Args:
        user_specified: User-specified worker count, if provided

    Returns:
        Optimal number of workers for parallel processing
    """
    if user_specified is not None and user_specified > 0:
        return user_specified

    cpu_count = os.cpu_count() or 1

    if is_free_threading_enabled():
        # Free-threading: use more workers, capped to avoid excessive overhead
        return min(64, cpu_count * 2)

    # Backend queries are I/O-bound (git subprocesses)
    return min(32, cpu_count + 4)


def get_threading_info() -> Dict[str, Any]:
    """Get information about Python threading configuration."""
    return {
        "mode": get_python_threading_mode(),
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }


def run_batch(
    items: Iterable[Tuple[K, T]],
    func: Callable[[T], R],
    workers: Optional[int] = None,
    sequential: bool = False,
    fail_fast: bool = False,
) -> Dict[K, R]:
    """Apply func to every item and collect the results by key.

    The batch is all-or-nothing: if any call fails, the exception of the
    first failing item (in input order) is raised once the batch is over and
    no results are returned.

    Args:
        items: (key, item) pairs; input order decides which failure is reported
        func: Function applied to each item
        workers: Number of worker threads (None = auto-detect)
        sequential: Run items one after another in the calling thread
        fail_fast: Stop at the first failure instead of finishing the batch.
            Sequential runs stop immediately; parallel runs cancel the items
            that have not started yet.
    """
    pairs: List[Tuple[K, T]] = list(items)
    if not pairs:
        return {}

    if sequential:
        return _run_sequential(pairs, func, fail_fast)
    return _run_parallel(pairs, func, get_optimal_worker_count(workers), fail_fast)


def _run_sequential(
    pairs: List[Tuple[K, T]], func: Callable[[T], R], fail_fast: bool
) -> Dict[K, R]:
    results: Dict[K, R] = {}
    first_error: Optional[BaseException] = None
    for key, item in pairs:
        try:
            results[key] = func(item)
        except Exception as e:
            logger.debug(f"Batch item {key} failed: {e}")
            if first_error is None:
                first_error = e
            if fail_fast:
                break
    if first_error is not None:
        raise first_error
    return results


def _run_parallel(
    pairs: List[Tuple[K, T]], func: Callable[[T], R], max_workers: int, fail_fast: bool
) -> Dict[K, R]:
    logger.debug(f"Using {max_workers} workers for {len(pairs)} items")
    order = {key: index for index, (key, _) in enumerate(pairs)}
    results: Dict[K, R] = {}
    errors: Dict[K, BaseException] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_key: Dict[Future, K] = {
            executor.submit(func, item): key for key, item in pairs
        }

        for future in as_completed(future_to_key):
            key = future_to_key[future]
            if future.cancelled():
                continue
            try:
                results[key] = future.result()
            except Exception as e:
                logger.debug(f"Batch item {key} failed: {e}")
                errors[key] = e
                if fail_fast:
                    for pending in future_to_key:
                        pending.cancel()

    if errors:
        first_key = min(errors, key=lambda k: order[k])
        raise errors[first_key]
    return results
