"""Timeout utilities for camera operations."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional, TypeVar

from exceptions import DeviceUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_timeout(
    func: Callable[..., T],
    timeout_seconds: float,
    error_message: str = "Operation timed out",
    *args: Any,
    camera_id: Optional[str] = None,
    on_late_result: Optional[Callable[[T], None]] = None,
    **kwargs: Any,
) -> T:
    """Run function with timeout, raise DeviceUnavailableError if exceeded.

    Args:
        func: Function to run
        timeout_seconds: Timeout in seconds
        error_message: Error message if timeout occurs
        *args: Positional arguments for func
        camera_id: Device identifier attached to the raised error
        on_late_result: Called with the result if func completes after the
            deadline, so the caller can release what it produced
        **kwargs: Keyword arguments for func

    Returns:
        Result of func

    Raises:
        DeviceUnavailableError: If operation times out
        Exception: Any exception raised by func

    Note:
        On timeout the worker thread is abandoned, not joined, so a hung
        driver call cannot block the caller past the deadline.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="camera-io")
    future = executor.submit(func, *args, **kwargs)

    try:
        return future.result(timeout=timeout_seconds)

    except FutureTimeoutError:
        logger.error(f"{error_message} after {timeout_seconds}s")
        if on_late_result is not None:
            future.add_done_callback(lambda done: _deliver_late_result(done, on_late_result))
        raise DeviceUnavailableError(
            f"{error_message} after {timeout_seconds}s",
            camera_id=camera_id,
        )

    finally:
        executor.shutdown(wait=False)


def _deliver_late_result(future: Future, callback: Callable[[Any], None]) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    callback(future.result())


__all__ = ["run_with_timeout"]
