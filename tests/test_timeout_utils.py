"""Tests for camera timeout utilities.

Validates that timeout protection keeps device open/release calls from
hanging the UI thread.
"""

from __future__ import annotations

import threading
import time

import pytest

from capture.timeout_utils import run_with_timeout
from exceptions import DeviceUnavailableError


class TestRunWithTimeout:
    """Test timeout wrapper for camera operations."""

    def test_successful_operation_completes(self):
        """Fast successful operations should complete normally."""

        def quick_func():
            return "success"

        result = run_with_timeout(quick_func, timeout_seconds=1.0)
        assert result == "success"

    def test_slow_operation_times_out(self):
        """Operations exceeding timeout should raise DeviceUnavailableError."""

        def slow_func():
            time.sleep(1.5)
            return "never reached"

        start = time.monotonic()
        with pytest.raises(DeviceUnavailableError, match="timed out"):
            run_with_timeout(slow_func, timeout_seconds=0.2, camera_id="3")

        # Caller is released at the deadline, not when the worker finishes
        assert time.monotonic() - start < 1.0

    def test_timeout_error_carries_camera_id(self):
        with pytest.raises(DeviceUnavailableError) as exc_info:
            run_with_timeout(lambda: time.sleep(1.0), timeout_seconds=0.1, camera_id="1")

        assert exc_info.value.camera_id == "1"

    def test_exception_propagated(self):
        """Exceptions from wrapped function should propagate."""

        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError, match="test error"):
            run_with_timeout(failing_func, timeout_seconds=1.0)

    def test_timeout_with_arguments(self):
        """Timeout wrapper should pass through args and kwargs."""

        def func_with_args(a, b, c=None):
            return f"{a}-{b}-{c}"

        result = run_with_timeout(
            func_with_args,
            1.0,
            "Timed out",
            "x",
            "y",
            c="z",
        )
        assert result == "x-y-z"

    def test_late_result_handed_to_callback(self):
        """Results that arrive after the deadline should not be dropped."""
        late = []
        delivered = threading.Event()

        def on_late(value):
            late.append(value)
            delivered.set()

        def slow_func():
            time.sleep(0.3)
            return "handle"

        with pytest.raises(DeviceUnavailableError):
            run_with_timeout(slow_func, timeout_seconds=0.05, on_late_result=on_late)

        assert delivered.wait(timeout=2.0)
        assert late == ["handle"]

    def test_late_failure_not_delivered(self):
        """A late exception has nothing to release."""
        late = []

        def slow_failure():
            time.sleep(0.2)
            raise RuntimeError("device gone")

        with pytest.raises(DeviceUnavailableError):
            run_with_timeout(slow_failure, timeout_seconds=0.05, on_late_result=late.append)

        time.sleep(0.5)
        assert late == []
