"""Unit tests for the retryable decorator."""

import pytest

from infrastructure.resilience.retry import retryable


class TestRetryableSync:
    """Tests for retryable on plain functions."""

    def test_wraps_function_metadata(self):
        @retryable(max_attempts=2)
        def fetch_report(report_id: str) -> str:
            """Fetch a report."""
            return report_id

        assert fetch_report.__name__ == "fetch_report"
        assert fetch_report.__doc__ == "Fetch a report."

    def test_passes_arguments_and_retries(self):
        calls = []

        @retryable(max_attempts=3)
        def add(a, b, scale=1):
            calls.append((a, b, scale))
            if len(calls) < 3:
                raise TimeoutError("slow")
            return (a + b) * scale

        assert add(1, 2, scale=10) == 30
        assert calls == [(1, 2, 10)] * 3

    def test_raises_after_budget(self):
        calls = []

        @retryable(max_attempts=2)
        def always_fails():
            calls.append(1)
            raise ConnectionError(f"attempt {len(calls)}")

        with pytest.raises(ConnectionError, match="attempt 2"):
            always_fails()

        assert len(calls) == 2

    def test_respects_recoverable_exceptions(self):
        calls = []

        @retryable(max_attempts=5, recoverable_exceptions=(TimeoutError,))
        def bad_input():
            calls.append(1)
            raise ValueError("bad")

        with pytest.raises(ValueError):
            bad_input()

        assert len(calls) == 1

    def test_non_positive_budget_runs_once(self):
        calls = []

        @retryable(max_attempts=0)
        def fails():
            calls.append(1)
            raise OSError("nope")

        with pytest.raises(OSError):
            fails()

        assert len(calls) == 1

    def test_invalid_delay_fails_at_decoration(self):
        with pytest.raises(ValueError, match="delay_seconds must be >= 0"):
            retryable(delay_seconds=-1)

    def test_observer_receives_function_name(self, recording_observer):
        @retryable(max_attempts=2, observer=recording_observer)
        def sync_inventory():
            raise ConnectionError("down")

        with pytest.raises(ConnectionError):
            sync_inventory()

        assert len(recording_observer.retries) == 1
        assert recording_observer.retries[0].operation_name.endswith("sync_inventory")


@pytest.mark.asyncio
class TestRetryableAsync:
    """Tests for retryable on coroutine functions."""

    async def test_async_function_is_retried(self):
        calls = []

        @retryable(max_attempts=3)
        async def fetch(key):
            calls.append(key)
            if len(calls) < 2:
                raise ConnectionError("reset")
            return f"value:{key}"

        assert await fetch("a") == "value:a"
        assert calls == ["a", "a"]

    async def test_async_wrapper_is_coroutine_function(self):
        import inspect

        @retryable()
        async def noop():
            return None

        assert inspect.iscoroutinefunction(noop)
        assert noop.__name__ == "noop"

    async def test_async_failure_propagates(self):
        @retryable(max_attempts=2, recoverable_exceptions=(TimeoutError,))
        async def broken():
            raise RuntimeError("broken")

        with pytest.raises(RuntimeError, match="broken"):
            await broken()
