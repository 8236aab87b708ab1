"""Shared fixtures for retry executor tests."""

from typing import Any, List, Sequence

import pytest

from infrastructure.resilience.retry import RetryEvent, RetryPolicy


class FlakyOperation:
    """Zero-arg operation that raises queued failures before succeeding."""

    def __init__(self, failures: Sequence[BaseException], result: Any = "ok"):
        self.failures = list(failures)
        self.result = result
        self.calls = 0
        self.raised: List[BaseException] = []

    def __call__(self) -> Any:
        self.calls += 1
        if self.failures:
            exc = self.failures.pop(0)
            self.raised.append(exc)
            raise exc
        return self.result


class AsyncFlakyOperation(FlakyOperation):
    """Coroutine variant of FlakyOperation."""

    async def __call__(self) -> Any:  # type: ignore[override]
        return FlakyOperation.__call__(self)


class RecordingSleep:
    """Records requested delays instead of blocking."""

    def __init__(self):
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class AsyncRecordingSleep(RecordingSleep):
    async def __call__(self, seconds: float) -> None:  # type: ignore[override]
        self.delays.append(seconds)


class RecordingObserver:
    """RetryObserver collecting every notification."""

    def __init__(self):
        self.retries: List[RetryEvent] = []
        self.give_ups: List[RetryEvent] = []

    def on_retry(self, event: RetryEvent) -> None:
        self.retries.append(event)

    def on_give_up(self, event: RetryEvent) -> None:
        self.give_ups.append(event)


@pytest.fixture
def retry_policy_factory():
    """Factory for creating RetryPolicy instances."""

    def _factory(
        max_attempts: int = 3,
        delay_seconds: float = 0.5,
        recoverable_exceptions: tuple = (),
    ) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=max_attempts,
            delay_seconds=delay_seconds,
            recoverable_exceptions=recoverable_exceptions,
        )

    return _factory


@pytest.fixture
def flaky_operation_factory():
    """Factory for operations failing a given number of times."""

    def _factory(
        failures: int = 0,
        exc_type: type = ConnectionError,
        result: Any = "ok",
        exceptions: Sequence[BaseException] | None = None,
    ) -> FlakyOperation:
        if exceptions is None:
            exceptions = [exc_type(f"failure {i + 1}") for i in range(failures)]
        return FlakyOperation(exceptions, result)

    return _factory


@pytest.fixture
def async_flaky_operation_factory():
    """Factory for coroutine operations failing a given number of times."""

    def _factory(
        failures: int = 0,
        exc_type: type = ConnectionError,
        result: Any = "ok",
    ) -> AsyncFlakyOperation:
        return AsyncFlakyOperation(
            [exc_type(f"failure {i + 1}") for i in range(failures)], result
        )

    return _factory


@pytest.fixture
def recording_sleep():
    """Blocking sleep replacement that records delays."""
    return RecordingSleep()


@pytest.fixture
def async_recording_sleep():
    """Async sleep replacement that records delays."""
    return AsyncRecordingSleep()


@pytest.fixture
def recording_observer():
    """Observer that records retry and give-up events."""
    return RecordingObserver()
