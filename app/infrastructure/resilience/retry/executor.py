"""Bounded retry executor.

Runs a caller-supplied operation and transparently re-attempts it on
recoverable failure, up to the attempt budget of a RetryPolicy, pausing a
fixed delay between attempts.

The failure that finally propagates is always the original exception object
from the last attempt. Retries are invisible to the caller unless
``invoke_with_outcome`` is used.

Usage:
    from infrastructure.resilience.retry import RetryExecutor, RetryPolicy

    executor = RetryExecutor(RetryPolicy(max_attempts=3, delay_seconds=1))
    data = executor.invoke(lambda: client.fetch("resource-1"))

    # One-shot helper with the same semantics
    from infrastructure.resilience.retry import invoke
    data = invoke(lambda: client.fetch("resource-1"), 3, 1, ConnectionError)
"""

import asyncio
import functools
import inspect
import threading
import time
from typing import Any, Awaitable, Callable, Optional, Protocol, Type, TypeVar

from infrastructure.logging import get_module_logger
from infrastructure.resilience.retry.config import RetryPolicy
from infrastructure.resilience.retry.models import RetryEvent, RetryOutcome

T = TypeVar("T")

logger = get_module_logger()


class RetryCancelledError(Exception):
    """Raised when a retry loop is aborted through its cancel event."""

    pass


class RetryObserver(Protocol):
    """Protocol for collaborators observing failed attempts.

    Attempt instrumentation is delegated here. An observer that raises is
    logged and ignored.
    """

    def on_retry(self, event: RetryEvent) -> None:
        """Called after a recoverable failure, before the delay."""
        ...

    def on_give_up(self, event: RetryEvent) -> None:
        """Called before the terminal failure propagates."""
        ...


def _require_operation(operation: Any) -> None:
    if operation is None or not callable(operation):
        raise ValueError("operation is required")


def _operation_name(operation: Callable[..., Any]) -> str:
    if isinstance(operation, functools.partial):
        operation = operation.func
    return getattr(operation, "__qualname__", type(operation).__name__)


class RetryExecutor:
    """Executes operations under a RetryPolicy.

    Attempts run strictly sequentially on the caller's thread (or task, for
    ``ainvoke``). An executor holds no per-call state, so one instance can be
    shared by concurrent callers.

    Attributes:
        policy: RetryPolicy applied to every invocation
        observer: Optional RetryObserver notified of failed attempts
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        sleep: Optional[Callable[[float], None]] = None,
        async_sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        observer: Optional[RetryObserver] = None,
    ) -> None:
        """Initialize the executor.

        Args:
            policy: Optional RetryPolicy. If not provided, uses defaults.
            sleep: Blocking delay function, defaults to time.sleep
            async_sleep: Coroutine delay function, defaults to asyncio.sleep
            observer: Optional RetryObserver
        """
        self.policy = policy or RetryPolicy()
        self.observer = observer
        self._sleep = sleep or time.sleep
        self._async_sleep = async_sleep or asyncio.sleep

    def invoke(
        self,
        operation: Callable[[], T],
        cancel_event: Optional[threading.Event] = None,
    ) -> T:
        """Run ``operation`` until it succeeds or retrying is not warranted.

        Args:
            operation: Zero-argument callable
            cancel_event: Optional event; once set, the pending delay is
                interrupted and RetryCancelledError is raised

        Returns:
            The value returned by the first successful attempt

        Raises:
            ValueError: If operation is missing, before any attempt
            RetryCancelledError: If cancel_event is set while retrying
            Exception: The original failure of the last attempt
        """
        return self.invoke_with_outcome(operation, cancel_event).value

    def invoke_with_outcome(
        self,
        operation: Callable[[], T],
        cancel_event: Optional[threading.Event] = None,
    ) -> RetryOutcome[T]:
        """Same as ``invoke`` but also reports how many attempts were needed."""
        _require_operation(operation)

        name = _operation_name(operation)
        remaining = self.policy.max_attempts
        attempt = 0

        while True:
            attempt += 1
            try:
                value = operation()
            except Exception as exc:
                remaining -= 1
                if not self._should_retry(exc, attempt, remaining, name):
                    raise

                delay = self.policy.delay_seconds
                self._notify_retry(exc, attempt, delay, name)

                if cancel_event is not None:
                    cancelled = (
                        cancel_event.wait(delay) if delay > 0 else cancel_event.is_set()
                    )
                    if cancelled:
                        raise RetryCancelledError(
                            f"Retry of '{name}' cancelled after {attempt} attempt(s)"
                        ) from exc
                elif delay > 0:
                    self._sleep(delay)
                continue

            return RetryOutcome(value=value, attempts=attempt)

    async def ainvoke(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Async counterpart of ``invoke``.

        The delay suspends the calling task with ``async_sleep`` so the event
        loop keeps running. Cancelling the task raises asyncio.CancelledError
        from the pending delay or attempt instead of the operation's failure.

        Args:
            operation: Zero-argument callable returning an awaitable

        Returns:
            The value produced by the first successful attempt
        """
        outcome = await self.ainvoke_with_outcome(operation)
        return outcome.value

    async def ainvoke_with_outcome(
        self, operation: Callable[[], Awaitable[T]]
    ) -> RetryOutcome[T]:
        """Same as ``ainvoke`` but also reports how many attempts were needed."""
        _require_operation(operation)

        name = _operation_name(operation)
        remaining = self.policy.max_attempts
        attempt = 0

        while True:
            attempt += 1
            try:
                pending = operation()
                awaitable = inspect.isawaitable(pending)
                if awaitable:
                    value = await pending
            except Exception as exc:
                remaining -= 1
                if not self._should_retry(exc, attempt, remaining, name):
                    raise

                delay = self.policy.delay_seconds
                self._notify_retry(exc, attempt, delay, name)
                if delay > 0:
                    await self._async_sleep(delay)
                continue

            # A plain return value means the call already ran and must not be repeated
            if not awaitable:
                raise TypeError(f"operation '{name}' did not return an awaitable")

            return RetryOutcome(value=value, attempts=attempt)

    def _should_retry(
        self, exc: Exception, attempt: int, remaining: int, name: str
    ) -> bool:
        # Budget is checked before the recoverable filter
        if remaining <= 0 or not self.policy.is_recoverable(exc):
            self._notify(
                "on_give_up",
                RetryEvent(
                    attempt=attempt,
                    max_attempts=self.policy.max_attempts,
                    exception=exc,
                    operation_name=name,
                ),
            )
            return False
        return True

    def _notify_retry(
        self, exc: Exception, attempt: int, delay: float, name: str
    ) -> None:
        self._notify(
            "on_retry",
            RetryEvent(
                attempt=attempt,
                max_attempts=self.policy.max_attempts,
                exception=exc,
                delay_seconds=delay,
                operation_name=name,
            ),
        )

    def _notify(self, hook: str, event: RetryEvent) -> None:
        # Observer failures never replace the pending failure or end the loop
        if self.observer is None:
            return
        try:
            getattr(self.observer, hook)(event)
        except Exception as e:
            logger.error(
                "retry_observer_failed",
                hook=hook,
                operation=event.operation_name,
                attempt=event.attempt,
                error=str(e),
                exc_info=True,
            )


def _policy_for_call(
    max_attempts: int,
    delay_seconds: float,
    recoverable_exceptions: tuple[Type[BaseException], ...],
) -> RetryPolicy:
    # A budget of zero or less still runs the operation once
    return RetryPolicy(
        max_attempts=max(max_attempts, 1),
        delay_seconds=delay_seconds,
        recoverable_exceptions=recoverable_exceptions,
    )


def invoke(
    operation: Callable[[], T],
    max_attempts: int,
    delay_seconds: float = 0,
    *recoverable_exceptions: Type[BaseException],
) -> T:
    """Retry ``operation``, optionally only for the given exception classes.

    ``max_attempts`` counts the first attempt. Values of 0 or less give
    exactly one attempt and no retry.

    Example:
        rows = invoke(lambda: db.query(sql), 3, 0.2, TimeoutError, ConnectionError)
    """
    _require_operation(operation)
    policy = _policy_for_call(max_attempts, delay_seconds, recoverable_exceptions)
    return RetryExecutor(policy).invoke(operation)


async def ainvoke(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int,
    delay_seconds: float = 0,
    *recoverable_exceptions: Type[BaseException],
) -> T:
    """Async counterpart of ``invoke``."""
    _require_operation(operation)
    policy = _policy_for_call(max_attempts, delay_seconds, recoverable_exceptions)
    return await RetryExecutor(policy).ainvoke(operation)


def retryable(
    max_attempts: int = 3,
    delay_seconds: float = 0.0,
    recoverable_exceptions: tuple[Type[BaseException], ...] = (),
    observer: Optional[RetryObserver] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator retrying every call of the wrapped function.

    Works for plain functions and ``async def`` functions alike.

    Example:
        @retryable(max_attempts=5, delay_seconds=2, recoverable_exceptions=(TimeoutError,))
        def fetch_report(report_id: str) -> dict:
            ...
    """
    executor = RetryExecutor(
        _policy_for_call(max_attempts, delay_seconds, tuple(recoverable_exceptions)),
        observer=observer,
    )

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                return await executor.ainvoke(functools.partial(func, *args, **kwargs))

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return executor.invoke(functools.partial(func, *args, **kwargs))

        return wrapper

    return decorator
