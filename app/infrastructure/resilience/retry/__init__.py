"""Generic bounded retry for in-process operations.

Architecture:
- RetryPolicy: Immutable attempt budget, delay and recoverable exceptions
- RetryExecutor: Runs an operation under a policy (sync and async)
- RetryObserver: Protocol for instrumentation of failed attempts
- LoggingRetryObserver: structlog-backed observer
- RetryOutcome / RetryEvent: Result diagnostics and observer payloads

Usage:
    from infrastructure.resilience.retry import (
        RetryExecutor,
        RetryPolicy,
        retryable,
    )

    policy = RetryPolicy(max_attempts=3, delay_seconds=0.5)
    executor = RetryExecutor(policy)
    value = executor.invoke(lambda: flaky_call())

    @retryable(max_attempts=3, recoverable_exceptions=(TimeoutError,))
    def fetch():
        ...
"""

from infrastructure.resilience.retry.config import RetryPolicy, resolve_exception_class
from infrastructure.resilience.retry.models import RetryEvent, RetryOutcome
from infrastructure.resilience.retry.executor import (
    RetryCancelledError,
    RetryExecutor,
    RetryObserver,
    ainvoke,
    invoke,
    retryable,
)
from infrastructure.resilience.retry.observers import LoggingRetryObserver

__all__ = [
    # Models
    "RetryOutcome",
    "RetryEvent",
    # Configuration
    "RetryPolicy",
    "resolve_exception_class",
    # Executor
    "RetryExecutor",
    "RetryObserver",
    "RetryCancelledError",
    "invoke",
    "ainvoke",
    "retryable",
    # Observers
    "LoggingRetryObserver",
]
