"""Resilience patterns and implementations.

This module contains resilience-related infrastructure components such as
the bounded retry executor.
"""

from infrastructure.resilience.retry import (
    LoggingRetryObserver,
    RetryCancelledError,
    RetryEvent,
    RetryExecutor,
    RetryObserver,
    RetryOutcome,
    RetryPolicy,
    ainvoke,
    invoke,
    retryable,
)

__all__ = [
    "RetryPolicy",
    "RetryExecutor",
    "RetryObserver",
    "RetryOutcome",
    "RetryEvent",
    "RetryCancelledError",
    "LoggingRetryObserver",
    "invoke",
    "ainvoke",
    "retryable",
]
