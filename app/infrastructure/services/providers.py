"""
Factory functions for explicit dependency construction.

Provides application-scoped singleton providers for core infrastructure services.
Dependencies are wired here by ordinary constructor parameters; nothing is
discovered by scanning.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.resilience.retry import (
    LoggingRetryObserver,
    RetryExecutor,
    RetryPolicy,
)


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_retry_policy() -> RetryPolicy:
    """
    Get the application default retry policy.

    Returns:
        RetryPolicy: Built from the RETRY_* settings.

    Raises:
        ValueError: If RETRY_RECOVERABLE_EXCEPTIONS names an unknown class.
    """
    return RetryPolicy.from_settings(get_settings().retry)


@lru_cache
def get_retry_executor() -> RetryExecutor:
    """
    Get application-scoped retry executor singleton.

    The executor is stateless between calls, so sharing it is safe. Failed
    attempts are logged through LoggingRetryObserver.

    Usage:
        from infrastructure.services import get_retry_executor

        result = get_retry_executor().invoke(lambda: client.fetch(key))
    """
    return RetryExecutor(
        policy=get_retry_policy(),
        observer=LoggingRetryObserver(),
    )
