"""Retry policy configuration.

This module defines the immutable policy consumed by the retry executor.
"""

import importlib
import operator
from dataclasses import dataclass, field
from typing import Tuple, Type

from infrastructure.configuration.infrastructure.retry import RetrySettings


def resolve_exception_class(path: str) -> Type[BaseException]:
    """Resolve a dotted path to an exception class.

    Bare names are looked up in ``builtins``.

    Args:
        path: Dotted path such as "builtins.TimeoutError" or "TimeoutError"

    Returns:
        The exception class

    Raises:
        ValueError: If the path cannot be imported or is not an exception class
    """
    module_name, _, attr = path.rpartition(".")
    module_name = module_name or "builtins"

    try:
        target = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Cannot resolve exception class '{path}'") from e

    if not (isinstance(target, type) and issubclass(target, BaseException)):
        raise ValueError(f"'{path}' is not an exception class")
    return target


@dataclass(frozen=True)
class RetryPolicy:
    """Policy controlling how an operation is re-attempted.

    Attributes:
        max_attempts: Total attempts allowed, the first attempt included
        delay_seconds: Pause after a failed attempt, before the next one.
            Never applied before the first or after the last attempt.
        recoverable_exceptions: Exception classes eligible for retry, matched
            with subclass semantics. Empty means every exception is recoverable.

    Example:
        # Three attempts, half a second apart, only for network failures
        policy = RetryPolicy(
            max_attempts=3,
            delay_seconds=0.5,
            recoverable_exceptions=(ConnectionError, TimeoutError),
        )
    """

    max_attempts: int = 3
    delay_seconds: float = 0.0
    recoverable_exceptions: Tuple[Type[BaseException], ...] = field(
        default_factory=tuple
    )

    def __post_init__(self) -> None:
        """Validate configuration values."""
        try:
            max_attempts = operator.index(self.max_attempts)
        except TypeError as e:
            raise ValueError("max_attempts must be an integer") from e
        object.__setattr__(self, "max_attempts", max_attempts)

        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")

        recoverable = tuple(self.recoverable_exceptions)
        for kind in recoverable:
            if not (isinstance(kind, type) and issubclass(kind, BaseException)):
                raise ValueError("recoverable_exceptions must contain exception classes")
        # Stored as a tuple for isinstance()
        object.__setattr__(self, "recoverable_exceptions", recoverable)

    def is_recoverable(self, exc: BaseException) -> bool:
        """Check whether a failure may be retried under this policy."""
        if not self.recoverable_exceptions:
            return True
        return isinstance(exc, self.recoverable_exceptions)

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> "RetryPolicy":
        """Build a policy from environment-driven RetrySettings.

        Args:
            settings: RetrySettings instance

        Returns:
            RetryPolicy mirroring the settings

        Raises:
            ValueError: If a configured exception path cannot be resolved
        """
        return cls(
            max_attempts=settings.max_attempts,
            delay_seconds=settings.delay_seconds,
            recoverable_exceptions=tuple(
                resolve_exception_class(path)
                for path in settings.recoverable_exception_paths
            ),
        )
