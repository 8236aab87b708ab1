"""Retry outcome and event models."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Successful result of a retried operation, with diagnostics.

    Fields:
        value: Value returned by the first successful attempt
        attempts: Number of attempts it took, the successful one included
    """

    value: T
    attempts: int


@dataclass(frozen=True)
class RetryEvent:
    """Notification describing a failed attempt.

    Fields:
        attempt: 1-based number of the attempt that failed
        max_attempts: Attempt budget of the policy
        exception: The failure raised by the attempt
        delay_seconds: Pause before the next attempt (0 when giving up)
        operation_name: Qualified name of the operation, when available
    """

    attempt: int
    max_attempts: int
    exception: BaseException
    delay_seconds: float = 0.0
    operation_name: Optional[str] = None

    @property
    def remaining_attempts(self) -> int:
        """Attempts left after this one."""
        return max(self.max_attempts - self.attempt, 0)
