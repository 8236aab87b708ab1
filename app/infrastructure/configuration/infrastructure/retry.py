"""Retry executor infrastructure settings."""

from typing import List

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class RetrySettings(InfrastructureSettings):
    """Default policy for the in-process retry executor.

    Environment Variables:
        RETRY_MAX_ATTEMPTS: Total attempts including the first (default: 3)
        RETRY_DELAY_SECONDS: Pause between a failed attempt and the next (default: 0)
        RETRY_RECOVERABLE_EXCEPTIONS: Comma-separated dotted exception paths
            considered recoverable (default: empty, every exception is recoverable)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        max_attempts = settings.retry.max_attempts
        paths = settings.retry.recoverable_exception_paths
        # ["builtins.TimeoutError", "builtins.ConnectionError"]
        ```
    """

    max_attempts: int = Field(
        default=3,
        alias="RETRY_MAX_ATTEMPTS",
        description="Total number of attempts, first attempt included",
    )
    delay_seconds: float = Field(
        default=0.0,
        alias="RETRY_DELAY_SECONDS",
        description="Delay between attempts (seconds), 0 retries immediately",
    )
    recoverable_exceptions: str = Field(
        default="",
        alias="RETRY_RECOVERABLE_EXCEPTIONS",
        description="Comma-separated dotted paths of recoverable exception classes",
    )

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        """Validate the RETRY_MAX_ATTEMPTS field."""
        if v < 1:
            raise ValueError("RETRY_MAX_ATTEMPTS must be at least 1")
        return v

    @field_validator("delay_seconds")
    @classmethod
    def validate_delay_seconds(cls, v: float) -> float:
        """Validate the RETRY_DELAY_SECONDS field."""
        if v < 0:
            raise ValueError("RETRY_DELAY_SECONDS must be >= 0")
        return v

    @property
    def recoverable_exception_paths(self) -> List[str]:
        """Dotted exception paths, in declaration order, blanks removed."""
        return [
            path.strip()
            for path in self.recoverable_exceptions.split(",")
            if path.strip()
        ]
