"""Retry observers backed by structured logging."""

from infrastructure.logging import get_module_logger
from infrastructure.resilience.retry.models import RetryEvent

logger = get_module_logger()


class LoggingRetryObserver:
    """Logs failed attempts and terminal failures with structlog.

    Attributes:
        log: Logger bound with component and executor name
    """

    def __init__(self, name: str = "retry-executor") -> None:
        self.name = name
        self.log = logger.bind(component="retry_executor", executor=name)

    def on_retry(self, event: RetryEvent) -> None:
        self.log.warning(
            "retry_attempt_failed",
            operation=event.operation_name,
            attempt=event.attempt,
            max_attempts=event.max_attempts,
            remaining_attempts=event.remaining_attempts,
            delay_seconds=event.delay_seconds,
            error_type=type(event.exception).__name__,
            error=str(event.exception),
        )

    def on_give_up(self, event: RetryEvent) -> None:
        self.log.error(
            "retry_gave_up",
            operation=event.operation_name,
            attempt=event.attempt,
            max_attempts=event.max_attempts,
            error_type=type(event.exception).__name__,
            error=str(event.exception),
        )
