"""Infrastructure modules.

Centralized infrastructure components:
- configuration: Settings management (settings, RetrySettings)
- logging: Structured logging (configure_logging, get_module_logger)
- resilience: Bounded retry executor
- services: Cached providers (get_settings, get_retry_executor)
"""
