"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    RetrySettings: Retry executor settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    delay = settings.retry.delay_seconds
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure.retry import RetrySettings

__all__ = ["Settings", "RetrySettings", "settings"]
