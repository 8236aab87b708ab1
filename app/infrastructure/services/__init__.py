"""
Dependency injection services.

Provides cached provider functions for infrastructure dependencies.
"""

from infrastructure.services.providers import (
    get_retry_executor,
    get_retry_policy,
    get_settings,
)

__all__ = [
    "get_settings",
    "get_retry_policy",
    "get_retry_executor",
]
