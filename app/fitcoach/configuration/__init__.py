"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    get_settings: Process-wide Settings singleton
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Localization settings class

Example:
    ```python
    from fitcoach.configuration import get_settings

    settings = get_settings()
    storage_key = settings.i18n.storage_key
    ```
"""

from functools import lru_cache

from fitcoach.configuration.i18n import DETECTION_SOURCE_NAMES, I18nSettings
from fitcoach.configuration.settings import Settings


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.
    Tests may call ``get_settings.cache_clear()`` after patching the environment.
    """
    return Settings()


__all__ = ["get_settings", "Settings", "I18nSettings", "DETECTION_SOURCE_NAMES"]
