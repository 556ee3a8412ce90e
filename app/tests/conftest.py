"""Shared fixtures for the FitCoach test suite."""

import pytest

from fitcoach.configuration import get_settings
from fitcoach.i18n import service


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the settings cache and the process-wide translator around each test."""
    get_settings.cache_clear()
    service.reset()
    yield
    service.reset()
    get_settings.cache_clear()


@pytest.fixture
def clean_i18n_env(monkeypatch):
    """Remove I18N_* and POSIX locale variables from the environment."""
    for name in (
        "I18N_FALLBACK_LOCALE",
        "I18N_DETECTION_ORDER",
        "I18N_STORAGE_KEY",
        "I18N_STORE_PATH",
        "I18N_TRANSLATIONS_DIR",
        "I18N_USE_CACHE",
        "LANGUAGE",
        "LC_ALL",
        "LC_MESSAGES",
        "LANG",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
