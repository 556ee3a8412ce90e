"""Feature-level fixtures for i18n system tests."""

from unittest.mock import MagicMock

import pytest
import yaml

from fitcoach.i18n import (
    InMemoryLocaleStore,
    LocaleStore,
    LocaleStoreError,
    YAMLTranslationLoader,
)
from tests.factories.i18n import make_resources, make_translator


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - translation.en.yml
    - exercises.en.yml
    - translation.es.yml
    - translation.fr.yml
    """
    files = {
        "translation.en.yml": {
            "nav": {"dashboard": "Dashboard", "clients": "Clients"},
            "admin": {"approve": "Approve"},
            "dashboard": {"greeting": "Hello {{name}}"},
        },
        "exercises.en.yml": {
            "exercises": {"categories": {"strength": "Strength", "cardio": "Cardio"}},
        },
        "translation.es.yml": {
            "nav.dashboard": "Panel",
        },
        "translation.fr.yml": {
            "nav": {"dashboard": "Tableau de Bord"},
        },
    }
    for name, data in files.items():
        with open(tmp_path / name, "w", encoding="utf-8") as f:
            yaml.dump(data, f, allow_unicode=True)
    return tmp_path


@pytest.fixture
def yaml_loader(temp_translations_dir):
    """Create YAMLTranslationLoader for temporary translations directory."""
    return YAMLTranslationLoader(temp_translations_dir, use_cache=False)


@pytest.fixture
def resources():
    return make_resources()


@pytest.fixture
def store():
    return InMemoryLocaleStore()


@pytest.fixture
def failing_store():
    """Store whose reads and writes always fail."""
    failing = MagicMock(spec=LocaleStore)
    failing.get.side_effect = LocaleStoreError("storage disabled")
    failing.set.side_effect = LocaleStoreError("quota exceeded")
    return failing


@pytest.fixture
def translator(store):
    """Translator over the factory resources with an in-memory store."""
    return make_translator(store=store)
