"""Test data factories for i18n system testing.

Provides deterministic builders for:
- Resource tables shaped like the bundled locale files
- TranslationCatalog
- Translator wired to an in-memory store
"""

from typing import Dict, Optional, Sequence

from fitcoach.i18n import (
    DictTranslationLoader,
    EnvironmentSnapshot,
    InMemoryLocaleStore,
    Locale,
    LocaleStore,
    TranslationCatalog,
    Translator,
)
from fitcoach.i18n.resolvers import DEFAULT_DETECTION_ORDER, DetectionSource


def make_resources() -> Dict[str, dict]:
    """Resource table with a complete fallback and partial secondary locales.

    Mixes flat dotted keys and nested groups the way the bundled files do.
    """
    return {
        "en": {
            "nav.dashboard": "Dashboard",
            "nav.clients": "Clients",
            "admin": {"approve": "Approve", "reject": "Reject"},
            "dashboard": {
                "welcome": "Welcome back!",
                "greeting": "Hello {{name}}",
                "summary": "{{count}} clients, {{active}} active",
            },
            "exercises.categories": {
                "strength": "Strength",
                "cardio": "Cardio",
            },
            "common": {"empty": "Nothing here"},
        },
        "es": {
            "nav.dashboard": "Panel",
            "nav.clients": "Clientes",
            "dashboard": {
                "welcome": "¡Bienvenido de vuelta!",
                "greeting": "Hola {{name}}",
            },
            "common": {"empty": ""},
        },
        "pt": {
            "nav": {"dashboard": "Painel"},
            "exercises": {"categories": {"strength": "Força"}},
        },
    }


def make_translation_catalog(
    locale: Locale = Locale.EN,
    messages: Optional[dict] = None,
) -> TranslationCatalog:
    """Create a TranslationCatalog from plain nested data.

    Args:
        locale: Locale for the catalog.
        messages: Nested/dotted data (default: that locale's entry in make_resources()).
    """
    if messages is None:
        messages = make_resources().get(locale.value, {})
    return TranslationCatalog.from_dict(locale, messages)


def make_translator(
    resources: Optional[dict] = None,
    fallback_locale: Locale = Locale.EN,
    detection_order: Sequence[DetectionSource] = DEFAULT_DETECTION_ORDER,
    store: Optional[LocaleStore] = None,
    environment: Optional[EnvironmentSnapshot] = None,
) -> Translator:
    """Create a Translator over an in-memory resource table."""
    loader = DictTranslationLoader(resources if resources is not None else make_resources())
    return Translator(
        catalogs=loader.load_all(),
        fallback_locale=fallback_locale,
        detection_order=detection_order,
        store=store if store is not None else InMemoryLocaleStore(),
        environment=environment,
    )
