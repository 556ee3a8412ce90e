"""Factory functions for creating i18n components.

Provides convenience functions for initializing translators with the
configuration from settings.
"""

from pathlib import Path
from typing import Optional, Sequence

from fitcoach.configuration import I18nSettings, get_settings
from fitcoach.i18n.loader import TranslationLoader, YAMLTranslationLoader
from fitcoach.i18n.models import Locale
from fitcoach.i18n.resolvers import DetectionSource, EnvironmentSnapshot
from fitcoach.i18n.store import InMemoryLocaleStore, JSONFileLocaleStore, LocaleStore
from fitcoach.i18n.translator import Translator
from fitcoach.logging import get_module_logger

logger = get_module_logger()


def default_translations_dir() -> Path:
    """Directory of the bundled locale files (fitcoach/locales)."""
    return Path(__file__).resolve().parents[1] / "locales"


def create_store(i18n_settings: I18nSettings) -> LocaleStore:
    """Create the locale store configured by I18N_STORE_PATH."""
    if i18n_settings.store_path:
        return JSONFileLocaleStore(i18n_settings.store_path)
    return InMemoryLocaleStore()


def create_translator(
    loader: Optional[TranslationLoader] = None,
    store: Optional[LocaleStore] = None,
    environment: Optional[EnvironmentSnapshot] = None,
    fallback_locale: Optional[Locale] = None,
    detection_order: Optional[Sequence[DetectionSource]] = None,
    i18n_settings: Optional[I18nSettings] = None,
) -> Translator:
    """Create and configure a Translator instance.

    Anything not passed explicitly comes from settings.i18n.

    Args:
        loader: Translation loader (default: YAML loader over the bundled locales)
        store: Locale store (default: from I18N_STORE_PATH)
        environment: Environment signals for detection
        fallback_locale: Fallback locale (default: I18N_FALLBACK_LOCALE)
        detection_order: Detection sources (default: I18N_DETECTION_ORDER)
        i18n_settings: Settings to use instead of the process settings

    Returns:
        Translator: Configured translator; call ``initialize()`` to detect
        and activate the initial locale.

    Usage:
        translator = create_translator(
            environment=EnvironmentSnapshot.from_accept_language("es-MX,es;q=0.9"),
        )
        translator.initialize()
        translator.translate("nav.dashboard")  # "Panel"
    """
    i18n_settings = i18n_settings or get_settings().i18n

    if loader is None:
        translations_dir = (
            Path(i18n_settings.translations_dir)
            if i18n_settings.translations_dir
            else default_translations_dir()
        )
        loader = YAMLTranslationLoader(
            translations_dir=translations_dir,
            use_cache=i18n_settings.use_cache,
        )

    catalogs = loader.load_all()

    translator = Translator(
        catalogs=catalogs,
        fallback_locale=fallback_locale
        or Locale.from_string(i18n_settings.fallback_locale),
        detection_order=(
            detection_order
            if detection_order is not None
            else DetectionSource.parse_order(i18n_settings.detection_order)
        ),
        store=store if store is not None else create_store(i18n_settings),
        environment=environment,
        storage_key=i18n_settings.storage_key,
    )

    logger.info(
        "translator_created",
        locale_count=len(catalogs),
        loader=type(loader).__name__,
    )
    return translator
