"""Translation service for retrieving and interpolating translated messages.

The Translator owns the read-only catalogs, the active-locale state and the
persistence store. Lookups never raise: a key missing from both the
requested and the fallback locale comes back as the raw key string.
"""

import re
from threading import Lock
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from fitcoach.i18n.exceptions import LocaleStoreError, UnsupportedLocaleError
from fitcoach.i18n.models import Locale, TranslationCatalog, TranslationKey
from fitcoach.i18n.resolvers import (
    DEFAULT_DETECTION_ORDER,
    DetectionSource,
    EnvironmentSnapshot,
    LocaleResolver,
)
from fitcoach.i18n.state import ActiveLocaleState
from fitcoach.i18n.store import InMemoryLocaleStore, LocaleStore
from fitcoach.logging import get_module_logger

logger = get_module_logger()

DEFAULT_STORAGE_KEY = "app.locale"

# Distinct (locale, key) misses kept in Translator.missing_translations.
MAX_MISSING_TRANSLATIONS = 1000

# {{name}} with optional inner whitespace, as in "Hello {{ name }}"
_PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^{}\s]+)\s*\}\}")

LocaleChangeListener = Callable[[Locale, Locale], Any]


def interpolate(message: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Replace {{name}} placeholders with values from params.

    Values are inserted verbatim (no escaping) in a single pass, so inserted
    text is never interpolated again. Placeholders without a matching
    entry are left as they are.
    """
    if not params or "{{" not in message:
        return message

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return _PLACEHOLDER_PATTERN.sub(_replace, message)


class Translator:
    """Service for translating messages with locale fallback and interpolation.

    Attributes:
        catalogs: Read-only TranslationCatalogs by locale.
        fallback_locale: Locale consulted when the active locale lacks a key.
        store: LocaleStore persisting the user's choice.
        storage_key: Key of the persisted choice in the store.
        resolver: LocaleResolver used for detection.
        missing_translations: (locale, key) pairs that resolved to nothing,
            at most MAX_MISSING_TRANSLATIONS of them until cleared.
    """

    def __init__(
        self,
        catalogs: Mapping[Locale, TranslationCatalog],
        fallback_locale: Locale = Locale.EN,
        detection_order: Sequence[DetectionSource] = DEFAULT_DETECTION_ORDER,
        store: Optional[LocaleStore] = None,
        environment: Optional[EnvironmentSnapshot] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        """Initialize Translator.

        Args:
            catalogs: Catalog per supported locale.
            fallback_locale: Locale that holds every key.
            detection_order: Detection sources, highest priority first.
            store: Persistence store (default: in-memory store).
            environment: Environment signals used by detection.
            storage_key: Key of the persisted locale in the store.

        Raises:
            ValueError: If the fallback locale has no catalog.
        """
        if fallback_locale not in catalogs:
            raise ValueError(
                f"Fallback locale {fallback_locale.value} has no translation catalog"
            )

        self.catalogs: Dict[Locale, TranslationCatalog] = {
            locale: catalogs[locale] for locale in Locale if locale in catalogs
        }
        self.fallback_locale = fallback_locale
        self.store = store if store is not None else InMemoryLocaleStore()
        self.storage_key = storage_key
        self.environment = environment or EnvironmentSnapshot()
        self.resolver = LocaleResolver(
            supported_locales=list(self.catalogs),
            fallback_locale=fallback_locale,
            detection_order=detection_order,
        )
        self.missing_translations: Set[Tuple[str, str]] = set()

        self._state = ActiveLocaleState(fallback_locale)
        # Held across swap and persist so the store matches the active locale.
        self._switch_lock = Lock()
        self._listeners: List[LocaleChangeListener] = []
        self._listeners_lock = Lock()
        self._initialized = False

        logger.info(
            "initialized_translator",
            fallback_locale=fallback_locale.value,
            locales=[locale.value for locale in self.catalogs],
            detection_order=[source.value for source in detection_order],
        )

    @property
    def supported_locales(self) -> List[Locale]:
        return list(self.catalogs)

    @property
    def language(self) -> Locale:
        """The active locale."""
        return self._state.get()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self, environment: Optional[EnvironmentSnapshot] = None) -> Locale:
        """Detect the initial locale, activate it and persist it.

        Calling this again is a no-op returning the active locale.

        Args:
            environment: Overrides the snapshot given at construction.

        Returns:
            The active locale.
        """
        if self._initialized:
            logger.debug("translator_already_initialized", locale=self.language.value)
            return self.language

        if environment is not None:
            self.environment = environment
        locale = self.detect_locale()
        with self._switch_lock:
            self._state.swap(locale)
            self._persist(locale)
        self._initialized = True

        for locale_key in self.catalogs:
            missing = self.missing_keys(locale_key)
            if missing:
                logger.debug(
                    "partial_locale_catalog",
                    locale=locale_key.value,
                    missing_count=len(missing),
                )

        logger.info("translator_initialized", locale=locale.value)
        return locale

    def detect_locale(self, environment: Optional[EnvironmentSnapshot] = None) -> Locale:
        """Detect the preferred locale without changing any state.

        Args:
            environment: Environment signals (default: the translator's snapshot).

        Returns:
            First supported locale named by the detection sources, else the
            fallback locale.
        """
        stored = None
        if DetectionSource.STORE in self.resolver.detection_order:
            try:
                stored = self.store.get(self.storage_key)
            except (LocaleStoreError, OSError) as e:
                logger.warning("locale_store_read_failed", error=str(e))
        return self.resolver.detect(stored, environment or self.environment)

    def set_locale(self, locale: Union[Locale, str]) -> Locale:
        """Make locale active and persist the choice.

        A failed store write is logged; the in-memory change still applies.

        Args:
            locale: Locale or locale tag to activate.

        Returns:
            The now active Locale.

        Raises:
            UnsupportedLocaleError: If locale is not one of the loaded locales.
        """
        supported = [supported.value for supported in self.catalogs]
        try:
            resolved = Locale.from_string(locale)
        except UnsupportedLocaleError as e:
            logger.warning("unsupported_locale_requested", locale=str(locale))
            raise UnsupportedLocaleError(locale, supported) from e
        if resolved not in self.catalogs:
            logger.warning("unsupported_locale_requested", locale=resolved.value)
            raise UnsupportedLocaleError(locale, supported)

        with self._switch_lock:
            previous = self._state.swap(resolved)
            self._persist(resolved)

        if previous is not resolved:
            logger.info("locale_changed", locale=resolved.value, previous=previous.value)
            self._notify(resolved, previous)
        return resolved

    def translate(
        self,
        key: Union[str, TranslationKey],
        params: Optional[Mapping[str, Any]] = None,
        locale: Optional[Union[Locale, str]] = None,
    ) -> str:
        """Retrieve and interpolate a translated message.

        Resolution uses the active locale (or the explicit locale), then the
        fallback locale. If neither defines the key, the raw key is returned.

        Args:
            key: Dotted key (e.g. "dashboard.welcome") or TranslationKey.
            params: Values for {{name}} placeholders.
            locale: Resolve against this locale instead of the active one.

        Returns:
            Translated and interpolated message, or the key itself if missing.
        """
        raw_key = str(key)
        try:
            translation_key = (
                key if isinstance(key, TranslationKey) else TranslationKey.from_string(key)
            )
        except ValueError:
            self._record_missing(self.language, raw_key)
            return raw_key

        target = self._target_locale(locale)
        message = self._lookup(target, translation_key)

        if not message and target != self.fallback_locale:
            message = self._lookup(self.fallback_locale, translation_key)
            if message:
                logger.debug(
                    "used_fallback_translation",
                    key=raw_key,
                    requested_locale=target.value,
                    fallback_locale=self.fallback_locale.value,
                )

        if not message:
            self._record_missing(target, raw_key)
            return raw_key

        return interpolate(message, params)

    def has_message(self, key: Union[str, TranslationKey], locale: Locale) -> bool:
        """Check if locale itself (without fallback) defines key."""
        try:
            translation_key = (
                key if isinstance(key, TranslationKey) else TranslationKey.from_string(key)
            )
        except ValueError:
            return False
        return bool(self._lookup(locale, translation_key))

    def get_available_locales(self) -> List[Locale]:
        """Get list of loaded locales in declaration order."""
        return list(self.catalogs)

    def get_catalog(self, locale: Locale) -> Optional[TranslationCatalog]:
        return self.catalogs.get(locale)

    def missing_keys(self, locale: Locale) -> List[str]:
        """Fallback-locale keys that locale does not translate itself.

        Returns:
            Sorted dotted keys; every fallback key if locale is not loaded.
        """
        fallback_keys = self.catalogs[self.fallback_locale].keys()
        catalog = self.catalogs.get(locale)
        if catalog is None:
            return fallback_keys
        return [
            key
            for key in fallback_keys
            if not catalog.get_message(TranslationKey.from_string(key))
        ]

    def clear_missing_translations(self) -> None:
        """Forget recorded misses so they are logged and collected again."""
        self.missing_translations.clear()

    def subscribe(self, listener: LocaleChangeListener) -> Callable[[], None]:
        """Register listener(new_locale, previous_locale) for locale changes.

        Returns:
            Callable that removes the listener.
        """
        with self._listeners_lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _target_locale(self, locale: Optional[Union[Locale, str]]) -> Locale:
        if locale is None:
            return self.language
        try:
            resolved = Locale.from_string(locale)
        except UnsupportedLocaleError:
            return self.fallback_locale
        return resolved if resolved in self.catalogs else self.fallback_locale

    def _lookup(self, locale: Locale, key: TranslationKey) -> Optional[str]:
        catalog = self.catalogs.get(locale)
        return catalog.get_message(key) if catalog else None

    def _record_missing(self, locale: Locale, key: str) -> None:
        entry = (locale.value, key)
        if entry in self.missing_translations:
            return
        if len(self.missing_translations) >= MAX_MISSING_TRANSLATIONS:
            return
        self.missing_translations.add(entry)
        logger.debug("translation_missing", key=key, locale=locale.value)
        if len(self.missing_translations) == MAX_MISSING_TRANSLATIONS:
            logger.warning(
                "missing_translations_limit_reached",
                limit=MAX_MISSING_TRANSLATIONS,
            )

    def _persist(self, locale: Locale) -> None:
        try:
            self.store.set(self.storage_key, locale.value)
        except (LocaleStoreError, OSError) as e:
            logger.warning(
                "locale_persist_failed",
                locale=locale.value,
                storage_key=self.storage_key,
                error=str(e),
            )

    def _notify(self, locale: Locale, previous: Locale) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(locale, previous)
            except Exception as e:  # pylint: disable=broad-except
                logger.error(
                    "locale_listener_failed",
                    listener=getattr(listener, "__name__", "unknown"),
                    error=str(e),
                )
