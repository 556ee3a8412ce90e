"""Translation loading interface and implementations.

Defines the contract for loading translations and provides a YAML-based
loader for the bundled resource files plus an in-memory loader for static
resource tables.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from fitcoach.i18n.exceptions import CatalogFormatError, UnsupportedLocaleError
from fitcoach.i18n.models import Locale, TranslationCatalog
from fitcoach.logging import get_module_logger

logger = get_module_logger()


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    Implementations must define how to load and parse translation data
    for different locales.
    """

    @abstractmethod
    def load(self, locale: Locale) -> TranslationCatalog:
        """Load translations for a specific locale.

        Args:
            locale: Locale to load translations for.

        Returns:
            TranslationCatalog with loaded messages.

        Raises:
            FileNotFoundError: If no translations exist for the locale.
            CatalogFormatError: If translation data is malformed.
        """

    @abstractmethod
    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Load translations for all available locales.

        Returns:
            Dict mapping Locale to TranslationCatalog.
        """


class YAMLTranslationLoader(TranslationLoader):
    """Loader for YAML-based translation files.

    Expects files named ``<namespace>.<locale>.yml`` (e.g.
    ``translation.es.yml``) in the translations directory. All files for a
    locale are merged into one catalog in filename order.

    Attributes:
        translations_dir: Path to directory containing YAML files.
        cache: Loaded catalogs (locale -> catalog) when caching is enabled.
    """

    def __init__(
        self,
        translations_dir: Union[str, Path],
        use_cache: bool = True,
    ):
        """Initialize YAML translation loader.

        Args:
            translations_dir: Path to directory with YAML translation files.
            use_cache: Whether to cache loaded catalogs in memory.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.translations_dir = Path(translations_dir)
        self.use_cache = use_cache
        self.cache: Dict[Locale, TranslationCatalog] = {}

        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.debug(
            "initialized_yaml_loader",
            translations_dir=str(self.translations_dir),
            use_cache=use_cache,
        )

    def load(self, locale: Locale) -> TranslationCatalog:
        """Load translations for a locale from YAML files.

        Args:
            locale: Locale to load.

        Returns:
            TranslationCatalog with loaded messages.

        Raises:
            FileNotFoundError: If no YAML files found for locale.
            CatalogFormatError: If YAML parsing fails or data is malformed.
        """
        if self.use_cache and locale in self.cache:
            logger.debug("loaded_from_cache", locale=locale.value)
            return self.cache[locale]

        yaml_files = sorted(self.translations_dir.glob(f"*.{locale.value}.yml"))
        if not yaml_files:
            raise FileNotFoundError(
                f"No translation files found for locale {locale.value} in {self.translations_dir}"
            )

        catalog = TranslationCatalog(locale=locale)
        for yaml_file in yaml_files:
            data = self._read_file(yaml_file)
            if not data:
                continue
            try:
                catalog = catalog.merged_with(TranslationCatalog.from_dict(locale, data))
            except CatalogFormatError as e:
                logger.error("invalid_translation_file", file=str(yaml_file), error=str(e))
                raise

        logger.info(
            "loaded_translations",
            locale=locale.value,
            file_count=len(yaml_files),
            key_count=len(catalog.keys()),
        )

        if self.use_cache:
            self.cache[locale] = catalog

        return catalog

    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Load translations for all locales that have YAML files.

        Files whose locale suffix is not a supported Locale are skipped.

        Raises:
            ValueError: If no translation files found at all.
        """
        locales_found = set()
        for yaml_file in self.translations_dir.glob("*.yml"):
            # "translation.es.yml" -> "es"
            parts = yaml_file.stem.split(".")
            if len(parts) >= 2:
                try:
                    locales_found.add(Locale.from_string(parts[-1]))
                except UnsupportedLocaleError:
                    logger.debug("skipped_unsupported_locale_file", file=yaml_file.name)

        if not locales_found:
            raise ValueError(f"No translation files found in {self.translations_dir}")

        return {locale: self.load(locale) for locale in Locale if locale in locales_found}

    def clear_cache(self) -> None:
        """Clear all cached translations."""
        self.cache.clear()
        logger.debug("cleared_translation_cache")

    def _read_file(self, yaml_file: Path) -> Mapping[str, Any]:
        try:
            with open(yaml_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
            raise CatalogFormatError(f"Failed to parse {yaml_file}: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise CatalogFormatError(
                f"{yaml_file.name}: expected a mapping, got {type(data).__name__}"
            )
        return data or {}


class DictTranslationLoader(TranslationLoader):
    """Loader over an in-memory resource table.

    Accepts ``{locale: {key: message | {...}}}`` where locales may be Locale
    members or their string tags, mirroring a static ``resources`` table
    bundled with the application.
    """

    def __init__(self, resources: Mapping[Union[Locale, str], Mapping[str, Any]]):
        self.resources: Dict[Locale, Mapping[str, Any]] = {
            Locale.from_string(locale): data for locale, data in resources.items()
        }

    def load(self, locale: Locale) -> TranslationCatalog:
        if locale not in self.resources:
            raise FileNotFoundError(f"No translations for locale {locale.value}")
        return TranslationCatalog.from_dict(locale, self.resources[locale])

    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        return {
            locale: self.load(locale) for locale in Locale if locale in self.resources
        }
