"""i18n system - locale detection, translation catalogs and interpolation.

Main components:
- models: Locale, TranslationKey, ResourceLeaf/ResourceBranch, TranslationCatalog
- loader: TranslationLoader, YAMLTranslationLoader and DictTranslationLoader
- store: LocaleStore implementations persisting the user's choice
- resolvers: DetectionSource, EnvironmentSnapshot, LocaleResolver, LanguageNegotiator
- translator: Translator with fallback lookup and {{variable}} interpolation
- factory: create_translator() wired from settings
"""

from fitcoach.i18n.exceptions import (
    CatalogFormatError,
    I18nError,
    LocaleStoreError,
    UnsupportedLocaleError,
)
from fitcoach.i18n.factory import create_translator
from fitcoach.i18n.loader import (
    DictTranslationLoader,
    TranslationLoader,
    YAMLTranslationLoader,
)
from fitcoach.i18n.models import (
    Locale,
    ResourceBranch,
    ResourceLeaf,
    TranslationCatalog,
    TranslationKey,
    build_resource_tree,
)
from fitcoach.i18n.resolvers import (
    DetectionSource,
    EnvironmentSnapshot,
    LanguageNegotiator,
    LocaleResolver,
)
from fitcoach.i18n.store import InMemoryLocaleStore, JSONFileLocaleStore, LocaleStore
from fitcoach.i18n.translator import Translator, interpolate

__all__ = [
    "CatalogFormatError",
    "I18nError",
    "LocaleStoreError",
    "UnsupportedLocaleError",
    "create_translator",
    "DictTranslationLoader",
    "TranslationLoader",
    "YAMLTranslationLoader",
    "Locale",
    "ResourceBranch",
    "ResourceLeaf",
    "TranslationCatalog",
    "TranslationKey",
    "build_resource_tree",
    "DetectionSource",
    "EnvironmentSnapshot",
    "LanguageNegotiator",
    "LocaleResolver",
    "InMemoryLocaleStore",
    "JSONFileLocaleStore",
    "LocaleStore",
    "Translator",
    "interpolate",
]
