"""Locale detection from persisted choices and environment signals.

Detection consults an ordered list of sources (persisted choice, reported
user-agent languages, page-declared language) and returns the first value
that names a supported locale. Sources read from an injected
EnvironmentSnapshot, so detection is deterministic and needs no real browser
or process environment.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from fitcoach.i18n.models import Locale
from fitcoach.logging import get_module_logger

logger = get_module_logger()


class DetectionSource(str, Enum):
    """Sources consulted when detecting the initial locale."""

    STORE = "store"
    NAVIGATOR = "navigator"
    HTML_TAG = "html_tag"

    @classmethod
    def parse_order(cls, names: Iterable[str]) -> List["DetectionSource"]:
        """Convert configured source names into DetectionSource members.

        Raises:
            ValueError: If a name is not a known source.
        """
        return [cls(name.strip().lower()) for name in names]


DEFAULT_DETECTION_ORDER: Tuple[DetectionSource, ...] = (
    DetectionSource.STORE,
    DetectionSource.NAVIGATOR,
    DetectionSource.HTML_TAG,
)

# gettext consults these in order; LANGUAGE may hold a colon-separated list.
_OS_LOCALE_VARIABLES = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")


def parse_accept_language(accept_language: Optional[str]) -> List[str]:
    """Parse an Accept-Language header into tags by descending quality.

    "en-US,en;q=0.9,fr-FR;q=0.8" -> ["en-US", "en", "fr-FR"]

    Wildcards and tags with q=0 are dropped; malformed quality values count
    as 1.0. Ties keep header order.
    """
    if not accept_language:
        return []

    preferences = []
    for part in accept_language.split(","):
        lang_range, *parameters = part.split(";")
        lang_range = lang_range.strip()
        if not lang_range or lang_range == "*":
            continue
        quality = 1.0
        for parameter in parameters:
            name, _, value = parameter.partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                quality = float(value.strip())
            except ValueError:
                quality = 1.0
            break
        if quality <= 0:
            continue
        preferences.append((lang_range, quality))

    return [tag for tag, _ in sorted(preferences, key=lambda x: x[1], reverse=True)]


def normalize_posix_locale(value: Optional[str]) -> Optional[str]:
    """Convert a POSIX locale name ("pt_BR.UTF-8@euro") to a language tag ("pt-BR").

    Returns None for empty values and the "C"/"POSIX" locales.
    """
    if not value:
        return None
    tag = value.split(".")[0].split("@")[0].strip()
    if not tag or tag.upper() in ("C", "POSIX"):
        return None
    return tag.replace("_", "-")


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """Read-only language signals from the runtime environment.

    Attributes:
        navigator_languages: User-agent reported languages, most preferred first.
        html_lang: Language declared by the page/document, if any.
    """

    navigator_languages: Tuple[str, ...] = ()
    html_lang: Optional[str] = None

    @classmethod
    def from_accept_language(
        cls, accept_language: Optional[str], html_lang: Optional[str] = None
    ) -> "EnvironmentSnapshot":
        """Build a snapshot from an HTTP Accept-Language header."""
        return cls(
            navigator_languages=tuple(parse_accept_language(accept_language)),
            html_lang=html_lang,
        )

    @classmethod
    def from_os_environ(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        html_lang: Optional[str] = None,
    ) -> "EnvironmentSnapshot":
        """Build a snapshot from POSIX locale variables.

        Args:
            environ: Environment mapping (default: os.environ).
            html_lang: Optional page-declared language.
        """
        environ = os.environ if environ is None else environ
        languages: List[str] = []
        for variable in _OS_LOCALE_VARIABLES:
            for value in (environ.get(variable) or "").split(":"):
                tag = normalize_posix_locale(value)
                if tag and tag not in languages:
                    languages.append(tag)
        return cls(navigator_languages=tuple(languages), html_lang=html_lang)


class LanguageNegotiator:
    """Performs language negotiation between requested and available tags.

    Implements RFC 4647 style matching for the common case where a user
    requests "pt-BR" but only "pt" is available.
    """

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check if available language matches requested language.

        Args:
            requested: Requested language tag (e.g., "pt-BR").
            available: Available language tag (e.g., "pt").
            strict: If True, requires exact match. If False, allows language-only match.

        Returns:
            True if languages match.
        """
        requested = requested.replace("_", "-")
        available = available.replace("_", "-")
        if requested.lower() == available.lower():
            return True

        if strict:
            return False

        requested_lang = requested.split("-")[0].lower()
        available_lang = available.split("-")[0].lower()
        return requested_lang == available_lang

    @staticmethod
    def find_best_match(
        requested: Sequence[str],
        available: Sequence[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Find best matching language from available options.

        Each requested tag is tried for an exact match first, then a
        language-only match, before moving to the next requested tag.

        Args:
            requested: Requested language tags in preference order.
            available: Available language tags.
            default: Default if no match found.

        Returns:
            Best matching language from available, or default if no match.
        """
        for req_lang in requested:
            if not req_lang:
                continue
            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=True):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=False):
                    return avail_lang

        return default


class LocaleResolver:
    """Resolves the initial locale from ordered detection sources.

    Resolution order (default):
    1. Previously persisted choice
    2. User-agent/environment reported languages
    3. Page-declared language attribute
    4. Fallback locale
    """

    def __init__(
        self,
        supported_locales: Sequence[Locale],
        fallback_locale: Locale,
        detection_order: Sequence[DetectionSource] = DEFAULT_DETECTION_ORDER,
    ):
        """Initialize locale resolver.

        Args:
            supported_locales: Locales detection may return.
            fallback_locale: Locale returned when no source matches.
            detection_order: Sources to consult, highest priority first.
        """
        self.supported_locales = list(supported_locales)
        self.fallback_locale = fallback_locale
        self.detection_order = list(detection_order)
        self.log = logger.bind(fallback_locale=fallback_locale.value)

    def match(self, tag: Optional[str]) -> Optional[Locale]:
        """Map a language tag onto a supported locale, or None."""
        if not tag:
            return None
        best = LanguageNegotiator.find_best_match(
            [tag], [locale.value for locale in self.supported_locales]
        )
        return Locale(best) if best else None

    def candidates(
        self,
        source: DetectionSource,
        stored: Optional[str],
        environment: EnvironmentSnapshot,
    ) -> List[str]:
        """Tags a single source reports, in its own preference order."""
        if source is DetectionSource.STORE:
            return [stored] if stored else []
        if source is DetectionSource.NAVIGATOR:
            return list(environment.navigator_languages)
        if source is DetectionSource.HTML_TAG:
            return [environment.html_lang] if environment.html_lang else []
        return []

    def detect(
        self,
        stored: Optional[str],
        environment: Optional[EnvironmentSnapshot] = None,
    ) -> Locale:
        """Return the first supported locale named by the detection sources.

        Args:
            stored: Value read from the persistence store, if any.
            environment: Environment signals (default: empty snapshot).

        Returns:
            Detected Locale, or the fallback locale if no source matches.
        """
        environment = environment or EnvironmentSnapshot()
        for source in self.detection_order:
            for tag in self.candidates(source, stored, environment):
                locale = self.match(tag)
                if locale is not None:
                    self.log.debug(
                        "locale_detected",
                        source=source.value,
                        tag=tag,
                        locale=locale.value,
                    )
                    return locale

        self.log.debug("no_locale_detected")
        return self.fallback_locale

    def resolve_from_header(self, accept_language: Optional[str]) -> Locale:
        """Resolve locale from an HTTP Accept-Language header alone.

        Returns:
            Resolved Locale, or the fallback locale if none match.
        """
        for tag in parse_accept_language(accept_language):
            locale = self.match(tag)
            if locale is not None:
                return locale
        return self.fallback_locale
