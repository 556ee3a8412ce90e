"""Exceptions raised by the i18n system."""

from typing import Iterable, Optional


class I18nError(Exception):
    """Base class for i18n errors."""


class UnsupportedLocaleError(I18nError, ValueError):
    """Raised when a locale outside the supported set is requested."""

    def __init__(self, locale: object, supported: Optional[Iterable[str]] = None):
        self.locale = locale
        self.supported = list(supported) if supported is not None else []
        message = f"Unsupported locale: {locale}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class CatalogFormatError(I18nError, ValueError):
    """Raised when translation data has the wrong shape at some path."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{message} at '{path}'" if path else message)


class LocaleStoreError(I18nError):
    """Raised by locale stores when the persisted choice cannot be read or written."""
