"""Process-wide translator access.

The application initializes one Translator at startup; UI code then calls
``t()`` during rendering.

Usage:
    from fitcoach.i18n import service

    service.initialize(environment=EnvironmentSnapshot.from_os_environ())
    service.t("dashboard.welcome")
    service.get_translator().set_locale("pt")
"""

from threading import Lock
from typing import Any, Mapping, Optional, Union

from fitcoach.i18n.factory import create_translator
from fitcoach.i18n.models import Locale
from fitcoach.i18n.resolvers import EnvironmentSnapshot
from fitcoach.i18n.translator import Translator
from fitcoach.logging import get_module_logger

logger = get_module_logger()

_translator_instance: Optional[Translator] = None
_instance_lock = Lock()


def initialize(
    translator: Optional[Translator] = None,
    environment: Optional[EnvironmentSnapshot] = None,
    **factory_kwargs: Any,
) -> Translator:
    """Build the process-wide translator and detect the initial locale.

    Args:
        translator: Pre-built translator (default: create_translator(**factory_kwargs)).
        environment: Environment signals for detection.
        **factory_kwargs: Passed to create_translator when translator is None.

    Returns:
        The initialized Translator.

    Raises:
        RuntimeError: If already initialized (call reset() first in tests).
    """
    global _translator_instance

    with _instance_lock:
        if _translator_instance is not None:
            raise RuntimeError("Translator already initialized")

        if translator is None:
            translator = create_translator(environment=environment, **factory_kwargs)
            environment = None
        translator.initialize(environment)
        _translator_instance = translator

    logger.info("translation_service_initialized", locale=translator.language.value)
    return translator


def get_translator() -> Translator:
    """Get the process-wide translator.

    Raises:
        RuntimeError: If initialize() has not been called.
    """
    if _translator_instance is None:
        raise RuntimeError("Translator not initialized; call initialize() first")
    return _translator_instance


def t(
    key: str,
    /,
    params: Optional[Mapping[str, Any]] = None,
    *,
    locale: Optional[Union[Locale, str]] = None,
    **kwargs: Any,
) -> str:
    """Translate key through the process-wide translator.

    Placeholder values come from params and keyword arguments, keywords
    winning on conflict. Placeholders named "key", "params" or "locale"
    are passed through params, e.g. ``t("msg", {"locale": "Español"})``.
    """
    values = {**params, **kwargs} if params else kwargs
    return get_translator().translate(key, values, locale=locale)


def reset() -> None:
    """Drop the process-wide translator (for testing only)."""
    global _translator_instance
    with _instance_lock:
        _translator_instance = None
    logger.debug("reset_translator_singleton")
