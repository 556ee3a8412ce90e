"""Active locale state shared by every render."""

from threading import Lock

from fitcoach.i18n.models import Locale


class ActiveLocaleState:
    """Single-writer cell holding the active locale.

    Readers always see a whole Locale value; writers swap the reference
    under a lock so concurrent set_locale calls are serialized.
    """

    def __init__(self, initial: Locale):
        self._locale = initial
        self._lock = Lock()

    def get(self) -> Locale:
        return self._locale

    def swap(self, locale: Locale) -> Locale:
        """Replace the active locale and return the previous one."""
        with self._lock:
            previous = self._locale
            self._locale = locale
            return previous
