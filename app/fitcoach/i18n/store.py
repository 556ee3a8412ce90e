"""Durable key-value stores for the user's locale choice."""

import contextlib
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Dict, Optional, Union

from fitcoach.i18n.exceptions import LocaleStoreError
from fitcoach.logging import get_module_logger

logger = get_module_logger()


class LocaleStore(ABC):
    """Abstract base class for locale persistence stores.

    Stores map a fixed key (e.g. "app.locale") to the chosen locale tag so
    the choice survives across sessions.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the stored value for key.

        Returns:
            Stored string or None if absent.

        Raises:
            LocaleStoreError: If the store cannot be read.
        """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key.

        Raises:
            LocaleStoreError: If the value cannot be written.
        """


class InMemoryLocaleStore(LocaleStore):
    """Process-local store, for development and testing."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()


class JSONFileLocaleStore(LocaleStore):
    """Store backed by a small JSON document on disk.

    Writes go through a temporary file and an atomic rename, so readers
    never observe a partially written document.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = Lock()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise LocaleStoreError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise LocaleStoreError(f"Unexpected content in {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read()
            except LocaleStoreError:
                logger.warning("locale_store_reset_unreadable", path=str(self.path))
                data = {}
            data[key] = value
            tmp_name = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=str(self.path.parent), prefix=f".{self.path.name}."
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except OSError as e:
                if tmp_name is not None:
                    with contextlib.suppress(OSError):
                        os.unlink(tmp_name)
                raise LocaleStoreError(f"Failed to write {self.path}: {e}") from e
