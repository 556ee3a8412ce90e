"""Internationalization feature settings."""

import json
from typing import Any, List, Optional

from pydantic import Field, field_validator

from fitcoach.configuration.base import FeatureSettings

# Names accepted in I18N_DETECTION_ORDER, highest priority first by default.
DETECTION_SOURCE_NAMES = ("store", "navigator", "html_tag")


class I18nSettings(FeatureSettings):
    """Locale detection and translation catalog configuration.

    Environment Variables:
        I18N_FALLBACK_LOCALE: Locale used when a key or locale is missing (default: en)
        I18N_DETECTION_ORDER: Detection sources, comma-separated or as a JSON list
            (default: store,navigator,html_tag)
        I18N_STORAGE_KEY: Key under which the chosen locale is persisted
            (default: app.locale)
        I18N_STORE_PATH: JSON file backing the locale store; empty keeps the
            choice in memory only
        I18N_TRANSLATIONS_DIR: Override for the bundled locales directory
        I18N_USE_CACHE: Cache parsed YAML catalogs in the loader (default: True)

    Example:
        ```python
        from fitcoach.configuration import get_settings

        settings = get_settings()
        fallback = settings.i18n.fallback_locale
        order = settings.i18n.detection_order  # ["store", "navigator", "html_tag"]
        ```
    """

    fallback_locale: str = Field(default="en", alias="I18N_FALLBACK_LOCALE")
    detection_order_raw: str = Field(
        default=",".join(DETECTION_SOURCE_NAMES),
        alias="I18N_DETECTION_ORDER",
    )
    storage_key: str = Field(default="app.locale", alias="I18N_STORAGE_KEY")
    store_path: Optional[str] = Field(default=None, alias="I18N_STORE_PATH")
    translations_dir: Optional[str] = Field(
        default=None, alias="I18N_TRANSLATIONS_DIR"
    )
    use_cache: bool = Field(default=True, alias="I18N_USE_CACHE")

    @field_validator("detection_order_raw", mode="before")
    @classmethod
    def _parse_detection_order(cls, v: Optional[Any]) -> Any:
        """Accept I18N_DETECTION_ORDER as comma-separated text or a JSON list."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ",".join(str(name) for name in v)
        if isinstance(v, str):
            s = v.strip()
            if not s.startswith("["):
                return s
            try:
                parsed = json.loads(s)
            except (json.JSONDecodeError, ValueError) as e:
                raise ValueError(
                    f"Invalid I18N_DETECTION_ORDER JSON: {e} (value: {s[:80]})"
                ) from e
            if not isinstance(parsed, list):
                raise ValueError("I18N_DETECTION_ORDER JSON must be a list")
            return ",".join(str(name) for name in parsed)
        raise ValueError("I18N_DETECTION_ORDER must be a string or a list")

    @field_validator("detection_order_raw")
    @classmethod
    def validate_detection_order(cls, v: str) -> str:
        """Reject unknown or duplicated detection source names."""
        names = [part.strip().lower() for part in v.split(",") if part.strip()]
        unknown = [name for name in names if name not in DETECTION_SOURCE_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown detection sources {unknown}; "
                f"expected any of {list(DETECTION_SOURCE_NAMES)}"
            )
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicated detection sources in {v!r}")
        return ",".join(names)

    @field_validator("store_path", "translations_dir", mode="before")
    @classmethod
    def empty_as_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not str(v).strip():
            return None
        return v

    @property
    def detection_order(self) -> List[str]:
        """Detection source names in priority order."""
        if not self.detection_order_raw:
            return []
        return self.detection_order_raw.split(",")
