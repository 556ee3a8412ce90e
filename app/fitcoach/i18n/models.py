"""Translation models for the i18n system.

Defines the locale identifiers, translation keys and the resource tree that
backs each locale's catalog.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from fitcoach.i18n.exceptions import CatalogFormatError, UnsupportedLocaleError

KEY_SEPARATOR = "."


class Locale(str, Enum):
    """Supported locale identifiers.

    Uses primary IETF BCP 47 language subtags. ``EN`` is the locale
    guaranteed to hold every key.
    """

    EN = "en"
    ES = "es"
    FR = "fr"
    PT = "pt"

    @classmethod
    def from_string(cls, locale_str: str) -> "Locale":
        """Convert string to Locale enum.

        Matching is case-insensitive and treats ``_`` as ``-``.

        Args:
            locale_str: Locale string (e.g., "en", "PT").

        Returns:
            Matching Locale enum value.

        Raises:
            UnsupportedLocaleError: If locale string is not supported.
        """
        if isinstance(locale_str, cls):
            return locale_str
        normalized = str(locale_str or "").strip().replace("_", "-").lower()
        for locale in cls:
            if locale.value == normalized:
                return locale
        raise UnsupportedLocaleError(locale_str, [locale.value for locale in cls])

    @property
    def language(self) -> str:
        """Get language part of locale (e.g., "pt" from "pt-BR").

        Returns:
            Language code.
        """
        return self.value.split("-")[0]

    @property
    def native_name(self) -> str:
        """Name of the language in that language, for language selectors."""
        return _NATIVE_NAMES[self]


_NATIVE_NAMES = {
    Locale.EN: "English",
    Locale.ES: "Español",
    Locale.FR: "Français",
    Locale.PT: "Português",
}


@dataclass(frozen=True)
class TranslationKey:
    """Dotted path into a resource tree (e.g., "exercises.categories.strength").

    Frozen to ensure immutability and hashability.

    Attributes:
        segments: Path segments, at least one, none empty.
    """

    segments: Tuple[str, ...]

    def __post_init__(self):
        if not self.segments or any(not segment for segment in self.segments):
            raise ValueError(f"Invalid translation key: {str(self)!r}")

    def __str__(self) -> str:
        return KEY_SEPARATOR.join(self.segments)

    @property
    def namespace(self) -> str:
        """Top-level segment (e.g., "nav" for "nav.dashboard")."""
        return self.segments[0]

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Create TranslationKey from dot-separated string.

        Args:
            key_string: Dot-separated key (e.g., "dashboard.welcome").

        Returns:
            TranslationKey instance.

        Raises:
            ValueError: If the key is empty or has empty segments.
        """
        if not isinstance(key_string, str):
            raise ValueError(f"Translation key must be a string: {key_string!r}")
        return cls(tuple(key_string.split(KEY_SEPARATOR)))


@dataclass(frozen=True)
class ResourceLeaf:
    """Resource tree node holding a translated string."""

    value: str


@dataclass(frozen=True)
class ResourceBranch:
    """Resource tree node holding named child nodes."""

    children: Mapping[str, "ResourceNode"] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def child(self, name: str) -> Optional["ResourceNode"]:
        return self.children.get(name)


ResourceNode = Union[ResourceLeaf, ResourceBranch]


def _insert(
    target: Dict[str, Any], segments: List[str], value: Any, path: str
) -> None:
    """Insert value at segments inside a mutable nested dict, expanding dotted keys."""
    node = target
    for depth, segment in enumerate(segments[:-1]):
        existing = node.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise CatalogFormatError(
                "Key is both a message and a group",
                KEY_SEPARATOR.join(segments[: depth + 1]),
            )
        node = existing

    last = segments[-1]
    if isinstance(value, Mapping):
        existing = node.setdefault(last, {})
        if not isinstance(existing, dict):
            raise CatalogFormatError("Key is both a message and a group", path)
        for child_key, child_value in value.items():
            child_path = f"{path}{KEY_SEPARATOR}{child_key}"
            _insert(existing, _split_key(child_key, child_path), child_value, child_path)
    elif isinstance(value, str):
        if last in node:
            raise CatalogFormatError("Duplicate or conflicting message", path)
        node[last] = value
    else:
        raise CatalogFormatError(
            f"Expected a string or mapping, got {type(value).__name__}", path
        )


def _split_key(key: Any, path: str) -> List[str]:
    if not isinstance(key, str):
        raise CatalogFormatError(f"Keys must be strings, got {key!r}", path)
    segments = key.split(KEY_SEPARATOR)
    if any(not segment for segment in segments):
        raise CatalogFormatError("Empty key segment", path)
    return segments


def _freeze(data: Dict[str, Any]) -> ResourceBranch:
    children: Dict[str, ResourceNode] = {}
    for name, value in data.items():
        if isinstance(value, dict):
            children[name] = _freeze(value)
        else:
            children[name] = ResourceLeaf(value)
    return ResourceBranch(MappingProxyType(children))


def build_resource_tree(data: Mapping[str, Any]) -> ResourceBranch:
    """Build an immutable resource tree from plain nested data.

    Flat dotted keys (``"nav.dashboard": "Dashboard"``) and nested mappings
    (``"exercises.categories": {"strength": "Strength"}``) can be mixed; both
    end up as branches so a dotted path reaches at most one leaf.

    Args:
        data: Mapping of keys to strings or nested mappings.

    Returns:
        Root ResourceBranch.

    Raises:
        CatalogFormatError: If a path is both a message and a group, a path is
            defined twice, or a value is neither a string nor a mapping.
    """
    if not isinstance(data, Mapping):
        raise CatalogFormatError(
            f"Expected a mapping at the root, got {type(data).__name__}"
        )
    mutable: Dict[str, Any] = {}
    for key, value in data.items():
        path = str(key)
        _insert(mutable, _split_key(key, path), value, path)
    return _freeze(mutable)


def _iter_leaves(
    branch: ResourceBranch, prefix: Tuple[str, ...] = ()
) -> Iterator[Tuple[Tuple[str, ...], str]]:
    for name, node in branch.children.items():
        path = prefix + (name,)
        if isinstance(node, ResourceLeaf):
            yield path, node.value
        else:
            yield from _iter_leaves(node, path)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class TranslationCatalog:
    """Read-only translations for a single locale.

    Attributes:
        locale: The Locale this catalog is for.
        root: Root of the resource tree.
        loaded_at: Timestamp (ISO 8601) when translations were loaded.
    """

    locale: Locale
    root: ResourceBranch = field(default_factory=ResourceBranch)
    loaded_at: str = field(default_factory=_utc_now)

    @classmethod
    def from_dict(cls, locale: Locale, data: Mapping[str, Any]) -> "TranslationCatalog":
        """Build a catalog from plain nested data (see build_resource_tree)."""
        return cls(locale=locale, root=build_resource_tree(data))

    def get_node(self, key: TranslationKey) -> Optional[ResourceNode]:
        node: ResourceNode = self.root
        for segment in key.segments:
            if not isinstance(node, ResourceBranch):
                return None
            child = node.child(segment)
            if child is None:
                return None
            node = child
        return node

    def get_message(self, key: TranslationKey) -> Optional[str]:
        """Retrieve a translation message by key.

        Args:
            key: TranslationKey to resolve.

        Returns:
            Translated message string, or None if the path is absent or
            names a group rather than a message.
        """
        node = self.get_node(key)
        if isinstance(node, ResourceLeaf):
            return node.value
        return None

    def has_message(self, key: TranslationKey) -> bool:
        return self.get_message(key) is not None

    def keys(self) -> List[str]:
        """All message keys in the catalog as sorted dotted strings."""
        return sorted(KEY_SEPARATOR.join(path) for path, _ in _iter_leaves(self.root))

    def to_dict(self) -> Dict[str, str]:
        """Flat mapping of dotted key to message."""
        return {KEY_SEPARATOR.join(path): value for path, value in _iter_leaves(self.root)}

    def merged_with(self, other: "TranslationCatalog") -> "TranslationCatalog":
        """Return a new catalog with other's messages layered over this one.

        Later entries override earlier ones.

        Raises:
            CatalogFormatError: If a key is a message in one catalog and a
                group in the other.
        """
        combined = self.to_dict()
        for key, value in other.to_dict().items():
            combined.pop(key, None)
            combined[key] = value
        return TranslationCatalog(
            locale=self.locale,
            root=build_resource_tree(combined),
            loaded_at=_utc_now(),
        )
