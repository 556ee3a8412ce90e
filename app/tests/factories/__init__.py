"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_resources,
    make_translation_catalog,
    make_translator,
)

__all__ = [
    "make_resources",
    "make_translation_catalog",
    "make_translator",
]
