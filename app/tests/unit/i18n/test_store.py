"""Tests for fitcoach.i18n.store module."""

import json
from abc import ABC
from unittest.mock import patch

import pytest

from fitcoach.i18n import (
    InMemoryLocaleStore,
    JSONFileLocaleStore,
    LocaleStore,
    LocaleStoreError,
)

pytestmark = pytest.mark.unit


class TestLocaleStoreInterface:
    def test_store_is_abstract_base_class(self):
        assert issubclass(LocaleStore, ABC)

    def test_store_cannot_be_instantiated_directly(self):
        with pytest.raises(TypeError):
            LocaleStore()


class TestInMemoryLocaleStore:
    def test_get_absent_returns_none(self):
        assert InMemoryLocaleStore().get("app.locale") is None

    def test_set_then_get(self):
        store = InMemoryLocaleStore()
        store.set("app.locale", "es")
        assert store.get("app.locale") == "es"

    def test_initial_values_are_copied(self):
        initial = {"app.locale": "fr"}
        store = InMemoryLocaleStore(initial)
        store.set("app.locale", "pt")
        assert initial == {"app.locale": "fr"}

    def test_clear(self):
        store = InMemoryLocaleStore({"app.locale": "fr"})
        store.clear()
        assert store.get("app.locale") is None


class TestJSONFileLocaleStore:
    def test_get_when_file_missing(self, tmp_path):
        assert JSONFileLocaleStore(tmp_path / "prefs.json").get("app.locale") is None

    def test_set_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        JSONFileLocaleStore(path).set("app.locale", "pt")

        assert JSONFileLocaleStore(path).get("app.locale") == "pt"
        assert json.loads(path.read_text(encoding="utf-8")) == {"app.locale": "pt"}

    def test_set_keeps_other_keys(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        JSONFileLocaleStore(path).set("app.locale", "fr")
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "theme": "dark",
            "app.locale": "fr",
        }

    def test_get_non_string_value_returns_none(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"app.locale": 3}), encoding="utf-8")
        assert JSONFileLocaleStore(path).get("app.locale") is None

    def test_corrupt_file_read_raises(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LocaleStoreError):
            JSONFileLocaleStore(path).get("app.locale")

    def test_set_replaces_corrupt_file(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]", encoding="utf-8")
        store = JSONFileLocaleStore(path)
        store.set("app.locale", "es")
        assert store.get("app.locale") == "es"

    def test_write_failure_raises_store_error(self, tmp_path):
        store = JSONFileLocaleStore(tmp_path / "prefs.json")
        with patch("fitcoach.i18n.store.os.replace", side_effect=OSError("read-only")):
            with pytest.raises(LocaleStoreError):
                store.set("app.locale", "es")
        assert list(tmp_path.iterdir()) == []
