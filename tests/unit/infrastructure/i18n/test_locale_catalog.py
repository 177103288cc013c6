"""Unit tests for LocaleCatalog."""

import pytest

from onboard.domain.services.locale_resolver import LocaleTag
from onboard.infrastructure.i18n.locale_catalog import LANGUAGES, Language, LocaleCatalog


@pytest.fixture
def catalog() -> LocaleCatalog:
    return LocaleCatalog()


def test_language_ids_are_unique():
    ids = [language.id for language in LANGUAGES]

    assert len(ids) == len(set(ids))


def test_language_tag():
    assert Language(6, "pt", "Português Brasil", "BR").tag == "pt-BR"
    assert Language(1, "en", "English").tag == "en"


def test_known_language(catalog):
    assert catalog.is_known_language(3)
    assert not catalog.is_known_language(0)


def test_language_code(catalog):
    assert catalog.language_code(2) == "de"
    assert catalog.language_code(None) == "en"
    assert catalog.language_code(999, default="fr") == "fr"


class TestResolveLanguageId:
    """Tests for language matching order."""

    def test_exact_region_match(self, catalog):
        assert catalog.resolve_language_id(LocaleTag("zh", None, "TW"), 1) == 11

    def test_regionless_entry_preferred(self, catalog):
        """Test that pt-PT maps to the generic Portuguese entry."""
        assert catalog.resolve_language_id(LocaleTag("pt", None, "PT"), 1) == 5

    def test_any_entry_of_language(self, catalog):
        assert catalog.resolve_language_id(LocaleTag("zh"), 1) == 10

    def test_unknown_language(self, catalog):
        assert catalog.resolve_language_id(LocaleTag("xx"), 7) == 7

    def test_custom_language_list(self):
        catalog = LocaleCatalog(languages=(Language(100, "eo", "Esperanto"),))

        assert catalog.resolve_language_id(LocaleTag("eo"), 1) == 100
        assert not catalog.is_known_language(1)


class TestResolveTimezoneId:
    """Tests for timezone resolution."""

    def test_canonical_name(self, catalog):
        assert catalog.resolve_timezone_id("Asia/Tokyo", "UTC") == "Asia/Tokyo"

    def test_case_insensitive(self, catalog):
        assert catalog.resolve_timezone_id("  asia/tokyo ", "UTC") == "Asia/Tokyo"

    def test_unknown_uses_default(self, catalog):
        assert catalog.resolve_timezone_id("Nowhere", "Europe/Berlin") == "Europe/Berlin"
