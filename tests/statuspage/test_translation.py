"""Tests for translation catalogs and locale negotiation."""
import pytest

from services.statuspage.app.core.lang import CATALOGS
from services.statuspage.app.core.translation import (
    Translator,
    catalog_language,
    negotiate_request_locale,
    preferred_locales,
)


class TestTranslator:
    def test_english_status_labels(self):
        t = Translator("en")

        assert [t.trans(f"incidents.status.{n}") for n in range(5)] == [
            "Scheduled",
            "Investigating",
            "Identified",
            "Watching",
            "Fixed",
        ]

    def test_regional_locale_uses_language_catalog(self):
        assert Translator("nl_BE").trans("incidents.status.4") == "Opgelost"

    def test_unknown_locale_falls_back_to_english(self):
        assert Translator("sw").trans("incidents.status.1") == "Investigating"

    def test_missing_key_returns_key(self):
        assert Translator("fr").trans("incidents.status.42") == "incidents.status.42"

    def test_callable(self):
        assert Translator("de")("incidents.updates") == "Aktualisierungen"

    def test_every_catalog_has_the_english_keys(self):
        for language, catalog in CATALOGS.items():
            assert set(catalog) == set(CATALOGS["en"]), language


class TestCatalogLanguage:
    @pytest.mark.parametrize(
        "locale,expected",
        [("fr-FR", "fr"), ("de_AT", "de"), ("nl", "nl"), ("", "en"), (None, "en"), ("not a locale", "en")],
    )
    def test_catalog_language(self, locale, expected):
        assert catalog_language(locale) == expected


class TestNegotiation:
    def test_preferred_locales_ordered_by_quality(self):
        assert preferred_locales("en;q=0.5, fr-CA, de;q=0.8") == ["fr_CA", "de", "en"]

    def test_preferred_locales_skips_wildcard_and_zero_quality(self):
        assert preferred_locales("*, nl;q=0, de") == ["de"]

    def test_negotiates_language_of_regional_tag(self):
        assert negotiate_request_locale("fr-FR,fr;q=0.9,en;q=0.8") == "fr"

    def test_unsupported_languages_use_default(self):
        assert negotiate_request_locale("ja-JP, zh;q=0.8", default="de") == "de"

    def test_missing_header_uses_default(self):
        assert negotiate_request_locale(None) == "en"
