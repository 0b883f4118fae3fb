"""Tests for the Locale value type."""

from __future__ import annotations

import pytest

from locale_bundle import InvalidLocaleSpecifier, Locale


class TestLocaleParsing:
    """Test Locale.parse and Locale.of."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("fr", Locale("fr")),
            ("en_US", Locale("en", "US")),
            ("en-US", Locale("en", "US")),
            ("EN_us", Locale("en", "US")),
            ("th_TH_TH", Locale("th", "TH", "TH")),
            ("es_419", Locale("es", "419")),
            ("", Locale.ROOT),
            ("  ", Locale.ROOT),
        ],
    )
    def test_parse_valid_tags(self, tag: str, expected: Locale) -> None:
        assert Locale.parse(tag) == expected

    @pytest.mark.parametrize(
        "tag",
        ["en__US", "en_US_TH_X", "e", "en_USA", "12", "en_US_bad variant", "_US"],
    )
    def test_parse_rejects_malformed_tags(self, tag: str) -> None:
        with pytest.raises(InvalidLocaleSpecifier):
            Locale.parse(tag)

    def test_country_without_language_is_rejected(self) -> None:
        with pytest.raises(InvalidLocaleSpecifier, match="without a language"):
            Locale("", "US")

    def test_variant_without_country_is_rejected(self) -> None:
        with pytest.raises(InvalidLocaleSpecifier, match="without a country"):
            Locale("en", "", "POSIX")

    def test_invalid_locale_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            Locale.of(("", "US"))

    def test_of_accepts_all_forms(self) -> None:
        locale = Locale("en", "US")

        assert Locale.of(locale) is locale
        assert Locale.of("en_US") == locale
        assert Locale.of(("en", "US")) == locale
        assert Locale.of(None) == Locale.ROOT

    def test_of_rejects_bad_tuples_and_types(self) -> None:
        with pytest.raises(InvalidLocaleSpecifier):
            Locale.of(())
        with pytest.raises(InvalidLocaleSpecifier):
            Locale.of(("a", "b", "c", "d"))
        with pytest.raises(InvalidLocaleSpecifier):
            Locale.of(42)  # type: ignore[arg-type]
        with pytest.raises(InvalidLocaleSpecifier, match="must be a string"):
            Locale.of((1,))  # type: ignore[arg-type]
        with pytest.raises(InvalidLocaleSpecifier, match="must be a string"):
            Locale(None)  # type: ignore[arg-type]
        with pytest.raises(InvalidLocaleSpecifier, match="country must be a string"):
            Locale.of(("en", 1))  # type: ignore[arg-type]


class TestLocaleProperties:
    """Test tags, specificity, ordering and the fallback chain."""

    def test_tags(self) -> None:
        locale = Locale("th", "TH", "TH")

        assert locale.tag == "th_TH_TH"
        assert str(locale) == "th_TH_TH"
        assert locale.to_language_tag() == "th-TH-TH"
        assert Locale.ROOT.tag == ""

    def test_bundle_name(self) -> None:
        assert Locale("en", "US").bundle_name("messages") == "messages_en_US"
        assert Locale.ROOT.bundle_name("messages") == "messages"

    def test_specificity(self) -> None:
        assert Locale.ROOT.specificity == 0
        assert Locale("fr").specificity == 1
        assert Locale("en", "US").specificity == 2
        assert Locale("th", "TH", "TH").specificity == 3
        assert Locale.ROOT.is_root

    def test_ordering_by_specificity(self) -> None:
        locales = [Locale("th", "TH", "TH"), Locale.ROOT, Locale("en", "US"), Locale("fr")]

        assert sorted(locales) == [Locale.ROOT, Locale("fr"), Locale("en", "US"), Locale("th", "TH", "TH")]
        assert Locale("de") < Locale("fr")
        assert Locale("fr") <= Locale("fr")

    def test_fallback_chain(self) -> None:
        assert Locale("th", "TH", "TH").fallback_chain() == [
            Locale("th", "TH", "TH"),
            Locale("th", "TH"),
            Locale("th"),
            Locale.ROOT,
        ]
        assert Locale.ROOT.fallback_chain() == [Locale.ROOT]

    def test_locales_are_hashable_and_immutable(self) -> None:
        locale = Locale("en", "US")

        assert {locale: 1}[Locale.parse("en-US")] == 1
        with pytest.raises(AttributeError):
            locale.language = "fr"  # type: ignore[misc]
