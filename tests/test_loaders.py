"""Tests for file-backed resource tables."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from locale_bundle import BundleError, Locale, UnsupportedFormat, load_bundle, load_table
from locale_bundle.loaders import discover, flatten, parse_bundle_name, parse_properties


class TestParseProperties:
    """Test the .properties parser."""

    def test_separators(self) -> None:
        text = "a=1\nb:2\nc 3\nd = 4\ne : 5\nf\n"

        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4", "e": "5", "f": ""}

    def test_comments_and_blank_lines(self) -> None:
        text = "# comment\n! also a comment\n\n   \nkey=value\n"

        assert parse_properties(text) == {"key": "value"}

    def test_line_continuation(self) -> None:
        text = "fruits = apple, banana, \\\n         pear\nnext=1\n"

        assert parse_properties(text) == {"fruits": "apple, banana, pear", "next": "1"}

    def test_escapes(self) -> None:
        text = "greeting=Bonjour \\u00e0 tous\\n\nkey\\=with\\:separators=value\ntab=a\\tb\n"

        assert parse_properties(text) == {
            "greeting": "Bonjour à tous\n",
            "key=with:separators": "value",
            "tab": "a\tb",
        }

    def test_value_keeps_later_separators(self) -> None:
        assert parse_properties("url=http://example.com/a=b") == {"url": "http://example.com/a=b"}

    def test_choice_pattern_survives(self) -> None:
        assert parse_properties("apples=0#apples|1#apple|1<apples") == {"apples": "0#apples|1#apple|1<apples"}


class TestLoadTable:
    """Test load_table for each supported format."""

    def test_properties(self, tmp_path: Path) -> None:
        path = tmp_path / "messages.properties"
        path.write_text("hello=Hello\n", encoding="utf-8")

        assert load_table(path) == {"hello": "Hello"}

    def test_json_is_flattened(self, tmp_path: Path) -> None:
        path = tmp_path / "messages.json"
        path.write_text(json.dumps({"menu": {"file": "File", "edit": "Edit"}, "days": ["Mon", "Tue"]}), encoding="utf-8")

        assert load_table(path) == {"menu.file": "File", "menu.edit": "Edit", "days": ["Mon", "Tue"]}

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "messages.yaml"
        path.write_text("hello: Hola\nnested:\n  key: valor\n", encoding="utf-8")

        assert load_table(path) == {"hello": "Hola", "nested.key": "valor"}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "messages.yml"
        path.write_text("", encoding="utf-8")

        assert load_table(path) == {}

    def test_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "messages.toml"
        path.write_text('hello = "Hallo"\n[menu]\nfile = "Datei"\n', encoding="utf-8")

        assert load_table(path) == {"hello": "Hallo", "menu.file": "Datei"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_table(tmp_path / "nope.json")

    def test_unsupported_format(self, tmp_path: Path) -> None:
        path = tmp_path / "messages.ini"
        path.write_text("[x]\n", encoding="utf-8")

        with pytest.raises(UnsupportedFormat, match=".ini"):
            load_table(path)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "messages.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(BundleError, match="mapping"):
            load_table(path)


class TestDiscovery:
    """Test the naming convention and discovery."""

    @pytest.mark.parametrize(
        ("stem", "expected"),
        [
            ("messages", Locale.ROOT),
            ("messages_fr", Locale("fr")),
            ("messages_en_US", Locale("en", "US")),
            ("messages_en-US", Locale("en", "US")),
            ("messages_th_TH_TH", Locale("th", "TH", "TH")),
            ("messages_errors", None),
            ("messages_en_USA", None),
            ("labels_fr", None),
            ("messagesfr", None),
        ],
    )
    def test_parse_bundle_name(self, stem: str, expected: Locale | None) -> None:
        assert parse_bundle_name(stem, "messages") == expected

    def test_discover(self, tmp_path: Path) -> None:
        for name in ("messages.properties", "messages_fr.json", "messages_en_US.yaml", "labels.properties", "notes.txt"):
            (tmp_path / name).write_text("", encoding="utf-8")

        assert discover(tmp_path, "messages") == {
            Locale.ROOT: tmp_path / "messages.properties",
            Locale("fr"): tmp_path / "messages_fr.json",
            Locale("en", "US"): tmp_path / "messages_en_US.yaml",
        }

    def test_discover_rejects_duplicate_locale(self, tmp_path: Path) -> None:
        (tmp_path / "messages_fr.json").write_text("{}", encoding="utf-8")
        (tmp_path / "messages_fr.properties").write_text("", encoding="utf-8")

        with pytest.raises(BundleError, match="locale 'fr'"):
            discover(tmp_path, "messages")

    def test_discover_requires_directory(self, tmp_path: Path) -> None:
        with pytest.raises(NotADirectoryError):
            discover(tmp_path / "missing", "messages")


class TestLoadBundle:
    """Test load_bundle end to end."""

    def test_load_bundle(self, tmp_path: Path) -> None:
        (tmp_path / "messages.properties").write_text("hello=Hello\nbye=Goodbye\n", encoding="utf-8")
        (tmp_path / "messages_fr.properties").write_text("hello=Bonjour\n", encoding="utf-8")
        (tmp_path / "messages_fr_CA.json").write_text('{"bye": "Bonsoir"}', encoding="utf-8")

        bundle = load_bundle(tmp_path, "messages", max_workers=2)

        assert bundle.locales == [Locale("fr", "CA"), Locale("fr"), Locale.ROOT]
        assert bundle.get("hello", "fr_CA") == "Bonjour"
        assert bundle.get("bye", "fr_CA") == "Bonsoir"
        assert bundle.resolve("hello", "de").fallback

    def test_load_bundle_without_default_table(self, tmp_path: Path) -> None:
        (tmp_path / "messages_fr.properties").write_text("hello=Bonjour\n", encoding="utf-8")

        with pytest.raises(BundleError, match="no default table"):
            load_bundle(tmp_path, "messages")


def test_flatten() -> None:
    assert flatten({"a": {"b": {"c": "x"}}, "d": "y"}) == {"a.b.c": "x", "d": "y"}
