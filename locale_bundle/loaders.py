"""
Load resource tables from files.

Files follow the naming convention ``basename[_language[_country[_variant]]].ext``
where ``ext`` is one of ``properties``, ``json``, ``yaml``, ``yml`` or ``toml``.
"""
import json
import logging
import re
from collections.abc import Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import cast

from locale_bundle.bundle import ResourceBundle, ResourceTable
from locale_bundle.errors import BundleError, InvalidLocaleSpecifier, UnsupportedFormat
from locale_bundle.locale import Locale
from locale_bundle.types import RawTable, RawValue

try:
    import yaml
except ImportError:
    yaml = None

try:
    import tomli
except ImportError:
    tomli = None

SUPPORTED_SUFFIXES = (".properties", ".json", ".yaml", ".yml", ".toml")

_PROPERTY_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_KEY_TERMINATORS = re.compile(r"(?<!\\)(?:\\\\)*[=:\s]")


def _unescape(text: str) -> str:
    result: list[str] = []
    chars = iter(range(len(text)))
    for index in chars:
        char = text[index]
        if char != "\\" or index + 1 == len(text):
            result.append(char)
            continue

        escaped = text[index + 1]
        next(chars)
        if escaped == "u":
            code = text[index + 2:index + 6]
            if len(code) != 4:
                raise ValueError(f"Malformed \\uXXXX escape: '\\u{code}'")
            result.append(chr(int(code, 16)))
            for _ in range(4):
                next(chars)
        else:
            result.append(_PROPERTY_ESCAPES.get(escaped, escaped))
    return "".join(result)


def _logical_lines(text: str) -> Iterator[str]:
    """Join backslash-continued lines and drop comments and blank lines."""
    pending: str | None = None
    for raw_line in text.splitlines():
        line = raw_line.lstrip()
        if pending is None:
            if not line or line[0] in "#!":
                continue
        else:
            line = pending + line

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = line[:-1]
            continue

        pending = None
        yield line

    if pending is not None:
        yield pending


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse Java ``.properties`` content.

    Keys end at the first unescaped ``=``, ``:`` or whitespace; comments start
    with ``#`` or ``!``; a trailing backslash continues the line.

    Args:
        text: Content of the file

    Returns:
        Mapping of key to value
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        match = _KEY_TERMINATORS.search(line)
        if match is None:
            key, value = line, ""
        else:
            key = line[:match.end() - 1]
            value = line[match.end():].lstrip()
            if match.group()[-1].isspace() and value[:1] in ("=", ":"):
                value = value[1:].lstrip()
        properties[_unescape(key)] = _unescape(value)
    return properties


def flatten(data: Mapping[str, RawValue], prefix: str = "") -> RawTable:
    """Flatten nested mappings into dotted keys: ``{"a": {"b": "x"}} -> {"a.b": "x"}``."""
    flat: RawTable = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


def load_table(file_path: str | Path, *, encoding: str = "utf-8") -> RawTable:
    """
    Load a flat key/value table from a file.

    Args:
        file_path: Path to a ``.properties``, JSON, YAML or TOML file
        encoding: Text encoding of the file

    Returns:
        The flattened table

    Raises:
        FileNotFoundError: If the file does not exist
        UnsupportedFormat: If the suffix has no loader
        ImportError: If the optional parser for the format is missing
        BundleError: If the document is not a mapping
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Resource file not found: {file_path}")

    suffix = path.suffix.lower()

    if suffix == ".properties":
        data: object = parse_properties(path.read_text(encoding=encoding))
    elif suffix == ".json":
        with open(path, "r", encoding=encoding) as f:
            data = json.load(f)
    elif suffix in [".yaml", ".yml"]:
        if yaml is None:
            raise ImportError("PyYAML is required for YAML support. Install with: pip install pyyaml")
        with open(path, "r", encoding=encoding) as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
    elif suffix == ".toml":
        if tomli is None:
            raise ImportError("tomli is required for TOML support. Install with: pip install tomli")
        with open(path, "rb") as f:
            data = tomli.load(f)
    else:
        raise UnsupportedFormat(
            f"Unsupported file format: {suffix}. Supported formats: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    if not isinstance(data, Mapping):
        raise BundleError(f"Resource file {path} must contain a mapping, got {type(data).__name__}")

    logging.debug("Loaded resource file %s", path)
    return flatten(cast(Mapping[str, RawValue], data))


def parse_bundle_name(stem: str, base_name: str) -> Locale | None:
    """
    Locale encoded in a file stem, ``None`` when the stem belongs to another bundle.

    ``parse_bundle_name("messages_en_US", "messages") == Locale("en", "US")``
    """
    if stem == base_name:
        return Locale.ROOT
    if not stem.startswith(base_name + "_"):
        return None

    try:
        locale = Locale.parse(stem[len(base_name) + 1:].replace("-", "_"))
    except InvalidLocaleSpecifier:
        return None
    # ISO 639 codes only, so "messages_errors" stays a bundle of its own
    if len(locale.language) > 3:
        return None
    return locale


def discover(directory: str | Path, base_name: str) -> dict[Locale, Path]:
    """
    Find the resource files of ``base_name`` in ``directory``.

    Raises:
        NotADirectoryError: If ``directory`` is not a directory
        BundleError: If two files map to the same locale
    """
    root = Path(directory)
    if not root.is_dir():
        raise NotADirectoryError(f"Resource directory not found: {directory}")

    found: dict[Locale, Path] = {}
    for path in sorted(root.iterdir()):
        if not path.is_file() or path.suffix.lower() not in SUPPORTED_SUFFIXES:
            continue

        locale = parse_bundle_name(path.stem, base_name)
        if locale is None:
            continue
        if locale in found:
            raise BundleError(f"Both {found[locale].name} and {path.name} define bundle '{base_name}' for locale '{locale}'")
        found[locale] = path

    return found


def load_bundle(
        directory: str | Path,
        base_name: str,
        *,
        max_workers: int | None = None,
        encoding: str = "utf-8",
) -> ResourceBundle:
    """
    Load every table of ``base_name`` from ``directory`` into a bundle.

    Files are read concurrently; the bundle is built once all of them loaded.

    Args:
        directory: Directory holding the resource files
        base_name: Base name of the bundle
        max_workers: Optional maximum number of worker threads
        encoding: Text encoding of the files

    Returns:
        The immutable bundle
    """
    files = discover(directory, base_name)

    tables: list[ResourceTable] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(load_table, path, encoding=encoding): locale for locale, path in files.items()}
        for fut in as_completed(futures):
            tables.append(ResourceTable(base_name, futures[fut], fut.result()))

    logging.debug("Loaded bundle '%s' with %d tables from %s", base_name, len(tables), directory)
    return ResourceBundle(base_name, tables)


__all__ = [
    "SUPPORTED_SUFFIXES",
    "discover",
    "flatten",
    "load_bundle",
    "load_table",
    "parse_bundle_name",
    "parse_properties",
]
