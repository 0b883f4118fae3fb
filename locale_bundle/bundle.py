"""
Resource bundles and locale resolution.

A :class:`ResourceBundle` is the read-only set of :class:`ResourceTable`
objects sharing one base name. Lookups walk the fallback chain of the
requested locale (``language_country_variant -> language_country ->
language -> default``) and return the first table holding the key.
"""
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from locale_bundle.choice import ChoiceFormat
from locale_bundle.errors import BundleError, ResourceNotFound
from locale_bundle.locale import Locale
from locale_bundle.types import LocaleLike, RawValue
from locale_bundle.values import Choice, Entry, Opaque, Text, TextList, to_entry


class ResourceTable(Mapping[str, Entry]):
    """
    A flat, read-only mapping of keys to entries for one ``(base name, locale)``.

    Args:
        base_name: Base name of the bundle the table belongs to
        locale: Locale of the table, :attr:`Locale.ROOT` for the default table
        entries: Raw or tagged values by key
    """

    __slots__ = ("_base_name", "_locale", "_entries")

    def __init__(self, base_name: str, locale: LocaleLike, entries: Mapping[str, RawValue]):
        if not base_name:
            raise ValueError("base_name must be a non-empty string")

        self._base_name: str = base_name
        self._locale: Locale = Locale.of(locale)
        self._entries: Mapping[str, Entry] = MappingProxyType(
            {str(key): to_entry(value) for key, value in entries.items()}
        )

    @property
    def base_name(self) -> str:
        return self._base_name

    @property
    def locale(self) -> Locale:
        return self._locale

    @property
    def name(self) -> str:
        """File-style name of the table, e.g. ``messages_en_US``."""
        return self._locale.bundle_name(self._base_name)

    def __getitem__(self, key: str) -> Entry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResourceTable({self.name!r}, {len(self)} entries)"


@dataclass(frozen=True)
class Resolution:
    """Result of a lookup: the entry plus where it was found."""

    key: str
    base_name: str
    entry: Entry
    requested: Locale
    matched: Locale

    @property
    def value(self) -> Any:
        """The untagged value of the entry."""
        return self.entry.value

    @property
    def fallback(self) -> bool:
        """``True`` when the table that answered is less specific than the requested locale."""
        return self.matched != self.requested

    @property
    def exact(self) -> bool:
        return not self.fallback


class ResourceBundle:
    """
    All tables sharing one base name, indexed by locale.

    Exactly one table must have the root locale; it is the fallback of last
    resort. The bundle has no mutation operations.

    Args:
        base_name: Shared identifier of the tables
        tables: The tables; each must carry ``base_name``
    """

    __slots__ = ("_base_name", "_tables")

    def __init__(self, base_name: str, tables: Iterable[ResourceTable]):
        if not base_name:
            raise ValueError("base_name must be a non-empty string")

        by_locale: dict[Locale, ResourceTable] = {}
        for table in tables:
            if table.base_name != base_name:
                raise BundleError(
                    f"Table '{table.name}' does not belong to bundle '{base_name}'"
                )
            if table.locale in by_locale:
                raise BundleError(
                    f"Bundle '{base_name}' has more than one table for locale '{table.locale}'"
                )
            by_locale[table.locale] = table

        if Locale.ROOT not in by_locale:
            raise BundleError(f"Bundle '{base_name}' has no default table")

        self._base_name: str = base_name
        self._tables: Mapping[Locale, ResourceTable] = MappingProxyType(by_locale)

    @classmethod
    def from_dict(cls, base_name: str, tables: Mapping[LocaleLike, Mapping[str, RawValue]]) -> "ResourceBundle":
        """
        Build a bundle from plain dictionaries keyed by locale.

        ``None``, ``""`` and :attr:`Locale.ROOT` all name the default table::

            ResourceBundle.from_dict("messages", {
                "": {"hello": "Hello"},
                "fr": {"hello": "Bonjour"},
            })
        """
        return cls(base_name, (ResourceTable(base_name, locale, entries) for locale, entries in tables.items()))

    @property
    def base_name(self) -> str:
        return self._base_name

    @property
    def locales(self) -> list[Locale]:
        """Locales with a table, most specific first."""
        return sorted(self._tables, reverse=True)

    @property
    def default_table(self) -> ResourceTable:
        return self._tables[Locale.ROOT]

    def table(self, locale: LocaleLike) -> ResourceTable | None:
        """The table for exactly ``locale``, without fallback."""
        return self._tables.get(Locale.of(locale))

    def candidate_locales(self, locale: LocaleLike) -> list[Locale]:
        """The fallback chain of ``locale`` restricted to locales that have a table."""
        return [candidate for candidate in Locale.of(locale).fallback_chain() if candidate in self._tables]

    def resolve(self, key: str, locale: LocaleLike = None) -> Resolution:
        """
        Find ``key`` along the fallback chain of ``locale``.

        Args:
            key: Lookup key
            locale: Requested locale; ``None`` asks the default table only

        Returns:
            Resolution holding the entry and the locale of the table it came from

        Raises:
            ResourceNotFound: If no table of the chain holds the key
            InvalidLocaleSpecifier: If ``locale`` is malformed
        """
        requested = Locale.of(locale)

        for candidate in self.candidate_locales(requested):
            entries = self._tables[candidate]
            if key in entries:
                if candidate != requested:
                    logging.debug(
                        "Key '%s' of bundle '%s' resolved from '%s' for requested locale '%s'",
                        key, self._base_name, candidate.bundle_name(self._base_name), requested,
                    )
                return Resolution(key, self._base_name, entries[key], requested, candidate)

        raise ResourceNotFound(key, self._base_name, requested)

    def get(self, key: str, locale: LocaleLike = None) -> Any:
        """The untagged value for ``key``; see :meth:`resolve`."""
        return self.resolve(key, locale).value

    def get_string(self, key: str, locale: LocaleLike = None) -> str:
        return self._typed(key, locale, Text)

    def get_string_array(self, key: str, locale: LocaleLike = None) -> tuple[str, ...]:
        return self._typed(key, locale, TextList)

    def get_choice(self, key: str, locale: LocaleLike = None) -> ChoiceFormat:
        return self._typed(key, locale, Choice)

    def get_object(self, key: str, locale: LocaleLike = None) -> Any:
        """The value of any entry kind, same as :meth:`get`."""
        return self.get(key, locale)

    def choose(self, key: str, quantity: float, locale: LocaleLike = None) -> str:
        """
        Select the form of a choice entry for ``quantity``.

        Text entries holding a choice pattern (``"0#apples|1#apple|1<apples"``)
        are accepted as well, which is how they arrive from resource files.

        Raises:
            ResourceNotFound: If the key is missing
            NegativeQuantity: If ``quantity`` is negative
            TypeError: If the entry is neither a choice nor a text
        """
        entry = self.resolve(key, locale).entry
        if isinstance(entry, Choice):
            return entry.value.select(quantity)
        if isinstance(entry, Text):
            return ChoiceFormat.from_pattern(entry.value).select(quantity)
        raise TypeError(f"Entry '{key}' of bundle '{self._base_name}' is a {entry.kind}, not a choice")

    def contains(self, key: str, locale: LocaleLike = None) -> bool:
        """Whether :meth:`resolve` would find ``key`` for ``locale``."""
        return any(key in self._tables[candidate] for candidate in self.candidate_locales(locale))

    def keys(self, locale: LocaleLike = None) -> set[str]:
        """All keys visible from ``locale``, including inherited ones."""
        visible: set[str] = set()
        for candidate in self.candidate_locales(locale):
            visible.update(self._tables[candidate])
        return visible

    def _typed(self, key: str, locale: LocaleLike, kind: type[Text | TextList | Choice | Opaque]) -> Any:
        entry = self.resolve(key, locale).entry
        if not isinstance(entry, kind):
            raise TypeError(
                f"Entry '{key}' of bundle '{self._base_name}' is a {entry.kind}, not a {kind.__name__}"
            )
        return entry.value

    def __repr__(self) -> str:
        tags = ", ".join(locale.tag or "<default>" for locale in self.locales)
        return f"ResourceBundle({self._base_name!r}, [{tags}])"


__all__ = ["Resolution", "ResourceBundle", "ResourceTable"]
