"""Locale value type and the fallback chain used by bundle lookups.

A :class:`Locale` is an immutable ``(language, country, variant)`` triple.
The empty locale, :attr:`Locale.ROOT`, stands for the default table of a
bundle.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import ClassVar

from .errors import InvalidLocaleSpecifier
from .types import LocaleLike

_SEPARATORS = re.compile(r"[_-]")
_LANGUAGE = re.compile(r"^[a-z]{2,8}$")
_COUNTRY = re.compile(r"^(?:[A-Z]{2}|[0-9]{3})$")
_VARIANT = re.compile(r"^[0-9A-Za-z]{1,8}$")


@functools.total_ordering
@dataclass(frozen=True)
class Locale:
    """Identifier of a language/region/variant combination.

    Ordering is by specificity: ``ROOT < fr < en_US < th_TH_TH``. Locales of
    the same specificity are ordered by tag so sorting is total.
    """

    language: str = ""
    country: str = ""
    variant: str = ""

    ROOT: ClassVar[Locale]

    def __post_init__(self):
        for field_name in ("language", "country", "variant"):
            part = getattr(self, field_name)
            if not isinstance(part, str):
                raise InvalidLocaleSpecifier(f"Locale {field_name} must be a string, got {type(part).__name__}")

        language = self.language.lower()
        country = self.country.upper()
        object.__setattr__(self, "language", language)
        object.__setattr__(self, "country", country)

        if country and not language:
            raise InvalidLocaleSpecifier(f"Country '{country}' given without a language")
        if self.variant and not country:
            raise InvalidLocaleSpecifier(f"Variant '{self.variant}' given without a country")
        if language and not _LANGUAGE.match(language):
            raise InvalidLocaleSpecifier(f"Invalid language code: '{self.language}'")
        if country and not _COUNTRY.match(country):
            raise InvalidLocaleSpecifier(f"Invalid country code: '{self.country}'")
        if self.variant and not _VARIANT.match(self.variant):
            raise InvalidLocaleSpecifier(f"Invalid variant code: '{self.variant}'")

    @classmethod
    def parse(cls, tag: str) -> Locale:
        """
        Parse a locale tag such as ``fr``, ``en_US``, ``en-US`` or ``th_TH_TH``.

        Args:
            tag: Locale tag, parts separated by ``_`` or ``-``

        Returns:
            The parsed locale, :attr:`ROOT` for an empty tag

        Raises:
            InvalidLocaleSpecifier: If the tag is malformed
        """
        tag = tag.strip()
        if not tag:
            return cls.ROOT

        parts = _SEPARATORS.split(tag)
        if len(parts) > 3:
            raise InvalidLocaleSpecifier(f"Too many parts in locale tag: '{tag}'")
        if any(not part for part in parts):
            raise InvalidLocaleSpecifier(f"Empty part in locale tag: '{tag}'")
        return cls(*parts)

    @classmethod
    def of(cls, value: LocaleLike) -> Locale:
        """Coerce a locale, tag, tuple or ``None`` (the root locale) into a :class:`Locale`."""
        if value is None:
            return cls.ROOT
        if isinstance(value, Locale):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, tuple):
            if not 1 <= len(value) <= 3:
                raise InvalidLocaleSpecifier(f"Locale tuple must have 1 to 3 parts, got {len(value)}")
            return cls(*value)
        raise InvalidLocaleSpecifier(f"Cannot build a locale from {type(value).__name__}")

    @property
    def specificity(self) -> int:
        """0 for the root locale, 1 with a language, 2 with a country, 3 with a variant."""
        if self.variant:
            return 3
        if self.country:
            return 2
        if self.language:
            return 1
        return 0

    @property
    def is_root(self) -> bool:
        return self.specificity == 0

    @property
    def parent(self) -> Locale | None:
        """The next less specific locale, ``None`` for the root locale."""
        if self.variant:
            return Locale(self.language, self.country)
        if self.country:
            return Locale(self.language)
        if self.language:
            return Locale.ROOT
        return None

    @property
    def tag(self) -> str:
        """Underscore-joined tag, the form used in resource file names."""
        return "_".join(part for part in (self.language, self.country, self.variant) if part)

    def to_language_tag(self) -> str:
        """Hyphen-joined tag (``en-US``)."""
        return "-".join(part for part in (self.language, self.country, self.variant) if part)

    def fallback_chain(self) -> list[Locale]:
        """
        Locales to try for a lookup, most specific first.

        The chain always ends with :attr:`ROOT`:
        ``th_TH_TH -> th_TH -> th -> ROOT``.
        """
        chain: list[Locale] = []
        current: Locale | None = self
        while current is not None:
            chain.append(current)
            current = current.parent
        return chain

    def bundle_name(self, base_name: str) -> str:
        """Name of the resource table for this locale: ``basename[_language[_country[_variant]]]``."""
        return f"{base_name}_{self.tag}" if self.tag else base_name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Locale):
            return NotImplemented
        return (self.specificity, self.tag) < (other.specificity, other.tag)

    def __str__(self) -> str:
        return self.tag

    def __repr__(self) -> str:
        return f"Locale({self.tag!r})"


Locale.ROOT = Locale()

__all__ = ["Locale"]
