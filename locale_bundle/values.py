"""Tagged entry values stored in resource tables.

Every table entry is one of :class:`Text`, :class:`TextList`,
:class:`Choice` or :class:`Opaque`. Raw values coming from dictionaries or
resource files are wrapped with :func:`to_entry`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from .choice import ChoiceFormat
from .types import RawValue


@dataclass(frozen=True)
class Text:
    value: str
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class TextList:
    value: tuple[str, ...]
    kind: Literal["text_list"] = "text_list"


@dataclass(frozen=True)
class Choice:
    value: ChoiceFormat
    kind: Literal["choice"] = "choice"


@dataclass(frozen=True)
class Opaque:
    """Any other value, kept as is."""

    value: Any
    kind: Literal["opaque"] = "opaque"


Entry: TypeAlias = Text | TextList | Choice | Opaque

_ENTRY_TYPES = (Text, TextList, Choice, Opaque)


def to_entry(raw: RawValue) -> Entry:
    """
    Wrap a raw value into its tagged entry.

    Args:
        raw: A string, a list/tuple of strings, a :class:`ChoiceFormat`,
            an existing entry or any other object

    Returns:
        The tagged entry
    """
    if isinstance(raw, _ENTRY_TYPES):
        return raw
    if isinstance(raw, str):
        return Text(raw)
    if isinstance(raw, (list, tuple)) and all(isinstance(item, str) for item in raw):
        return TextList(tuple(raw))
    if isinstance(raw, ChoiceFormat):
        return Choice(raw)
    return Opaque(raw)


__all__ = ["Choice", "Entry", "Opaque", "Text", "TextList", "to_entry"]
