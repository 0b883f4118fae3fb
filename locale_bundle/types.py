"""Type definitions for :mod:`locale_bundle`."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from .locale import Locale

RawValue: TypeAlias = Any
RawTable: TypeAlias = dict[str, RawValue]

LocaleLike: TypeAlias = "Locale | str | tuple[str, ...] | None"

FormatValue: TypeAlias = bool | float | int | str
FormatArgs: TypeAlias = tuple[FormatValue, ...]
FormatParam: TypeAlias = Mapping[str, FormatValue]

CacheKeyType: TypeAlias = tuple[
    str, str, tuple[tuple[type, FormatValue], ...], tuple[tuple[str, type, FormatValue], ...] | None
]
CacheDict: TypeAlias = dict[CacheKeyType, str]

__all__ = [
    "CacheDict",
    "CacheKeyType",
    "FormatArgs",
    "FormatParam",
    "FormatValue",
    "LocaleLike",
    "RawTable",
    "RawValue",
]
