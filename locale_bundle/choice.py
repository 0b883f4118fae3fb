"""Choice formats: pick a display form from ascending numeric intervals.

A choice format is a pair of parallel sequences, ``limits`` and ``formats``.
Format ``i`` covers the half-open interval ``[limits[i], limits[i + 1])``;
the last interval is unbounded above. The classic plural table reads::

    ChoiceFormat((0, 1, 2), ("apples", "apple", "apples"))

or, in pattern syntax, ``"0#apples|1#apple|1<apples"``.
"""

from __future__ import annotations

import functools
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import NegativeQuantity

_SEGMENT = re.compile(r"^\s*(?P<limit>[^#<≤]+?)\s*(?P<relation>[#<≤])(?P<text>.*)$", re.DOTALL)


def _parse_limit(text: str) -> float:
    if text in ("∞", "+∞", "inf", "+inf"):
        return math.inf
    if text in ("-∞", "-inf"):
        return -math.inf
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"Invalid choice limit: '{text}'") from None


def _format_limit(limit: float) -> str:
    if limit == math.inf:
        return "∞"
    if limit == -math.inf:
        return "-∞"
    if float(limit).is_integer():
        return str(int(limit))
    return repr(float(limit))


@dataclass(frozen=True, init=False)
class ChoiceFormat:
    """Selects a format string by quantity."""

    limits: tuple[float, ...]
    formats: tuple[str, ...]

    def __init__(self, limits: Sequence[float], formats: Sequence[str]):
        limits = tuple(float(limit) for limit in limits)
        formats = tuple(formats)

        if any(math.isnan(limit) for limit in limits):
            raise ValueError("Choice limits must be numbers, got NaN")

        if len(limits) != len(formats):
            raise ValueError(
                f"limits and formats must have the same length ({len(limits)} != {len(formats)})"
            )
        if not limits:
            raise ValueError("A choice format needs at least one interval")
        for lower, upper in zip(limits, limits[1:]):
            if not lower < upper:
                raise ValueError(f"Choice limits must be strictly ascending: {lower!r} >= {upper!r}")

        object.__setattr__(self, "limits", limits)
        object.__setattr__(self, "formats", formats)

    @staticmethod
    @functools.lru_cache(maxsize=256)
    def from_pattern(pattern: str) -> ChoiceFormat:
        """
        Parse a choice pattern such as ``"0#no files|1#one file|1<{0} files"``.

        Segments are separated by ``|``. ``#`` and ``≤`` make the limit an
        inclusive lower bound, ``<`` makes it exclusive (the next float
        above the limit).

        Args:
            pattern: Choice pattern string

        Returns:
            Parsed choice format

        Raises:
            ValueError: If a segment is malformed or limits are not ascending
        """
        limits: list[float] = []
        formats: list[str] = []

        for segment in pattern.split("|"):
            match = _SEGMENT.match(segment)
            if match is None:
                raise ValueError(f"Malformed choice segment: '{segment}'")

            limit = _parse_limit(match.group("limit"))
            if match.group("relation") == "<":
                limit = math.nextafter(limit, math.inf)

            limits.append(limit)
            formats.append(match.group("text"))

        return ChoiceFormat(limits, formats)

    def to_pattern(self) -> str:
        """Render the pattern form of this choice format."""
        segments = []
        for limit, text in zip(self.limits, self.formats):
            previous = math.nextafter(limit, -math.inf)
            if math.isfinite(limit) and not limit.is_integer() and previous.is_integer():
                # the float right above an integer, written "n<"
                segments.append(f"{_format_limit(previous)}<{text}")
            else:
                segments.append(f"{_format_limit(limit)}#{text}")
        return "|".join(segments)

    def select(self, quantity: float) -> str:
        """
        Return the format whose interval contains ``quantity``.

        A quantity below the first limit selects the first format.

        Raises:
            NegativeQuantity: If ``quantity`` is negative
            ValueError: If ``quantity`` is NaN
        """
        if math.isnan(quantity):
            raise ValueError("Quantity must be a number, got NaN")
        if quantity < 0:
            raise NegativeQuantity(quantity)

        for index, lower in enumerate(self.limits):
            upper = self.limits[index + 1] if index + 1 < len(self.limits) else math.inf
            if lower <= quantity < upper:
                return self.formats[index]

        if quantity == math.inf:
            return self.formats[-1]
        return self.formats[0]

    def __len__(self) -> int:
        return len(self.limits)


__all__ = ["ChoiceFormat"]
