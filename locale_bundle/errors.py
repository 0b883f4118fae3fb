"""Exceptions raised by :mod:`locale_bundle`."""

from __future__ import annotations


class BundleError(Exception):
    """Base class for every error raised by the package."""


class ResourceNotFound(BundleError, KeyError):
    """The key is missing from every table of the fallback chain."""

    def __init__(self, key: str, base_name: str, locale: object = None):
        self.key = key
        self.base_name = base_name
        self.locale = locale
        super().__init__(key, base_name)

    def __str__(self) -> str:
        message = f"Can't find resource for bundle '{self.base_name}', key '{self.key}'"
        if self.locale is not None:
            message += f" (locale '{self.locale}')"
        return message


class InvalidLocaleSpecifier(BundleError, ValueError):
    """Malformed locale, e.g. a country without a language."""


class NegativeQuantity(BundleError, ValueError):
    """A choice lookup was given a negative quantity."""

    def __init__(self, quantity: float):
        self.quantity = quantity
        super().__init__(f"Quantity must not be negative, got {quantity!r}")


class UnsupportedFormat(BundleError, ValueError):
    """The resource file suffix has no loader."""


__all__ = [
    "BundleError",
    "InvalidLocaleSpecifier",
    "NegativeQuantity",
    "ResourceNotFound",
    "UnsupportedFormat",
]
