"""Locale-aware resource bundles with hierarchical fallback."""

from locale_bundle.bundle import Resolution, ResourceBundle, ResourceTable
from locale_bundle.choice import ChoiceFormat
from locale_bundle.errors import (
    BundleError,
    InvalidLocaleSpecifier,
    NegativeQuantity,
    ResourceNotFound,
    UnsupportedFormat,
)
from locale_bundle.formatting import format_message
from locale_bundle.i18n import MessageSource
from locale_bundle.loaders import load_bundle, load_table
from locale_bundle.locale import Locale
from locale_bundle.values import Choice, Entry, Opaque, Text, TextList

__all__ = [
    "BundleError",
    "Choice",
    "ChoiceFormat",
    "Entry",
    "InvalidLocaleSpecifier",
    "Locale",
    "MessageSource",
    "NegativeQuantity",
    "Opaque",
    "Resolution",
    "ResourceBundle",
    "ResourceNotFound",
    "ResourceTable",
    "Text",
    "TextList",
    "UnsupportedFormat",
    "format_message",
    "load_bundle",
    "load_table",
]
