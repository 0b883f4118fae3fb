"""
Module to get formatted messages from resource bundles.

A :class:`MessageSource` is constructed explicitly and passed to the code
that needs messages; it never lives in module-level state.
"""
import logging
import threading
from collections.abc import Iterable, Sequence
from pathlib import Path

from locale_bundle.bundle import Resolution, ResourceBundle
from locale_bundle.errors import BundleError, ResourceNotFound
from locale_bundle.formatting import format_message
from locale_bundle.loaders import load_bundle
from locale_bundle.locale import Locale
from locale_bundle.types import CacheDict, FormatParam, FormatValue, LocaleLike


class MessageSource:
    """
    Resolves message codes against several bundles, in order.

    Args:
        bundles: Bundles to search, first match wins
        default_locale: Locale used when a call passes none
        cache_max_size: Maximum number of formatted messages kept
        use_code_as_default_message: Return the code instead of raising on a miss
    """

    __slots__ = (
        "_bundles",
        "_default_locale",
        "_previous_messages",
        "_cache_lock",
        "_cache_max_size",
        "_use_code_as_default_message",
    )

    def __init__(
            self,
            bundles: Iterable[ResourceBundle],
            *,
            default_locale: LocaleLike = None,
            cache_max_size: int = 2048,
            use_code_as_default_message: bool = False,
    ):
        if cache_max_size <= 0:
            raise ValueError("cache_max_size must be a positive integer")

        self._bundles: tuple[ResourceBundle, ...] = tuple(bundles)
        if not self._bundles:
            raise ValueError("At least one bundle is required")

        names = [bundle.base_name for bundle in self._bundles]
        if len(set(names)) != len(names):
            raise BundleError(f"Duplicate base names: {names}")

        self._default_locale: Locale = Locale.of(default_locale)
        self._previous_messages: CacheDict = {}
        self._cache_lock = threading.Lock()
        self._cache_max_size: int = cache_max_size
        self._use_code_as_default_message: bool = use_code_as_default_message

    @classmethod
    def from_directory(
            cls,
            directory: str | Path,
            basenames: Sequence[str],
            *,
            max_workers: int | None = None,
            encoding: str = "utf-8",
            **options,
    ) -> "MessageSource":
        """
        Load the bundles named by ``basenames`` from one directory.

        Args:
            directory: Directory holding the resource files
            basenames: Base names to load, in lookup order
            max_workers: Optional maximum number of loader threads per bundle
            encoding: Text encoding of the files
            **options: Keyword options of :class:`MessageSource`
        """
        bundles = [
            load_bundle(directory, base_name, max_workers=max_workers, encoding=encoding)
            for base_name in basenames
        ]
        return cls(bundles, **options)

    @property
    def default_locale(self) -> Locale:
        """Get the default locale."""
        return self._default_locale

    @property
    def bundles(self) -> tuple[ResourceBundle, ...]:
        return self._bundles

    @property
    def basenames(self) -> list[str]:
        return [bundle.base_name for bundle in self._bundles]

    def bundle(self, base_name: str) -> ResourceBundle:
        """The bundle named ``base_name``."""
        for bundle in self._bundles:
            if bundle.base_name == base_name:
                return bundle
        raise KeyError(f"No bundle named '{base_name}'")

    def resolve(self, code: str, locale: LocaleLike = None) -> Resolution:
        """
        Resolve ``code`` in the first bundle that holds it.

        Raises:
            ResourceNotFound: If no bundle holds the code, naming the last base name
        """
        locale = Locale.of(locale) if locale is not None else self._default_locale

        for bundle in self._bundles:
            if bundle.contains(code, locale):
                return bundle.resolve(code, locale)

        raise ResourceNotFound(code, ", ".join(self.basenames), locale)

    def get_message(
            self,
            code: str,
            args: Sequence[FormatValue] = (),
            locale: LocaleLike = None,
            values: FormatParam | None = None,
    ) -> str:
        """
        Get a formatted message with memoization.

        Args:
            code: Message code
            args: Positional arguments for ``{0}`` placeholders
            locale: Optional locale override
            values: Named values for ``{name}`` placeholders

        Returns:
            The formatted message, or ``code`` on a miss when
            ``use_code_as_default_message`` is set

        Raises:
            ResourceNotFound: If no bundle holds the code
        """
        try:
            return self._get_formatted(code, args, locale, values)
        except ResourceNotFound as error:
            if not self._use_code_as_default_message:
                raise
            logging.warning("Error: the code '%s' is not defined in bundles - %s", code, error)
            return code

    def get_message_or_default(
            self,
            code: str,
            default: str,
            args: Sequence[FormatValue] = (),
            locale: LocaleLike = None,
            values: FormatParam | None = None,
    ) -> str:
        """Like :meth:`get_message`, formatting ``default`` when the code is missing."""
        try:
            return self._get_formatted(code, args, locale, values)
        except ResourceNotFound:
            return format_message(default, tuple(args), values)

    def _get_formatted(
            self,
            code: str,
            args: Sequence[FormatValue],
            locale: LocaleLike,
            values: FormatParam | None,
    ) -> str:
        locale = Locale.of(locale) if locale is not None else self._default_locale
        args_tuple = tuple(args)
        # 1, 1.0 and True hash alike but format differently
        typed_args = tuple((type(arg), arg) for arg in args_tuple)
        typed_values = tuple((name, type(value), value) for name, value in values.items()) if values else None
        cache_key = (code, locale.tag, typed_args, typed_values)

        cached = self._previous_messages.get(cache_key)
        if cached is not None:
            return cached

        resolution = self.resolve(code, locale)
        template = resolution.value
        if not isinstance(template, str):
            raise TypeError(f"Message '{code}' is a {resolution.entry.kind}, not a text")

        result = format_message(template, args_tuple, values)

        with self._cache_lock:
            # Bounded cache, FIFO eviction of the oldest quarter
            if len(self._previous_messages) >= self._cache_max_size:
                limit = self._cache_max_size // 4 if self._cache_max_size > 4 else 1
                keys_to_remove = list(self._previous_messages.keys())[:limit]
                for k in keys_to_remove:
                    del self._previous_messages[k]

            self._previous_messages[cache_key] = result
        return result

    def choose(self, code: str, quantity: float, locale: LocaleLike = None) -> str:
        """Select the plural form of ``code`` for ``quantity``, see :meth:`ResourceBundle.choose`."""
        locale = Locale.of(locale) if locale is not None else self._default_locale

        for bundle in self._bundles:
            if bundle.contains(code, locale):
                return bundle.choose(code, quantity, locale)

        raise ResourceNotFound(code, ", ".join(self.basenames), locale)

    def __repr__(self) -> str:
        return f"MessageSource({self.basenames!r}, default_locale={self._default_locale!r})"


__all__ = ["MessageSource"]
