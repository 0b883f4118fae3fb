"""Placeholder substitution for message templates.

Supported placeholders:

* ``{0}``, ``{1}`` ... positional arguments
* ``{name}`` named values
* ``{0,choice,0#no files|1#one file|1<{0} files}`` choice sub-patterns; the
  selected text is formatted again with the same arguments

Placeholders without a matching argument are left untouched.
"""

from __future__ import annotations

from collections.abc import Sequence

from .choice import ChoiceFormat
from .types import FormatParam, FormatValue

_MISSING = object()


def _find_closing(template: str, start: int) -> int:
    """Index of the brace closing the one at ``start``, -1 if unbalanced."""
    depth = 0
    for index in range(start, len(template)):
        if template[index] == "{":
            depth += 1
        elif template[index] == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _lookup(name: str, args: Sequence[FormatValue], values: FormatParam | None) -> object:
    if name.isdigit():
        index = int(name)
        return args[index] if index < len(args) else _MISSING
    if values is not None and name in values:
        return values[name]
    return _MISSING


def _to_text(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_message(
        template: str,
        args: Sequence[FormatValue] = (),
        values: FormatParam | None = None,
) -> str:
    """
    Substitute placeholders in ``template``.

    Args:
        template: Message template
        args: Positional arguments for ``{0}``-style placeholders
        values: Named values for ``{name}``-style placeholders

    Returns:
        The formatted message

    Raises:
        NegativeQuantity: If a choice placeholder receives a negative number
        ValueError: If a choice pattern is malformed or its argument is not numeric
    """
    if "{" not in template:
        return template

    parts: list[str] = []
    position = 0

    while True:
        start = template.find("{", position)
        if start == -1:
            break
        end = _find_closing(template, start)
        if end == -1:
            break

        parts.append(template[position:start])
        placeholder = template[start + 1:end]
        name, _, rest = placeholder.partition(",")
        kind, _, style = rest.partition(",")
        value = _lookup(name.strip(), args, values)

        if value is _MISSING:
            parts.append(template[start:end + 1])
        elif kind.strip() == "choice":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Choice placeholder '{name.strip()}' needs a number, got {value!r}")
            selected = ChoiceFormat.from_pattern(style).select(value)
            parts.append(format_message(selected, args, values))
        else:
            parts.append(_to_text(value))

        position = end + 1

    parts.append(template[position:])
    return "".join(parts)


__all__ = ["format_message"]
