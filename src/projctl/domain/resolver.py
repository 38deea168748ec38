"""Value resolution — textual value to the literal a field update needs.

Resolution order:

1. ``[<integer>]`` is a positional index into the field's choices.
2. Iteration fields: index into ``iterations`` (current first), otherwise a
   case-insensitive title match over ``iterations`` then
   ``completed_iterations``.  Resolves to the iteration id.
3. Single-select fields: index or case-insensitive name over ``options``.
   Resolves to the option id.
4. Scalar fields: the raw value, unchanged.

A typed field whose value does not resolve raises :class:`ValueResolutionMiss`;
the raw string is never used as a stand-in for an option or iteration id.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from projctl.domain.fields import (
    FieldDescriptor,
    Iteration,
    IterationSettings,
    Option,
    OptionSettings,
)

_INDEX_RE = re.compile(r"^\[\s*([+-]?\d+)\s*\]$")


class ValueResolutionMiss(LookupError):
    """Raised when a value matches no option/iteration of a typed field."""

    def __init__(self, field: FieldDescriptor, raw_value: str, reason: str) -> None:
        super().__init__(f"{field.name}: {reason}")
        self.field = field
        self.raw_value = raw_value
        self.reason = reason


def parse_index(raw_value: str) -> int | None:
    """Return the integer in ``[<integer>]``, or None if *raw_value* is not an index."""
    m = _INDEX_RE.match(raw_value.strip())
    if m is None:
        return None
    return int(m.group(1))


def _pick[T](choices: Sequence[T], index: int) -> T | None:
    # Negative indexes are misses, never counted from the end.
    if 0 <= index < len(choices):
        return choices[index]
    return None


def _by_title(iterations: Sequence[Iteration], wanted: str) -> Iteration | None:
    return next((it for it in iterations if it.title.casefold() == wanted), None)


def _resolve_iteration(
    field: FieldDescriptor, settings: IterationSettings, raw_value: str
) -> str:
    index = parse_index(raw_value)
    if index is not None:
        iteration = _pick(settings.iterations, index)
        if iteration is None:
            raise ValueResolutionMiss(
                field,
                raw_value,
                f"index {index} out of range ({len(settings.iterations)} active iterations)",
            )
        return iteration.id

    wanted = raw_value.casefold()
    iteration = _by_title(settings.iterations, wanted) or _by_title(
        settings.completed_iterations, wanted
    )
    if iteration is None:
        raise ValueResolutionMiss(field, raw_value, f"no iteration titled {raw_value!r}")
    return iteration.id


def _resolve_option(field: FieldDescriptor, settings: OptionSettings, raw_value: str) -> str:
    index = parse_index(raw_value)
    option: Option | None
    if index is not None:
        option = _pick(settings.options, index)
        if option is None:
            raise ValueResolutionMiss(
                field,
                raw_value,
                f"index {index} out of range ({len(settings.options)} options)",
            )
        return option.id

    wanted = raw_value.casefold()
    option = next((o for o in settings.options if o.name.casefold() == wanted), None)
    if option is None:
        raise ValueResolutionMiss(field, raw_value, f"no option named {raw_value!r}")
    return option.id


def resolve_value(field: FieldDescriptor, raw_value: str) -> str:
    """Convert *raw_value* into the literal to send for *field*.

    Raises:
        ValueResolutionMiss: If *field* is an iteration or single-select field
            and *raw_value* matches none of its choices.
    """
    settings = field.settings
    if isinstance(settings, IterationSettings):
        return _resolve_iteration(field, settings, raw_value)
    if isinstance(settings, OptionSettings):
        return _resolve_option(field, settings, raw_value)
    return raw_value
