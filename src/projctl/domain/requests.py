"""Update requests — explicit (field name, raw value) pairs.

The CLI accepts two parallel comma-separated lists.  They are paired here,
once, so nothing downstream correlates lists by position.
"""

from __future__ import annotations

from typing import NamedTuple


class FieldUpdate(NamedTuple):
    """One requested update: a field name and its textual value."""

    field_name: str
    raw_value: str


def _split(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",")]


def pair_fields(names: str | None, values: str | None) -> list[FieldUpdate]:
    """Pair comma-separated *names* and *values* by position.

    A name with no (or an empty) value at the same position is dropped, as is
    an empty name.  Surplus values are ignored.  Order and duplicates are
    preserved.
    """
    value_list = _split(values)
    pairs: list[FieldUpdate] = []
    for i, name in enumerate(_split(names)):
        if not name or i >= len(value_list) or not value_list[i]:
            continue
        pairs.append(FieldUpdate(name, value_list[i]))
    return pairs


def parse_field_assignment(text: str) -> FieldUpdate:
    """Parse ``NAME=VALUE`` into a FieldUpdate.

    Splits on the first ``=`` so values may themselves contain ``=``.

    Raises:
        ValueError: If *text* has no ``=`` or an empty name or value.
    """
    name, sep, value = text.partition("=")
    name, value = name.strip(), value.strip()
    if not sep or not name or not value:
        msg = f"Expected NAME=VALUE, got {text!r}"
        raise ValueError(msg)
    return FieldUpdate(name, value)
