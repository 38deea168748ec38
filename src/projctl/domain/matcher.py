"""Field matching — map a requested field name to its schema descriptor."""

from __future__ import annotations

from collections.abc import Iterable

from projctl.domain.fields import FieldDescriptor


def find_field(fields: Iterable[FieldDescriptor], name: str) -> FieldDescriptor | None:
    """Return the first field whose name equals *name*, ignoring case.

    Fields are scanned in fetch order, so when two fields share a
    case-insensitive name the earlier one wins.  Returns None on no match.
    """
    wanted = name.casefold()
    for field in fields:
        if field.name.casefold() == wanted:
            return field
    return None
