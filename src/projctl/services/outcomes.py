"""Per-field outcomes of a batch update.

Exactly one outcome is recorded per requested (name, value) pair, tagged by
``status`` so renderers and JSON consumers can dispatch on it.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from projctl.services.result import ServiceError


class Resolved(BaseModel):
    """The field was found, its value resolved, and the update applied."""

    model_config = {"frozen": True}

    status: Literal["resolved"] = "resolved"
    field_name: str
    field_id: str
    resolved_value: str
    result_id: str | None = None


class FieldNotFound(BaseModel):
    """No field in the project schema has the requested name."""

    model_config = {"frozen": True}

    status: Literal["field_not_found"] = "field_not_found"
    field_name: str


class ValueUnresolved(BaseModel):
    """The value matched no option/iteration; the update was skipped."""

    model_config = {"frozen": True}

    status: Literal["value_unresolved"] = "value_unresolved"
    field_name: str
    field_id: str
    raw_value: str
    reason: str


class UpdateFailed(BaseModel):
    """The update mutation was sent and failed."""

    model_config = {"frozen": True}

    status: Literal["update_failed"] = "update_failed"
    field_name: str
    field_id: str
    resolved_value: str
    error: ServiceError


UpdateOutcome = Annotated[
    Resolved | FieldNotFound | ValueUnresolved | UpdateFailed,
    Field(discriminator="status"),
]


def describe_failure(outcome: FieldNotFound | ValueUnresolved | UpdateFailed) -> str:
    """One-line human description of a non-resolved outcome."""
    if isinstance(outcome, FieldNotFound):
        return f"{outcome.field_name}: field not found"
    if isinstance(outcome, ValueUnresolved):
        return f"{outcome.field_name}: value {outcome.raw_value!r} not resolved ({outcome.reason})"
    return (
        f"{outcome.field_name}: update failed for {outcome.resolved_value!r} "
        f"({outcome.error.code}: {outcome.error.message})"
    )
