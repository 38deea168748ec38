"""FieldUpdateService — resolve and apply a batch of field updates to one item.

Pipeline: LOCATE → FETCH SCHEMA → (MATCH → RESOLVE → MUTATE) per pair → RESPOND

Only the first two stages can fail the run.  Per-pair failures are recorded
as outcomes and the batch always runs to completion, strictly in order,
with each mutation attempted at most once.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from projctl.domain.fields import FieldDescriptor
from projctl.domain.matcher import find_field
from projctl.domain.requests import FieldUpdate
from projctl.domain.resolver import ValueResolutionMiss, resolve_value
from projctl.infrastructure.graphql import TransportError
from projctl.services.base import BaseService, transport_error
from projctl.services.outcomes import (
    FieldNotFound,
    Resolved,
    UpdateFailed,
    UpdateOutcome,
    ValueUnresolved,
    describe_failure,
)
from projctl.services.project import ProjectRef, ProjectService
from projctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class FieldUpdateService(BaseService):
    """Applies ordered (field name, value) updates to a project item."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply_all(
        self,
        item_id: str,
        project_id: str,
        fields: Sequence[FieldDescriptor],
        updates: Sequence[FieldUpdate],
    ) -> list[UpdateOutcome]:
        """Apply *updates* one by one; return one outcome per pair, in order."""
        outcomes: list[UpdateOutcome] = []
        for update in updates:
            outcome = self._apply_one(item_id, project_id, fields, update)
            logger.debug("Field %s -> %s", update.field_name, outcome.status)
            outcomes.append(outcome)
        return outcomes

    def update_item(
        self,
        item_id: str,
        *,
        project_number: int,
        updates: Sequence[FieldUpdate],
        organization: str | None = None,
        user: str | None = None,
    ) -> ServiceResult:
        """Locate the project, fetch its schema once, and apply *updates*."""
        op = "update_item"
        if not updates:
            return ServiceResult.failure(
                op,
                "NO_UPDATES",
                "No field updates requested. Pass --field-names/--field-values or --field.",
            )

        # ── LOCATE ───────────────────────────────────────────
        projects = ProjectService(self._gateway, self._settings)
        located = projects.locate(project_number, organization=organization, user=user)
        if not located.ok:
            return located.for_op(op)
        project = ProjectRef.model_validate(located.data)

        # ── FETCH SCHEMA ─────────────────────────────────────
        schema = projects.load_schema(project.id)
        if isinstance(schema, ServiceError):
            return ServiceResult.failure(op, schema)

        # ── APPLY ────────────────────────────────────────────
        outcomes = self.apply_all(item_id, project.id, schema, updates)

        # ── RESPOND ──────────────────────────────────────────
        warnings = [describe_failure(o) for o in outcomes if not isinstance(o, Resolved)]
        updated = len(outcomes) - len(warnings)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "item_id": item_id,
                "project": project.model_dump(),
                "outcomes": [o.model_dump(mode="json") for o in outcomes],
                "counts": {
                    "total": len(outcomes),
                    "updated": updated,
                    "failed": len(warnings),
                },
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_one(
        self,
        item_id: str,
        project_id: str,
        fields: Sequence[FieldDescriptor],
        update: FieldUpdate,
    ) -> UpdateOutcome:
        name = update.field_name
        field = find_field(fields, name)
        if field is None:
            logger.info("Failed to find field with name %s", name)
            return FieldNotFound(field_name=name)

        try:
            value = resolve_value(field, update.raw_value)
        except ValueResolutionMiss as exc:
            logger.info("Skipping field %s: %s", name, exc.reason)
            return ValueUnresolved(
                field_name=name,
                field_id=field.id,
                raw_value=update.raw_value,
                reason=exc.reason,
            )

        try:
            result_id = self._gateway.update_field(project_id, item_id, field.id, value)
        except TransportError as exc:
            logger.info("Failed to update field %s with value %s: %s", name, value, exc)
            return UpdateFailed(
                field_name=name,
                field_id=field.id,
                resolved_value=value,
                error=transport_error(exc),
            )

        return Resolved(
            field_name=name,
            field_id=field.id,
            resolved_value=value,
            result_id=result_id,
        )
