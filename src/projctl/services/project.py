"""ProjectService — locate a project and read its field schema."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from projctl.domain.fields import (
    FieldDescriptor,
    FieldSchemaError,
    IterationSettings,
    OptionSettings,
)
from projctl.infrastructure.graphql import TransportError
from projctl.services.base import BaseService, transport_error
from projctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class ProjectRef(BaseModel):
    """A located project and how to reach it on the web."""

    model_config = {"frozen": True}

    id: str
    title: str
    number: int
    owner_login: str
    owner_type: str
    url: str


def field_summary(field: FieldDescriptor) -> dict[str, Any]:
    """Flatten a descriptor for display: id, name, kind, and choice labels."""
    settings = field.settings
    summary: dict[str, Any] = {"id": field.id, "name": field.name, "kind": field.kind}
    if isinstance(settings, OptionSettings):
        summary["choices"] = [o.name for o in settings.options]
    elif isinstance(settings, IterationSettings):
        summary["choices"] = [i.title for i in settings.iterations]
        summary["completed"] = [i.title for i in settings.completed_iterations]
    return summary


class ProjectService(BaseService):
    """Project lookup and schema retrieval."""

    def locate(
        self,
        number: int,
        *,
        organization: str | None = None,
        user: str | None = None,
    ) -> ServiceResult:
        """Find project *number* owned by *user* or *organization*.

        Returns ``data`` shaped like :class:`ProjectRef` on success.
        """
        op = "locate_project"
        if not (user or organization):
            return ServiceResult.failure(op, "MISSING_OWNER", "Missing organization or user")

        try:
            project = self._gateway.find_project(number, organization=organization, user=user)
        except TransportError as exc:
            logger.warning("Project lookup failed: %s", exc)
            return ServiceResult.failure(op, _fatal(exc))

        login = user or organization or ""
        if project is None:
            return ServiceResult.failure(
                op,
                "PROJECT_NOT_FOUND",
                f"Project number {number} not found for login {login}. "
                f"Check the number of the project and that it is owned by {login}.",
                number=number,
                login=login,
            )

        owner_type = "user" if user else "organization"
        segment = "users" if user else "orgs"
        ref = ProjectRef(
            id=str(project["id"]),
            title=str(project.get("title") or ""),
            number=number,
            owner_login=login,
            owner_type=owner_type,
            url=f"{self._settings.github.web_url}/{segment}/{login}/projects/{number}",
        )
        logger.debug("Located project %s (%s)", ref.title, ref.id)
        return ServiceResult(ok=True, op=op, data=ref.model_dump())

    def fetch_fields(self, project_id: str) -> list[FieldDescriptor]:
        """Fetch and parse the project's field schema.

        Raises:
            TransportError: On API failure.
            FieldSchemaError: If a field node cannot be parsed.
        """
        nodes = self._gateway.fetch_fields(
            project_id, first=self._settings.project.field_page_size
        )
        return [FieldDescriptor.from_node(node) for node in nodes]

    def list_fields(
        self,
        number: int,
        *,
        organization: str | None = None,
        user: str | None = None,
    ) -> ServiceResult:
        """Locate a project and list its fields with their choices."""
        op = "list_fields"
        located = self.locate(number, organization=organization, user=user)
        if not located.ok:
            return located.for_op(op)

        project = ProjectRef.model_validate(located.data)
        schema = self.load_schema(project.id)
        if isinstance(schema, ServiceError):
            return ServiceResult.failure(op, schema)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "project": project.model_dump(),
                "count": len(schema),
                "fields": [field_summary(f) for f in schema],
            },
        )

    def load_schema(self, project_id: str) -> list[FieldDescriptor] | ServiceError:
        """Fetch the schema, mapping fetch-phase failures to a fatal ServiceError."""
        try:
            return self.fetch_fields(project_id)
        except TransportError as exc:
            logger.warning("Field schema fetch failed: %s", exc)
            return _fatal(exc)
        except FieldSchemaError as exc:
            return ServiceError(
                code="MALFORMED_SCHEMA",
                message=str(exc),
                detail={"project_id": project_id},
            )


def _fatal(exc: TransportError) -> ServiceError:
    err = transport_error(exc)
    return ServiceError(
        code="TRANSPORT_ERROR",
        message=err.message,
        detail={"kind": err.code, **err.detail},
    )
