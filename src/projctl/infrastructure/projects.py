"""ProjectsGateway — GraphQL documents for project lookup, schema, and updates.

Returns raw response nodes; parsing into domain models happens in the
service layer.
"""

from __future__ import annotations

import logging
from typing import Any

from projctl.infrastructure.graphql import GraphQLClient, TransportError

logger = logging.getLogger(__name__)

DEFAULT_FIELD_PAGE_SIZE = 20

_USER_PROJECT_QUERY = """
query($login: String!, $number: Int!) {
  user(login: $login) {
    projectNext(number: $number) { id title }
  }
}
"""

_ORG_PROJECT_QUERY = """
query($login: String!, $number: Int!) {
  organization(login: $login) {
    projectNext(number: $number) { id title }
  }
}
"""

_FIELDS_QUERY = """
query($projectId: ID!, $first: Int!) {
  node(id: $projectId) {
    ... on ProjectNext {
      fields(first: $first) {
        nodes { id name settings }
      }
    }
  }
}
"""

_UPDATE_FIELD_MUTATION = """
mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $value: String!) {
  updateProjectNextItemField(
    input: {projectId: $projectId, itemId: $itemId, fieldId: $fieldId, value: $value}
  ) {
    projectNextItem { id }
  }
}
"""


def _dig(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None at the first missing key."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class ProjectsGateway:
    """Project API operations over a :class:`GraphQLClient`."""

    def __init__(self, client: GraphQLClient) -> None:
        self._client = client

    def find_project(
        self,
        number: int,
        *,
        organization: str | None = None,
        user: str | None = None,
    ) -> dict[str, Any] | None:
        """Look up a project by owner login and number.

        A *user* owner takes precedence over *organization*.  Returns
        ``{"id", "title"}`` or None when the owner has no such project.
        """
        if user:
            owner_key, login, query = "user", user, _USER_PROJECT_QUERY
        elif organization:
            owner_key, login, query = "organization", organization, _ORG_PROJECT_QUERY
        else:
            msg = "Either organization or user is required"
            raise ValueError(msg)

        logger.debug("Looking up project %s/%d", login, number)
        data = self._client.execute(query, {"login": login, "number": number})
        project = _dig(data, owner_key, "projectNext")
        if not isinstance(project, dict) or not project.get("id"):
            return None
        return project

    def fetch_fields(
        self, project_id: str, *, first: int = DEFAULT_FIELD_PAGE_SIZE
    ) -> list[dict[str, Any]]:
        """Fetch up to *first* field nodes (``id``, ``name``, raw ``settings``)."""
        data = self._client.execute(_FIELDS_QUERY, {"projectId": project_id, "first": first})
        nodes = _dig(data, "node", "fields", "nodes")
        if nodes is None:
            raise TransportError(
                "malformed",
                f"No field list returned for project {project_id}",
                detail={"data": data},
            )
        if not isinstance(nodes, list):
            raise TransportError("malformed", "Field nodes is not a list", detail={"data": data})
        logger.debug("Fetched %d fields for project %s", len(nodes), project_id)
        return [n for n in nodes if isinstance(n, dict)]

    def update_field(self, project_id: str, item_id: str, field_id: str, value: str) -> str | None:
        """Set one field value on an item.  Returns the updated item's id."""
        data = self._client.execute(
            _UPDATE_FIELD_MUTATION,
            {
                "projectId": project_id,
                "itemId": item_id,
                "fieldId": field_id,
                "value": value,
            },
        )
        item_id_out = _dig(data, "updateProjectNextItemField", "projectNextItem", "id")
        return str(item_id_out) if item_id_out is not None else None
