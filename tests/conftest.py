"""Shared pytest fixtures and test helpers for projctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from projctl.domain.fields import FieldDescriptor
from projctl.infrastructure.graphql import GraphQLClient
from projctl.infrastructure.projects import ProjectsGateway

Responder = dict[str, Any] | httpx.Response | Callable[[dict[str, Any]], Any]

PROJECT_QUERY = "projectNext(number"
FIELDS_QUERY = "fields(first"
UPDATE_MUTATION = "updateProjectNextItemField"


class GraphQLStub:
    """Scripted GraphQL endpoint served through ``httpx.MockTransport``.

    Routes match on a substring of the query document; the first route
    registered for a marker wins.  Every request payload is recorded.
    """

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self._routes: list[tuple[str, Responder]] = []

    def on(self, marker: str, response: Responder) -> None:
        self._routes.append((marker, response))

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(payload)
        for marker, response in self._routes:
            if marker in payload["query"]:
                if callable(response):
                    response = response(payload)
                if isinstance(response, httpx.Response):
                    return response
                return httpx.Response(200, json=response)
        return httpx.Response(200, json={"errors": [{"message": "unrouted query"}]})

    def client(self) -> GraphQLClient:
        return GraphQLClient(
            "test-token",
            features="projects_next_graphql",
            transport=httpx.MockTransport(self.handler),
        )

    def mutations(self) -> list[dict[str, Any]]:
        """Variables of every update mutation sent, in order."""
        return [r["variables"] for r in self.requests if UPDATE_MUTATION in r["query"]]


# ---------------------------------------------------------------------------
# Canned API payloads
# ---------------------------------------------------------------------------


def status_node() -> dict[str, Any]:
    return {
        "id": "F_STATUS",
        "name": "Status",
        "settings": json.dumps(
            {
                "width": 120,
                "options": [
                    {"id": "O1", "name": "Todo", "name_html": "Todo"},
                    {"id": "O2", "name": "Done", "name_html": "Done"},
                ],
            }
        ),
    }


def iteration_node() -> dict[str, Any]:
    return {
        "id": "F_ITER",
        "name": "Iteration",
        "settings": json.dumps(
            {
                "configuration": {
                    "duration": 14,
                    "start_day": 1,
                    "iterations": [
                        {"id": "I9", "title": "Sprint 5", "duration": 14},
                        {"id": "I10", "title": "Sprint 6", "duration": 14},
                    ],
                    "completed_iterations": [
                        {"id": "I8", "title": "Sprint 4", "duration": 14},
                    ],
                }
            }
        ),
    }


def schema_nodes() -> list[dict[str, Any]]:
    """A project schema: title (null settings), status, iteration, estimate."""
    return [
        {"id": "F_TITLE", "name": "Title", "settings": "null"},
        status_node(),
        iteration_node(),
        {"id": "F_EST", "name": "Estimate", "settings": '{"width":80}'},
    ]


def project_response(
    owner: str = "organization", project_id: str = "PN_1", title: str = "Roadmap"
) -> dict[str, Any]:
    return {"data": {owner: {"projectNext": {"id": project_id, "title": title}}}}


def fields_response(nodes: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    nodes = schema_nodes() if nodes is None else nodes
    return {"data": {"node": {"fields": {"nodes": nodes}}}}


def update_response(item_id: str = "PNI_1") -> dict[str, Any]:
    return {"data": {UPDATE_MUTATION: {"projectNextItem": {"id": item_id}}}}


def graphql_error(message: str) -> dict[str, Any]:
    return {"data": None, "errors": [{"type": "INVALID", "message": message}]}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    proj = logging.getLogger("projctl")
    proj_level = proj.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    proj.setLevel(proj_level)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty directory with no GitHub/projctl env."""
    for var in ("GITHUB_TOKEN", "GITHUB_REPOSITORY", "PROJCTL_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def graphql() -> GraphQLStub:
    return GraphQLStub()


@pytest.fixture
def gateway(graphql: GraphQLStub) -> ProjectsGateway:
    client = graphql.client()
    try:
        yield ProjectsGateway(client)
    finally:
        client.close()


@pytest.fixture
def schema() -> list[FieldDescriptor]:
    return [FieldDescriptor.from_node(n) for n in schema_nodes()]


@pytest.fixture
def stub_api(graphql: GraphQLStub, monkeypatch: pytest.MonkeyPatch) -> GraphQLStub:
    """Make the CLI talk to the scripted endpoint instead of GitHub."""
    monkeypatch.setattr(
        GraphQLClient,
        "from_settings",
        classmethod(lambda cls, settings: graphql.client()),
    )
    return graphql
