"""Tests for the fields CLI command."""

from __future__ import annotations

import json

from click.testing import CliRunner

from projctl.cli import cli
from tests.conftest import (
    FIELDS_QUERY,
    PROJECT_QUERY,
    GraphQLStub,
    fields_response,
    project_response,
)


class TestFieldsCommand:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["fields", "--help"])
        assert result.exit_code == 0
        assert "--organization" in result.output
        assert "--github-token" in result.output

    def test_lists_fields(self, cli_runner: CliRunner, stub_api: GraphQLStub) -> None:
        stub_api.on(PROJECT_QUERY, project_response())
        stub_api.on(FIELDS_QUERY, fields_response())
        result = cli_runner.invoke(cli, ["fields", "-o", "acme", "-n", "4"])
        assert result.exit_code == 0, result.output
        assert "Status" in result.output
        assert "[0] Todo" in result.output
        assert "[0] Sprint 5" in result.output

    def test_json(self, cli_runner: CliRunner, stub_api: GraphQLStub) -> None:
        stub_api.on(PROJECT_QUERY, project_response())
        stub_api.on(FIELDS_QUERY, fields_response())
        result = cli_runner.invoke(cli, ["--json", "fields", "-o", "acme", "-n", "4"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["count"] == 4
        assert [f["kind"] for f in data["fields"]] == ["scalar", "option", "iteration", "scalar"]

    def test_not_found(self, cli_runner: CliRunner, stub_api: GraphQLStub) -> None:
        stub_api.on(PROJECT_QUERY, {"data": {"organization": None}})
        result = cli_runner.invoke(cli, ["fields", "-o", "acme", "-n", "4"])
        assert result.exit_code == 1
