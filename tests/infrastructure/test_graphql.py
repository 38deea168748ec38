"""Tests for GraphQLClient transport error mapping."""

from __future__ import annotations

import json

import httpx
import pytest

from projctl.config.settings import ProjSettings
from projctl.infrastructure.graphql import GraphQLClient, TransportError


def _client(handler: httpx.MockTransport | None = None, **kwargs: object) -> GraphQLClient:
    return GraphQLClient("tok", transport=handler, **kwargs)  # type: ignore[arg-type]


def _respond(response: httpx.Response) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: response)


class TestExecute:
    def test_returns_data(self) -> None:
        response = httpx.Response(200, json={"data": {"viewer": {"login": "me"}}})
        with _client(_respond(response)) as c:
            assert c.execute("{ viewer { login } }") == {"viewer": {"login": "me"}}

    def test_sends_query_variables_and_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {}})

        with _client(httpx.MockTransport(handler), features="projects_next_graphql") as c:
            c.execute("query($n: Int!) { x }", {"n": 3, "s": "text"})

        request = seen[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["GraphQL-Features"] == "projects_next_graphql"
        body = json.loads(request.content)
        assert body["query"] == "query($n: Int!) { x }"
        assert body["variables"] == {"n": 3, "s": "text"}
        # Natural JSON literal encoding: numbers unquoted, strings quoted.
        assert b'"n":3' in request.content.replace(b" ", b"")
        assert b'"s":"text"' in request.content.replace(b" ", b"")

    def test_no_token_no_auth_header(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {}})

        with GraphQLClient(transport=httpx.MockTransport(handler)) as c:
            c.execute("{ x }")
        assert "Authorization" not in seen[0].headers
        assert "GraphQL-Features" not in seen[0].headers

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_failure(self, status: int) -> None:
        with _client(_respond(httpx.Response(status, text="Bad credentials"))) as c:
            with pytest.raises(TransportError) as exc_info:
                c.execute("{ x }")
        assert exc_info.value.kind == "auth"
        assert exc_info.value.detail["status_code"] == status

    def test_http_failure(self) -> None:
        with _client(_respond(httpx.Response(502, text="bad gateway"))) as c:
            with pytest.raises(TransportError) as exc_info:
                c.execute("{ x }")
        assert exc_info.value.kind == "http"
        assert "502" in str(exc_info.value)

    def test_graphql_errors(self) -> None:
        body = {"data": None, "errors": [{"message": "first"}, {"message": "second"}]}
        with _client(_respond(httpx.Response(200, json=body))) as c:
            with pytest.raises(TransportError) as exc_info:
                c.execute("{ x }")
        err = exc_info.value
        assert err.kind == "graphql"
        assert err.message == "first, second"
        assert err.detail["errors"] == body["errors"]

    def test_non_json_body(self) -> None:
        with _client(_respond(httpx.Response(200, text="<html>"))) as c:
            with pytest.raises(TransportError) as exc_info:
                c.execute("{ x }")
        assert exc_info.value.kind == "malformed"

    def test_missing_data(self) -> None:
        with _client(_respond(httpx.Response(200, json={"extensions": {}}))) as c:
            with pytest.raises(TransportError) as exc_info:
                c.execute("{ x }")
        assert exc_info.value.kind == "malformed"

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(httpx.MockTransport(handler)) as c:
            with pytest.raises(TransportError) as exc_info:
                c.execute("{ x }")
        assert exc_info.value.kind == "network"

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with _client(httpx.MockTransport(handler)) as c:
            with pytest.raises(TransportError, match="timed out") as exc_info:
                c.execute("{ x }")
        assert exc_info.value.kind == "network"


class TestFromSettings:
    def test_uses_github_section(self) -> None:
        settings = ProjSettings(
            github={"token": "abc", "api_url": "https://ghe.example/api/graphql"}
        )
        with GraphQLClient.from_settings(settings) as client:
            assert client.api_url == "https://ghe.example/api/graphql"
