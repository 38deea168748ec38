"""GraphQLClient — thin httpx wrapper for the GitHub GraphQL endpoint.

Every failure surfaces as :class:`TransportError` with a ``kind``
discriminator so callers decide recoverability without inspecting
httpx exceptions:

- ``network``   — connection failure or timeout
- ``auth``      — HTTP 401/403
- ``http``      — any other non-2xx status
- ``graphql``   — response carried a non-empty ``errors`` array
- ``malformed`` — body was not JSON or had no ``data`` object
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

import httpx

if TYPE_CHECKING:
    from types import TracebackType

    from projctl.config.settings import ProjSettings

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com/graphql"


class TransportError(Exception):
    """Network or API failure talking to the GraphQL endpoint."""

    def __init__(
        self,
        kind: str,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail or {}

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


def _error_message(err: Any) -> str:
    if isinstance(err, dict):
        return str(err.get("message", "Unknown GraphQL error"))
    return str(err)


class GraphQLClient:
    """Synchronous GraphQL client.

    Usage::

        with GraphQLClient(token="ghp_...") as client:
            data = client.execute("{ viewer { login } }")
    """

    def __init__(
        self,
        token: str = "",
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        features: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if features:
            headers["GraphQL-Features"] = features
        self.api_url = api_url
        self._http = httpx.Client(headers=headers, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: ProjSettings) -> GraphQLClient:
        """Build a client from the ``[github]`` settings section."""
        gh = settings.github
        return cls(
            gh.token,
            api_url=gh.api_url,
            timeout=gh.timeout,
            features=gh.graphql_features or None,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run *query* and return its ``data`` object.

        Variables are sent as JSON, so strings are quoted and numbers are not.

        Raises:
            TransportError: On any network, HTTP, GraphQL, or decoding failure.
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self._http.post(self.api_url, json=payload)
        except httpx.TimeoutException as exc:
            raise TransportError("network", f"Request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError("network", f"Request failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise TransportError(
                "auth",
                f"Authentication failed (HTTP {response.status_code})",
                detail={"status_code": response.status_code, "body": response.text[:500]},
            )
        if response.is_error:
            raise TransportError(
                "http",
                f"HTTP {response.status_code} from {self.api_url}",
                detail={"status_code": response.status_code, "body": response.text[:500]},
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                "malformed",
                "Response body is not JSON",
                detail={"body": response.text[:500]},
            ) from exc

        if not isinstance(body, dict):
            raise TransportError("malformed", "Response body is not a JSON object")

        errors = body.get("errors")
        if errors:
            messages = ", ".join(_error_message(err) for err in errors)
            raise TransportError("graphql", messages, detail={"errors": errors})

        data = body.get("data")
        if not isinstance(data, dict):
            raise TransportError("malformed", "Response has no data object", detail={"body": body})

        logger.debug("GraphQL request ok (%d bytes)", len(response.content))
        return data
