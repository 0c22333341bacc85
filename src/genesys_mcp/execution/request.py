"""Authenticated request primitive for the Genesys Cloud Platform API."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence, Union

import httpx
import structlog

from genesys_mcp.core.exceptions import APIError
from genesys_mcp.core.session import SessionManager

logger = structlog.get_logger()

RequestBody = Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class RequestSpec:
    """One API call: method, path, JSON body and query string."""

    method: str
    path: str
    body: RequestBody = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Detach from the caller's containers so later mutation cannot leak in
        body = self.body
        if isinstance(body, Mapping):
            body = MappingProxyType(dict(body))
        else:
            body = tuple(body)
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "body", body)
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))

    def json_body(self) -> Any:
        """Body as sent on the wire, or None when empty."""
        if not self.body:
            return None
        if isinstance(self.body, Mapping):
            return dict(self.body)
        return [dict(entry) for entry in self.body]

    def query_params(self) -> dict[str, Any] | None:
        """Query string as sent on the wire, or None when empty."""
        if not self.query:
            return None
        return dict(self.query)


def _describe_failure(error: Exception) -> tuple[str, int | None, str | None]:
    """Extract a message, HTTP status and Genesys error code from a transport error."""
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        message = f"Request failed with status {status}"
        error_code = None
        try:
            payload = error.response.json()
        except ValueError:
            payload = None
        # Genesys error bodies look like {"message": ..., "code": ..., "status": ...}
        if isinstance(payload, dict):
            message = payload.get("message") or message
            error_code = payload.get("code")
        return message, status, error_code

    if isinstance(error, httpx.TimeoutException):
        return f"Request timed out: {error}", None, None

    if isinstance(error, httpx.RequestError):
        return f"Connection error: {error}", None, None

    return str(error) or error.__class__.__name__, None, None


async def api_request(
    session: SessionManager,
    method: str,
    path: str,
    body: RequestBody | None = None,
    query: Mapping[str, Any] | None = None,
    item_index: int | None = None,
) -> Any:
    """
    Make one authenticated request to the Genesys Cloud Platform API.

    Args:
        session: Session providing the region and the authenticated transport
        method: HTTP method (GET, POST, PUT, PATCH, DELETE)
        path: API path (e.g., /api/v2/routing/queues/{id})
        body: JSON body; omitted from the request when empty
        query: Query string parameters; omitted from the request when empty
        item_index: Index of the input item this call serves, for error context

    Returns:
        The decoded response payload, unmodified

    Raises:
        APIError: When the request fails for any reason
    """
    spec = RequestSpec(method=method, path=path, body=body or {}, query=query or {})
    try:
        url = f"https://api.{session.get_region()}{spec.path}"
        return await session.http_request(
            spec.method,
            url,
            headers=dict(JSON_HEADERS),
            json=spec.json_body(),
            params=spec.query_params(),
        )
    except Exception as e:
        message, status, error_code = _describe_failure(e)
        logger.warning(
            "api_request_failed",
            method=spec.method,
            path=spec.path,
            status=status,
            error=message,
            item_index=item_index,
        )
        raise APIError(
            message,
            cause=e,
            status=status,
            error_code=error_code,
            method=spec.method,
            path=spec.path,
            item_index=item_index,
        ) from e
