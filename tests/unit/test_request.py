"""Tests for the request primitive."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from genesys_mcp.core.exceptions import APIError, AuthenticationError
from genesys_mcp.execution.request import RequestSpec, api_request


def _status_error(status: int, payload: dict | None = None) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.mypurecloud.com/api/v2/users")
    response = httpx.Response(status, json=payload, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


class TestRequestSpec:
    """Tests for RequestSpec."""

    def test_method_is_uppercased(self) -> None:
        """Test that the method is normalized."""
        spec = RequestSpec("get", "/api/v2/users")
        assert spec.method == "GET"

    def test_empty_body_and_query_are_omitted(self) -> None:
        """Test that empty containers are not sent."""
        spec = RequestSpec("GET", "/api/v2/users", body={}, query={})
        assert spec.json_body() is None
        assert spec.query_params() is None

    def test_detached_from_caller_containers(self) -> None:
        """Test that mutating the caller's dict does not change the spec."""
        body = {"name": "Support"}
        query = {"pageNumber": 1}
        spec = RequestSpec("POST", "/api/v2/routing/queues", body=body, query=query)

        body["name"] = "Changed"
        query["pageNumber"] = 2

        assert spec.json_body() == {"name": "Support"}
        assert spec.query_params() == {"pageNumber": 1}

    def test_list_body(self) -> None:
        """Test that array bodies are sent as lists."""
        spec = RequestSpec("POST", "/x", body=[{"id": "u1"}, {"id": "u2"}])
        assert spec.json_body() == [{"id": "u1"}, {"id": "u2"}]


class TestApiRequest:
    """Tests for api_request."""

    @pytest.mark.asyncio
    async def test_builds_url_and_headers(self, mock_session_manager: MagicMock) -> None:
        """Test the transport call for a request with body and query."""
        mock_session_manager.http_request.return_value = {"id": "q1"}

        result = await api_request(
            mock_session_manager,
            "post",
            "/api/v2/routing/queues",
            {"name": "Support"},
            {"expand": "members"},
        )

        assert result == {"id": "q1"}
        mock_session_manager.http_request.assert_awaited_once_with(
            "POST",
            "https://api.mypurecloud.com/api/v2/routing/queues",
            headers={"Content-Type": "application/json"},
            json={"name": "Support"},
            params={"expand": "members"},
        )

    @pytest.mark.asyncio
    async def test_empty_body_and_query_not_sent(self, mock_session_manager: MagicMock) -> None:
        """Test that {} body and query are omitted from the transport call."""
        await api_request(mock_session_manager, "GET", "/api/v2/users/u1", {}, {})

        kwargs = mock_session_manager.http_request.await_args.kwargs
        assert kwargs["json"] is None
        assert kwargs["params"] is None

    @pytest.mark.asyncio
    async def test_response_returned_unmodified(self, mock_session_manager: MagicMock) -> None:
        """Test that the decoded payload is passed through as-is."""
        payload = {"entities": [{"id": 1}], "pageNumber": 1, "pageCount": 3}
        mock_session_manager.http_request.return_value = payload

        result = await api_request(mock_session_manager, "GET", "/api/v2/users")
        assert result is payload

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self, mock_session_manager: MagicMock) -> None:
        """Test that HTTP errors become APIError with status and Genesys code."""
        cause = _status_error(404, {"message": "Queue not found", "code": "not.found"})
        mock_session_manager.http_request.side_effect = cause

        with pytest.raises(APIError) as exc_info:
            await api_request(mock_session_manager, "GET", "/api/v2/routing/queues/q1", item_index=2)

        error = exc_info.value
        assert error.message == "Queue not found"
        assert error.status == 404
        assert error.details["error_code"] == "not.found"
        assert error.item_index == 2
        assert error.cause is cause
        assert error.__cause__ is cause

    @pytest.mark.asyncio
    async def test_http_error_without_json_body(self, mock_session_manager: MagicMock) -> None:
        """Test a failure whose body is not JSON."""
        request = httpx.Request("GET", "https://api.mypurecloud.com/x")
        response = httpx.Response(502, text="Bad Gateway", request=request)
        mock_session_manager.http_request.side_effect = httpx.HTTPStatusError(
            "bad gateway", request=request, response=response
        )

        with pytest.raises(APIError) as exc_info:
            await api_request(mock_session_manager, "GET", "/x")

        assert exc_info.value.status == 502
        assert "502" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connection_error_wrapped(self, mock_session_manager: MagicMock) -> None:
        """Test that transport errors are wrapped too."""
        mock_session_manager.http_request.side_effect = httpx.ConnectError("refused")

        with pytest.raises(APIError) as exc_info:
            await api_request(mock_session_manager, "GET", "/x")

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_authentication_error_wrapped(self, mock_session_manager: MagicMock) -> None:
        """Test that a failed token request surfaces as APIError."""
        mock_session_manager.http_request = AsyncMock(
            side_effect=AuthenticationError("no credentials")
        )

        with pytest.raises(APIError) as exc_info:
            await api_request(mock_session_manager, "GET", "/x")

        assert isinstance(exc_info.value.cause, AuthenticationError)
