"""Tests for the user, group and division plugins."""

from unittest.mock import MagicMock

import pytest

from genesys_mcp.core.exceptions import ValidationError
from genesys_mcp.services.plugins.directory import DivisionResource, GroupResource, UserResource


class TestUserResource:
    """Tests for UserResource."""

    @pytest.mark.asyncio
    async def test_get(self, mock_client: MagicMock) -> None:
        """Test fetching one user."""
        mock_client.request.return_value = {"id": "u1", "name": "Ada"}

        result = await UserResource(mock_client).execute("get", {"userId": "u1"})

        assert result == [{"id": "u1", "name": "Ada"}]
        mock_client.request.assert_awaited_once_with("GET", "/api/v2/users/u1")

    @pytest.mark.asyncio
    async def test_get_escapes_id(self, mock_client: MagicMock) -> None:
        """Test that the ID is trimmed and escaped as one path segment."""
        await UserResource(mock_client).execute("get", {"userId": " a/b "})

        mock_client.request.assert_awaited_once_with("GET", "/api/v2/users/a%2Fb")

    @pytest.mark.asyncio
    async def test_get_requires_id(self, mock_client: MagicMock) -> None:
        """Test that userId is required."""
        with pytest.raises(ValidationError) as exc_info:
            await UserResource(mock_client).execute("get", {})

        assert exc_info.value.details["field"] == "userId"

    @pytest.mark.asyncio
    async def test_get_all_forwards_options(self, mock_client: MagicMock) -> None:
        """Test that options go to the query string."""
        mock_client.request_all_items.return_value = [{"id": "u1"}]
        options = {"state": "active", "expand": "presence"}

        result = await UserResource(mock_client).execute(
            "getAll", {"returnAll": False, "limit": 5, "options": options}
        )

        assert result == [{"id": "u1"}]
        mock_client.request_all_items.assert_awaited_once_with(
            "entities", "GET", "/api/v2/users", {}, options, 5
        )

    @pytest.mark.asyncio
    async def test_get_queues(self, mock_client: MagicMock) -> None:
        """Test listing the queues of a user."""
        await UserResource(mock_client).execute("getQueues", {"userId": "u1", "returnAll": True})

        mock_client.request_all_items.assert_awaited_once_with(
            "entities", "GET", "/api/v2/users/u1/queues", {}, {}, 0
        )


class TestGroupResource:
    """Tests for GroupResource."""

    @pytest.mark.asyncio
    async def test_get(self, mock_client: MagicMock) -> None:
        """Test fetching one group."""
        await GroupResource(mock_client).execute("get", {"groupId": "g1"})

        mock_client.request.assert_awaited_once_with("GET", "/api/v2/groups/g1")

    @pytest.mark.asyncio
    async def test_get_all(self, mock_client: MagicMock) -> None:
        """Test listing groups."""
        mock_client.request_all_items.return_value = [{"id": "g1"}, {"id": "g2"}]

        result = await GroupResource(mock_client).execute("getAll", {"returnAll": True})

        assert result == [{"id": "g1"}, {"id": "g2"}]
        mock_client.request_all_items.assert_awaited_once_with(
            "entities", "GET", "/api/v2/groups", {}, {}, 0
        )


class TestDivisionResource:
    """Tests for DivisionResource."""

    @pytest.mark.asyncio
    async def test_get(self, mock_client: MagicMock) -> None:
        """Test fetching one division."""
        await DivisionResource(mock_client).execute("get", {"divisionId": "d1"})

        mock_client.request.assert_awaited_once_with("GET", "/api/v2/authorization/divisions/d1")

    @pytest.mark.asyncio
    async def test_get_all_splits_ids(self, mock_client: MagicMock) -> None:
        """Test that a comma-separated id filter becomes a list."""
        await DivisionResource(mock_client).execute(
            "getAll", {"limit": 20, "options": {"id": "d1, d2", "name": "Home"}}
        )

        mock_client.request_all_items.assert_awaited_once_with(
            "entities",
            "GET",
            "/api/v2/authorization/divisions",
            {},
            {"id": ["d1", "d2"], "name": "Home"},
            20,
        )

    @pytest.mark.asyncio
    async def test_get_all_without_filters(self, mock_client: MagicMock) -> None:
        """Test listing divisions with no options."""
        await DivisionResource(mock_client).execute("getAll", {"returnAll": True})

        assert mock_client.request_all_items.await_args.args[4] == {}
