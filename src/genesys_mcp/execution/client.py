"""Genesys Cloud API client used by the resource plugins."""

from __future__ import annotations

from typing import Any, Mapping

from genesys_mcp.core.session import SessionManager, get_session_manager
from genesys_mcp.execution.pagination import PaginationHandler, PaginationLocation
from genesys_mcp.execution.request import RequestBody, api_request


class GenesysClient:
    """Binds the request and pagination primitives to one session and input item."""

    def __init__(
        self,
        session_manager: SessionManager | None = None,
        item_index: int | None = None,
    ) -> None:
        self.session_manager = session_manager or get_session_manager()
        self.item_index = item_index

    def for_item(self, item_index: int) -> "GenesysClient":
        """Return a client whose errors carry the given item index."""
        return GenesysClient(self.session_manager, item_index=item_index)

    async def request(
        self,
        method: str,
        path: str,
        body: RequestBody | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """Make a single API request."""
        return await api_request(
            self.session_manager,
            method,
            path,
            body,
            query,
            item_index=self.item_index,
        )

    async def request_all_items(
        self,
        items_field: str,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        limit: int = 0,
        pagination_location: PaginationLocation | str = PaginationLocation.QUERY,
    ) -> list[Any]:
        """Fetch every page of a list endpoint (see ``PaginationHandler``)."""
        handler = PaginationHandler(self.request)
        return await handler.request_all_items(
            items_field,
            method,
            path,
            body,
            query,
            limit,
            pagination_location,
        )

    async def get_token_info(self) -> dict[str, Any]:
        """Describe the token in use; doubles as a credential check."""
        return await self.request("GET", "/api/v2/tokens/me")
