"""Pagination handling for Genesys Cloud API calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

import structlog

from genesys_mcp.core.exceptions import ValidationError
from genesys_mcp.core.session import SessionManager
from genesys_mcp.execution.request import RequestBody, RequestSpec, api_request

logger = structlog.get_logger()

# Page size sent with body-embedded paging
PAGE_SIZE = 25

RequestFn = Callable[[str, str, Optional[RequestBody], Optional[Mapping[str, Any]]], Awaitable[Any]]


class PaginationLocation(str, Enum):
    """Where the page-number token travels."""

    QUERY = "query"  # ?pageNumber=N
    BODY = "body"  # {"paging": {"pageSize": 25, "pageNumber": N}}


@dataclass
class PaginationState:
    """Mutable state of one paged fetch."""

    page_number: int = 1
    cursor: str | None = None
    items: list[Any] = field(default_factory=list)
    pages: int = 0

    def advance(self, page: Any) -> bool:
        """Move to the next page if the response says there is one.

        A cursor takes precedence over page-count hints.
        """
        if not isinstance(page, Mapping):
            return False

        cursor = page.get("cursor")
        if cursor:
            self.cursor = cursor
            return True

        page_count = page.get("pageCount")
        page_number = page.get("pageNumber")
        if page_count and page_number and page_number < page_count:
            self.page_number += 1
            self.cursor = None
            return True

        return False


def build_page_request(
    method: str,
    path: str,
    body: Mapping[str, Any],
    query: Mapping[str, Any],
    state: PaginationState,
    location: PaginationLocation,
) -> RequestSpec:
    """Derive the request for the current page from the caller's original body and query."""
    if state.cursor is not None:
        # Cursors always travel in the query string
        return RequestSpec(method, path, body=body, query={**query, "cursor": state.cursor})

    if location is PaginationLocation.BODY:
        paging = {"pageSize": PAGE_SIZE, "pageNumber": state.page_number}
        return RequestSpec(method, path, body={**body, "paging": paging}, query=query)

    return RequestSpec(method, path, body=body, query={**query, "pageNumber": state.page_number})


def extract_items(page: Any, items_field: str) -> list[Any]:
    """Return the items array of a page, or an empty list when it is missing."""
    if not isinstance(page, Mapping):
        return []
    items = page.get(items_field)
    return items if isinstance(items, list) else []


class PaginationHandler:
    """Walks every page of a Genesys Cloud list endpoint."""

    def __init__(self, request: RequestFn) -> None:
        """
        Initialize the pagination handler.

        Args:
            request: Request primitive called once per page as
                ``request(method, path, body, query)``
        """
        self._request = request

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
        """
        Fetch pages until the limit is reached or no page is left.

        Args:
            items_field: Response field holding the items (e.g. 'entities')
            method: HTTP method
            path: API path
            body: Caller's request body, never modified
            query: Caller's query parameters, never modified
            limit: Maximum number of items to return (0 = unlimited)
            pagination_location: Where to send the page number: 'query' or 'body'

        Returns:
            Items of all fetched pages, in page order
        """
        if limit < 0:
            raise ValidationError(
                f"Limit must be zero or positive, got {limit}",
                field="limit",
                expected=">= 0",
                received=str(limit),
            )

        try:
            location = PaginationLocation(pagination_location)
        except ValueError as e:
            raise ValidationError(
                f"Unknown pagination location: {pagination_location}",
                field="pagination_location",
                expected=", ".join(loc.value for loc in PaginationLocation),
                received=str(pagination_location),
            ) from e
        original_body = dict(body or {})
        original_query = dict(query or {})
        state = PaginationState()

        while True:
            spec = build_page_request(method, path, original_body, original_query, state, location)
            page = await self._request(spec.method, spec.path, spec.json_body(), spec.query_params())
            state.pages += 1

            page_items = extract_items(page, items_field)
            state.items.extend(page_items)
            logger.debug(
                "page_fetched",
                path=path,
                page=state.pages,
                page_number=state.page_number,
                cursor=state.cursor is not None,
                page_items=len(page_items),
            )

            if limit > 0 and len(state.items) >= limit:
                del state.items[limit:]
                logger.info(
                    "pagination_truncated",
                    reason="limit",
                    path=path,
                    pages=state.pages,
                    items=len(state.items),
                )
                break

            if not state.advance(page):
                break

        logger.debug(
            "pagination_complete",
            path=path,
            pages=state.pages,
            total_items=len(state.items),
        )
        return state.items


# Convenience function
async def api_request_all_items(
    session: SessionManager,
    items_field: str,
    method: str,
    path: str,
    body: Mapping[str, Any] | None = None,
    query: Mapping[str, Any] | None = None,
    limit: int = 0,
    pagination_location: PaginationLocation | str = PaginationLocation.QUERY,
    item_index: int | None = None,
) -> list[Any]:
    """
    Fetch all items of a paginated endpoint through ``api_request``.

    Args:
        session: Session providing the region and the authenticated transport
        items_field: Response field holding the items
        method: HTTP method
        path: API path
        body: Request body
        query: Query parameters
        limit: Maximum number of items to return (0 = unlimited)
        pagination_location: Where to send the page number
        item_index: Index of the input item, for error context

    Returns:
        List of all items
    """

    async def request(
        method: str,
        path: str,
        body: RequestBody | None,
        query: Mapping[str, Any] | None,
    ) -> Any:
        return await api_request(session, method, path, body, query, item_index=item_index)

    handler = PaginationHandler(request)
    return await handler.request_all_items(
        items_field, method, path, body, query, limit, pagination_location
    )
