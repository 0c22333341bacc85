"""Conversation resource plugin."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from genesys_mcp.config import OperationCategory
from genesys_mcp.core.exceptions import ValidationError
from genesys_mcp.execution.client import GenesysClient
from genesys_mcp.execution.pagination import PaginationLocation
from genesys_mcp.services.base import (
    BaseResource,
    ListParams,
    OperationParams,
    OperationSpec,
    path_id,
    register_resource,
)
from genesys_mcp.services.intervals import build_interval

CONVERSATIONS_PATH = "/api/v2/conversations"
DETAILS_QUERY_PATH = "/api/v2/analytics/conversations/details/query"


class ConversationOperation(str, Enum):
    """Operations on conversations."""

    GET = "get"
    GET_ALL = "getAll"


class ConversationIdParams(OperationParams):
    conversation_id: str = Field(..., alias="conversationId", min_length=1)


class ConversationQueryParams(ListParams):
    """Analytics details query over a date interval.

    ``options`` carries ``order``, ``orderBy`` and ``segmentFilters``; the
    latter is ``{"filters": [{"dimension", "operator", "value"}]}``.
    """

    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")


def build_segment_filters(
    options: dict[str, Any], item_index: int | None = None
) -> list[dict[str, Any]] | None:
    """Turn the ``segmentFilters`` option into an analytics filter clause.

    Returns None when no filter is set. The value is sent only for the
    ``matches`` operator.

    Raises:
        ValidationError: If a filter entry is not an object
    """
    segment_filters = options.get("segmentFilters") or {}
    filters = segment_filters.get("filters") if isinstance(segment_filters, dict) else None
    if not filters:
        return None

    predicates = []
    for entry in filters:
        if not isinstance(entry, dict):
            raise ValidationError(
                "Each segment filter must be an object with dimension, operator and value",
                field="options.segmentFilters.filters",
                received=repr(entry),
                item_index=item_index,
            )
        predicate: dict[str, Any] = {
            "type": "dimension",
            "dimension": entry.get("dimension"),
            "operator": entry.get("operator"),
        }
        if entry.get("operator") == "matches" and entry.get("value"):
            predicate["value"] = entry["value"]
        predicates.append(predicate)

    return [{"type": "and", "predicates": predicates}]


@register_resource
class ConversationResource(BaseResource):
    """Genesys Cloud conversation plugin."""

    resource_name = "conversation"
    display_name = "Conversation"
    operations = ConversationOperation

    def get_operations(self) -> list[OperationSpec]:
        return [
            OperationSpec(
                name=ConversationOperation.GET,
                description="Get a conversation by ID",
                category=OperationCategory.READ,
                params_model=ConversationIdParams,
                handler=self.get,
            ),
            OperationSpec(
                name=ConversationOperation.GET_ALL,
                description="Query conversation details over a date interval",
                category=OperationCategory.READ,
                params_model=ConversationQueryParams,
                handler=self.get_all,
            ),
        ]

    async def get(self, client: GenesysClient, params: ConversationIdParams) -> Any:
        return await client.request(
            "GET", f"{CONVERSATIONS_PATH}/{path_id(params.conversation_id)}"
        )

    async def get_all(self, client: GenesysClient, params: ConversationQueryParams) -> list[Any]:
        interval = build_interval(params.start_date, params.end_date, client.item_index)
        options = params.options

        body: dict[str, Any] = {"interval": interval}
        if options.get("order"):
            body["order"] = options["order"]
        if options.get("orderBy"):
            body["orderBy"] = options["orderBy"]

        segment_filters = build_segment_filters(options, client.item_index)
        if segment_filters:
            body["segmentFilters"] = segment_filters

        return await client.request_all_items(
            "conversations",
            "POST",
            DETAILS_QUERY_PATH,
            body,
            {},
            params.effective_limit,
            pagination_location=PaginationLocation.BODY,
        )
