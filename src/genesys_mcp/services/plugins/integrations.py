"""Integration resource plugins (OAuth clients, data actions)."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any

import structlog
from pydantic import Field, model_validator

from genesys_mcp.config import OperationCategory, get_config
from genesys_mcp.core.exceptions import JobTimeoutError, RemoteJobError
from genesys_mcp.execution.client import GenesysClient
from genesys_mcp.services.base import (
    BaseResource,
    ListParams,
    OperationParams,
    OperationSpec,
    path_id,
    register_resource,
)
from genesys_mcp.services.intervals import build_interval

logger = structlog.get_logger()

OAUTH_CLIENTS_PATH = "/api/v2/oauth/clients"
ACTIONS_PATH = "/api/v2/integrations/actions"
INTEGRATIONS_PATH = "/api/v2/integrations"

DEFAULT_USAGE_METRICS = ["Requests"]
DEFAULT_USAGE_GROUP_BY = ["TemplateUri", "HttpMethod"]


# === OAuth clients ===


class OAuthClientOperation(str, Enum):
    """Operations on OAuth clients."""

    GET = "get"
    GET_ALL = "getAll"
    GET_USAGE = "getUsage"


class OAuthClientIdParams(OperationParams):
    oauth_client_id: str = Field(..., alias="oauthClientId", min_length=1)


class OAuthClientUsageParams(OAuthClientIdParams):
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")
    metrics: list[str] = Field(default_factory=lambda: list(DEFAULT_USAGE_METRICS))
    group_by: list[str] = Field(
        default_factory=lambda: list(DEFAULT_USAGE_GROUP_BY), alias="groupBy"
    )
    granularity: str | None = None

    @model_validator(mode="before")
    @classmethod
    def lift_options(cls, data: Any) -> Any:
        """Accept metrics, groupBy and granularity inside ``options`` too."""
        if isinstance(data, dict) and isinstance(data.get("options"), dict):
            data = {**data["options"], **{k: v for k, v in data.items() if k != "options"}}
        return data


def summarize_usage(start_date: str, end_date: str, results: list[dict[str, Any]]) -> dict[str, Any]:
    """Condense usage rows into totals and a per-endpoint breakdown."""
    total = sum(row.get("requests") or 0 for row in results)
    per_endpoint = [
        {
            "endpoint": " ".join(
                part for part in (row.get("httpMethod"), row.get("templateUri")) if part
            ),
            "requests": row.get("requests"),
        }
        for row in results
    ]
    return {
        "startDate": start_date,
        "endDate": end_date,
        "totalRequests": total,
        "requestsPerEndpoint": per_endpoint,
    }


@register_resource
class OAuthClientResource(BaseResource):
    """Genesys Cloud OAuth client plugin."""

    resource_name = "oauthClient"
    display_name = "OAuth Client"
    operations = OAuthClientOperation

    def get_operations(self) -> list[OperationSpec]:
        return [
            OperationSpec(
                name=OAuthClientOperation.GET,
                description="Get an OAuth client by ID",
                category=OperationCategory.READ,
                params_model=OAuthClientIdParams,
                handler=self.get,
            ),
            OperationSpec(
                name=OAuthClientOperation.GET_ALL,
                description="List OAuth clients",
                category=OperationCategory.READ,
                params_model=ListParams,
                handler=self.get_all,
            ),
            OperationSpec(
                name=OAuthClientOperation.GET_USAGE,
                description="Summarize API usage of an OAuth client over a date interval",
                category=OperationCategory.READ,
                params_model=OAuthClientUsageParams,
                handler=self.get_usage,
            ),
        ]

    async def get(self, client: GenesysClient, params: OAuthClientIdParams) -> Any:
        return await client.request(
            "GET", f"{OAUTH_CLIENTS_PATH}/{path_id(params.oauth_client_id)}"
        )

    async def get_all(self, client: GenesysClient, params: ListParams) -> list[Any]:
        return await client.request_all_items(
            "entities",
            "GET",
            OAUTH_CLIENTS_PATH,
            {},
            dict(params.options),
            params.effective_limit,
        )

    async def get_usage(self, client: GenesysClient, params: OAuthClientUsageParams) -> dict[str, Any]:
        """Submit a usage query and poll until the results are ready.

        Raises:
            RemoteJobError: If no execution ID is returned or the query fails
            JobTimeoutError: If the query is still running after the last poll
        """
        config = get_config()
        client_id = params.oauth_client_id
        usage_path = f"{OAUTH_CLIENTS_PATH}/{path_id(client_id)}/usage/query"

        body: dict[str, Any] = {
            "interval": build_interval(params.start_date, params.end_date, client.item_index),
            "metrics": params.metrics or list(DEFAULT_USAGE_METRICS),
            "groupBy": params.group_by or list(DEFAULT_USAGE_GROUP_BY),
        }
        if params.granularity:
            body["granularity"] = params.granularity

        submitted = await client.request("POST", usage_path, body)
        execution_id = submitted.get("executionId") if isinstance(submitted, dict) else None
        if not execution_id:
            raise RemoteJobError(
                f"Failed to submit usage query for OAuth client {client_id}. "
                "No executionId returned.",
                item_index=client.item_index,
            )

        logger.info("usage_query_submitted", oauth_client_id=client_id, execution_id=execution_id)

        results_path = f"{usage_path}/results/{path_id(execution_id)}"
        for attempt in range(1, config.usage_poll_max_attempts + 1):
            result = await client.request("GET", results_path)
            if not isinstance(result, dict):
                raise RemoteJobError(
                    f"Unexpected usage query response for OAuth client {client_id}.",
                    job_id=execution_id,
                    item_index=client.item_index,
                )
            status = str(result.get("queryStatus") or "").upper()

            if status == "COMPLETE":
                logger.info("usage_query_complete", execution_id=execution_id, attempts=attempt)
                return summarize_usage(
                    params.start_date, params.end_date, result.get("results") or []
                )

            if status == "FAILED":
                raise RemoteJobError(
                    f"Usage query failed for OAuth client {client_id}.",
                    job_id=execution_id,
                    status=status,
                    item_index=client.item_index,
                )

            logger.debug("usage_query_pending", execution_id=execution_id, status=status, attempt=attempt)
            if attempt < config.usage_poll_max_attempts:
                await asyncio.sleep(config.usage_poll_interval_seconds)

        raise JobTimeoutError(
            f"Timeout waiting for usage query to complete for OAuth client {client_id}.",
            job_id=execution_id,
            attempts=config.usage_poll_max_attempts,
            item_index=client.item_index,
        )


# === Data actions ===


class DataActionOperation(str, Enum):
    """Operations on integration data actions."""

    GET = "get"
    GET_ALL = "getAll"
    GET_INTEGRATIONS = "getIntegrations"


class DataActionIdParams(OperationParams):
    action_id: str = Field(..., alias="actionId", min_length=1)


@register_resource
class DataActionResource(BaseResource):
    """Genesys Cloud data action plugin.

    ``getAll`` forwards ``ids``, ``category``, ``includeAuthActions``,
    ``name``, ``secure``, ``sortBy`` and ``sortOrder`` to the query string.
    """

    resource_name = "dataAction"
    display_name = "Data Action"
    operations = DataActionOperation

    def get_operations(self) -> list[OperationSpec]:
        return [
            OperationSpec(
                name=DataActionOperation.GET,
                description="Get a data action by ID",
                category=OperationCategory.READ,
                params_model=DataActionIdParams,
                handler=self.get,
            ),
            OperationSpec(
                name=DataActionOperation.GET_ALL,
                description="List data actions",
                category=OperationCategory.READ,
                params_model=ListParams,
                handler=self.get_all,
            ),
            OperationSpec(
                name=DataActionOperation.GET_INTEGRATIONS,
                description="List integrations",
                category=OperationCategory.READ,
                params_model=ListParams,
                handler=self.get_integrations,
            ),
        ]

    async def get(self, client: GenesysClient, params: DataActionIdParams) -> Any:
        return await client.request("GET", f"{ACTIONS_PATH}/{path_id(params.action_id)}")

    async def get_all(self, client: GenesysClient, params: ListParams) -> list[Any]:
        query = dict(params.options)
        # "any" is the unfiltered default and is not a value the API accepts
        if query.get("secure") == "any":
            del query["secure"]
        return await client.request_all_items(
            "entities",
            "GET",
            ACTIONS_PATH,
            {},
            query,
            params.effective_limit,
        )

    async def get_integrations(self, client: GenesysClient, params: ListParams) -> list[Any]:
        return await client.request_all_items(
            "entities",
            "GET",
            INTEGRATIONS_PATH,
            {},
            dict(params.options),
            params.effective_limit,
        )
