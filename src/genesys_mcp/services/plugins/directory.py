"""Directory resource plugins (users, groups, divisions)."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from genesys_mcp.config import OperationCategory
from genesys_mcp.execution.client import GenesysClient
from genesys_mcp.services.base import (
    BaseResource,
    ListParams,
    OperationParams,
    OperationSpec,
    path_id,
    register_resource,
)

USERS_PATH = "/api/v2/users"
GROUPS_PATH = "/api/v2/groups"
DIVISIONS_PATH = "/api/v2/authorization/divisions"


# === Users ===


class UserOperation(str, Enum):
    """Operations on users."""

    GET = "get"
    GET_ALL = "getAll"
    GET_QUEUES = "getQueues"


class UserIdParams(OperationParams):
    user_id: str = Field(..., alias="userId", min_length=1)


class UserQueuesParams(ListParams, UserIdParams):
    pass


@register_resource
class UserResource(BaseResource):
    """Genesys Cloud user plugin."""

    resource_name = "user"
    display_name = "User"
    operations = UserOperation

    def get_operations(self) -> list[OperationSpec]:
        return [
            OperationSpec(
                name=UserOperation.GET,
                description="Get a user by ID",
                category=OperationCategory.READ,
                params_model=UserIdParams,
                handler=self.get,
            ),
            OperationSpec(
                name=UserOperation.GET_ALL,
                description="List users",
                category=OperationCategory.READ,
                params_model=ListParams,
                handler=self.get_all,
            ),
            OperationSpec(
                name=UserOperation.GET_QUEUES,
                description="List the queues a user belongs to",
                category=OperationCategory.READ,
                params_model=UserQueuesParams,
                handler=self.get_queues,
            ),
        ]

    async def get(self, client: GenesysClient, params: UserIdParams) -> Any:
        return await client.request("GET", f"{USERS_PATH}/{path_id(params.user_id)}")

    async def get_all(self, client: GenesysClient, params: ListParams) -> list[Any]:
        return await client.request_all_items(
            "entities",
            "GET",
            USERS_PATH,
            {},
            dict(params.options),
            params.effective_limit,
        )

    async def get_queues(self, client: GenesysClient, params: UserQueuesParams) -> list[Any]:
        return await client.request_all_items(
            "entities",
            "GET",
            f"{USERS_PATH}/{path_id(params.user_id)}/queues",
            {},
            dict(params.options),
            params.effective_limit,
        )


# === Groups ===


class GroupOperation(str, Enum):
    """Operations on groups."""

    GET = "get"
    GET_ALL = "getAll"


class GroupIdParams(OperationParams):
    group_id: str = Field(..., alias="groupId", min_length=1)


@register_resource
class GroupResource(BaseResource):
    """Genesys Cloud group plugin."""

    resource_name = "group"
    display_name = "Group"
    operations = GroupOperation

    def get_operations(self) -> list[OperationSpec]:
        return [
            OperationSpec(
                name=GroupOperation.GET,
                description="Get a group by ID",
                category=OperationCategory.READ,
                params_model=GroupIdParams,
                handler=self.get,
            ),
            OperationSpec(
                name=GroupOperation.GET_ALL,
                description="List groups",
                category=OperationCategory.READ,
                params_model=ListParams,
                handler=self.get_all,
            ),
        ]

    async def get(self, client: GenesysClient, params: GroupIdParams) -> Any:
        return await client.request("GET", f"{GROUPS_PATH}/{path_id(params.group_id)}")

    async def get_all(self, client: GenesysClient, params: ListParams) -> list[Any]:
        return await client.request_all_items(
            "entities",
            "GET",
            GROUPS_PATH,
            {},
            dict(params.options),
            params.effective_limit,
        )


# === Divisions ===


class DivisionOperation(str, Enum):
    """Operations on authorization divisions."""

    GET = "get"
    GET_ALL = "getAll"


class DivisionIdParams(OperationParams):
    division_id: str = Field(..., alias="divisionId", min_length=1)


@register_resource
class DivisionResource(BaseResource):
    """Genesys Cloud authorization division plugin."""

    resource_name = "division"
    display_name = "Division"
    operations = DivisionOperation

    def get_operations(self) -> list[OperationSpec]:
        return [
            OperationSpec(
                name=DivisionOperation.GET,
                description="Get a division by ID",
                category=OperationCategory.READ,
                params_model=DivisionIdParams,
                handler=self.get,
            ),
            OperationSpec(
                name=DivisionOperation.GET_ALL,
                description="List divisions",
                category=OperationCategory.READ,
                params_model=ListParams,
                handler=self.get_all,
            ),
        ]

    async def get(self, client: GenesysClient, params: DivisionIdParams) -> Any:
        return await client.request("GET", f"{DIVISIONS_PATH}/{path_id(params.division_id)}")

    async def get_all(self, client: GenesysClient, params: ListParams) -> list[Any]:
        query = dict(params.options)
        # The id filter is entered comma-separated but sent as repeated keys
        if isinstance(query.get("id"), str):
            query["id"] = [value.strip() for value in query["id"].split(",") if value.strip()]
        return await client.request_all_items(
            "entities",
            "GET",
            DIVISIONS_PATH,
            {},
            query,
            params.effective_limit,
        )
