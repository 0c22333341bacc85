"""Routing resource plugins (queues)."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import Field, field_validator

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

QUEUES_PATH = "/api/v2/routing/queues"


class QueueOperation(str, Enum):
    """Operations on routing queues."""

    CREATE = "create"
    GET = "get"
    GET_ALL = "getAll"
    GET_MEMBERS = "getMembers"
    ADD_MEMBERS = "addMembers"


class QueueCreateParams(OperationParams):
    name: str = Field(..., min_length=1)
    description: str = ""
    division_id: str = Field("", alias="divisionId")
    additional_fields: dict[str, Any] = Field(default_factory=dict, alias="additionalFields")


class QueueIdParams(OperationParams):
    queue_id: str = Field(..., alias="queueId", min_length=1)


class QueueMembersParams(ListParams, QueueIdParams):
    pass


class QueueAddMembersParams(QueueIdParams):
    user_ids: list[str] = Field(..., alias="userIds")

    @field_validator("user_ids", mode="before")
    @classmethod
    def split_user_ids(cls, value: Union[str, list[str]]) -> list[str]:
        """Accept a list or a comma-separated string; drop blanks."""
        if isinstance(value, str):
            value = value.split(",")
        ids = [str(user_id).strip() for user_id in value if str(user_id).strip()]
        if not ids:
            raise ValueError("at least one user ID is required")
        return ids


@register_resource
class QueueResource(BaseResource):
    """Genesys Cloud routing queue plugin."""

    resource_name = "queue"
    display_name = "Queue"
    operations = QueueOperation

    def get_operations(self) -> list[OperationSpec]:
        return [
            OperationSpec(
                name=QueueOperation.CREATE,
                description="Create a queue",
                category=OperationCategory.WRITE,
                params_model=QueueCreateParams,
                handler=self.create,
            ),
            OperationSpec(
                name=QueueOperation.GET,
                description="Get a queue by ID",
                category=OperationCategory.READ,
                params_model=QueueIdParams,
                handler=self.get,
            ),
            OperationSpec(
                name=QueueOperation.GET_ALL,
                description="List queues",
                category=OperationCategory.READ,
                params_model=ListParams,
                handler=self.get_all,
            ),
            OperationSpec(
                name=QueueOperation.GET_MEMBERS,
                description="List the members of a queue",
                category=OperationCategory.READ,
                params_model=QueueMembersParams,
                handler=self.get_members,
            ),
            OperationSpec(
                name=QueueOperation.ADD_MEMBERS,
                description="Add users to a queue",
                category=OperationCategory.WRITE,
                params_model=QueueAddMembersParams,
                handler=self.add_members,
            ),
        ]

    async def create(self, client: GenesysClient, params: QueueCreateParams) -> Any:
        body: dict[str, Any] = {"name": params.name}
        if params.description:
            body["description"] = params.description
        if params.division_id:
            body["division"] = {"id": params.division_id}
        body.update(params.additional_fields)
        return await client.request("POST", QUEUES_PATH, body)

    async def get(self, client: GenesysClient, params: QueueIdParams) -> Any:
        return await client.request("GET", f"{QUEUES_PATH}/{path_id(params.queue_id)}")

    async def get_all(self, client: GenesysClient, params: ListParams) -> list[Any]:
        return await client.request_all_items(
            "entities",
            "GET",
            QUEUES_PATH,
            {},
            dict(params.options),
            params.effective_limit,
        )

    async def get_members(self, client: GenesysClient, params: QueueMembersParams) -> list[Any]:
        return await client.request_all_items(
            "entities",
            "GET",
            f"{QUEUES_PATH}/{path_id(params.queue_id)}/members",
            {},
            dict(params.options),
            params.effective_limit,
        )

    async def add_members(self, client: GenesysClient, params: QueueAddMembersParams) -> Any:
        members = [{"id": user_id} for user_id in params.user_ids]
        return await client.request(
            "POST",
            f"{QUEUES_PATH}/{path_id(params.queue_id)}/members",
            members,
        )
