"""Base resource plugin interface for Genesys Cloud MCP."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable
from urllib.parse import quote

import pydantic
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from genesys_mcp.config import OperationCategory, get_config
from genesys_mcp.core.exceptions import ValidationError
from genesys_mcp.execution.client import GenesysClient

logger = structlog.get_logger()


# === Parameter Models ===


class OperationParams(BaseModel):
    """Parameters of one operation call.

    Fields use the connector's camelCase parameter names as aliases
    (``queueId``, ``returnAll``); snake_case names are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ListParams(OperationParams):
    """Parameters shared by every "get many" operation."""

    return_all: bool = Field(False, alias="returnAll", description="Return every item")
    limit: int = Field(
        default_factory=lambda: get_config().default_limit,
        description="Maximum number of items when return_all is false",
    )
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra filters forwarded to the query string",
    )

    @field_validator("limit")
    @classmethod
    def check_limit(cls, value: int, info: ValidationInfo) -> int:
        """Require a positive limit unless every item is requested."""
        if value < 1 and not info.data.get("return_all"):
            raise ValueError("Input should be greater than or equal to 1")
        return value

    @property
    def effective_limit(self) -> int:
        """Limit handed to the pagination engine (0 = unlimited)."""
        return 0 if self.return_all else self.limit


Handler = Callable[[GenesysClient, Any], Awaitable[Any]]


@dataclass
class OperationSpec:
    """Specification for a resource operation."""

    name: Enum
    description: str
    category: OperationCategory
    params_model: type[OperationParams]
    handler: Handler


def path_id(value: str) -> str:
    """Escape an identifier for use as a single path segment."""
    return quote(value.strip(), safe="")


class BaseResource(ABC):
    """Abstract base class for Genesys Cloud resource plugins.

    Each plugin declares a closed set of operations and maps each one to a
    parameter model and a handler coroutine.

    Example:
        class GroupResource(BaseResource):
            resource_name = "group"
            display_name = "Group"
            operations = GroupOperation

            def get_operations(self) -> list[OperationSpec]:
                return [
                    OperationSpec(
                        name=GroupOperation.GET,
                        description="Get a group by ID",
                        category=OperationCategory.READ,
                        params_model=GroupGetParams,
                        handler=self.get,
                    ),
                ]
    """

    resource_name: str
    display_name: str
    operations: type[Enum]

    def __init__(self, client: GenesysClient):
        """Initialize the resource with an API client."""
        self.client = client

    @abstractmethod
    def get_operations(self) -> list[OperationSpec]:
        """Return list of supported operations for this resource."""
        ...

    def get_operation(self, name: str) -> OperationSpec | None:
        """Get a specific operation by name."""
        try:
            operation = self.operations(name)
        except ValueError:
            return None
        for op in self.get_operations():
            if op.name is operation:
                return op
        return None

    def supports_operation(self, name: str) -> bool:
        """Check if an operation is supported."""
        return self.get_operation(name) is not None

    def parse_params(
        self,
        op_spec: OperationSpec,
        parameters: dict[str, Any],
        item_index: int | None = None,
    ) -> OperationParams:
        """Validate raw parameters into the operation's model."""
        try:
            return op_spec.params_model.model_validate(parameters)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            field_name = ".".join(str(loc) for loc in first["loc"]) or None
            raise ValidationError(
                f"Invalid parameter '{field_name}' for {self.resource_name}.{op_spec.name.value}: {first['msg']}",
                field=field_name,
                received=repr(first.get("input")),
                item_index=item_index,
            ) from e

    async def execute(
        self,
        operation: str,
        parameters: dict[str, Any] | None = None,
        item_index: int = 0,
    ) -> list[Any]:
        """Execute an operation for one input item.

        Args:
            operation: The operation name (e.g., 'getAll')
            parameters: Operation parameters of this item
            item_index: Position of the item in the batch

        Returns:
            Result records; empty when the operation is not supported
        """
        parameters = parameters or {}
        op_spec = self.get_operation(operation)

        if not op_spec:
            logger.warning(
                "operation_not_supported",
                resource=self.resource_name,
                operation=operation,
            )
            return []

        params = self.parse_params(op_spec, parameters, item_index)
        client = self.client.for_item(item_index)
        result = await op_spec.handler(client, params)

        records = _as_records(result)
        logger.info(
            "operation_executed",
            resource=self.resource_name,
            operation=operation,
            item_index=item_index,
            count=len(records),
        )
        return records


def _as_records(result: Any) -> list[Any]:
    """Normalize a handler result into a list of records."""
    if result is None:
        return []
    if isinstance(result, list):
        return result
    return [result]


class ResourceRegistry:
    """Registry for resource plugins."""

    _resources: dict[str, type[BaseResource]] = {}

    @classmethod
    def register(cls, resource_class: type[BaseResource]) -> type[BaseResource]:
        """Register a resource plugin.

        Can be used as a decorator:
            @ResourceRegistry.register
            class QueueResource(BaseResource):
                ...
        """
        cls._resources[resource_class.resource_name] = resource_class
        logger.debug("resource_registered", resource=resource_class.resource_name)
        return resource_class

    @classmethod
    def get_resource(cls, name: str, client: GenesysClient) -> BaseResource | None:
        """Get a resource instance by name."""
        resource_class = cls._resources.get(name)
        if resource_class is None:
            return None
        return resource_class(client)

    @classmethod
    def list_resources(cls) -> list[str]:
        """List all registered resources."""
        return list(cls._resources.keys())

    @classmethod
    def describe(cls, client: GenesysClient | None = None) -> list[dict[str, Any]]:
        """Describe every resource with its operations."""
        client = client or GenesysClient()
        described = []
        for name, resource_class in cls._resources.items():
            resource = resource_class(client)
            described.append(
                {
                    "resource": name,
                    "display_name": resource.display_name,
                    "operations": [
                        {
                            "name": op.name.value,
                            "description": op.description,
                            "category": op.category.value,
                        }
                        for op in resource.get_operations()
                    ],
                }
            )
        return described


def register_resource(cls: type[BaseResource]) -> type[BaseResource]:
    """Decorator to register a resource plugin."""
    return ResourceRegistry.register(cls)
