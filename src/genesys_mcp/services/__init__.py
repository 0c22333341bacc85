"""Resource plugins for Genesys Cloud MCP."""

from genesys_mcp.services.base import (
    BaseResource,
    ListParams,
    OperationParams,
    OperationSpec,
    ResourceRegistry,
    register_resource,
)

# Import plugins to trigger registration
from genesys_mcp.services.plugins import conversations, directory, integrations, routing

__all__ = [
    "BaseResource",
    "ListParams",
    "OperationParams",
    "OperationSpec",
    "ResourceRegistry",
    "register_resource",
]
