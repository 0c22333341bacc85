"""Request, pagination and execution primitives for Genesys Cloud MCP.

``execution.engine`` is imported directly; it depends on the resource
plugins, which in turn depend on this package.
"""

from genesys_mcp.execution.client import GenesysClient
from genesys_mcp.execution.pagination import (
    PAGE_SIZE,
    PaginationHandler,
    PaginationLocation,
    api_request_all_items,
)
from genesys_mcp.execution.request import RequestSpec, api_request

__all__ = [
    "GenesysClient",
    "PAGE_SIZE",
    "PaginationHandler",
    "PaginationLocation",
    "api_request_all_items",
    "RequestSpec",
    "api_request",
]
