#!/usr/bin/env python3
"""Genesys Cloud MCP - MCP server for the Genesys Cloud Platform API."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import structlog
from fastmcp import FastMCP

from genesys_mcp.config import REGIONS, ServerConfig, get_config, set_config
from genesys_mcp.core.exceptions import GenesysMCPError
from genesys_mcp.core.session import get_session_manager
from genesys_mcp.execution.client import GenesysClient
from genesys_mcp.execution.engine import get_execution_engine
from genesys_mcp.services import ResourceRegistry

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()

# Create FastMCP server
mcp = FastMCP(
    name="genesys-cloud-mcp",
    instructions="""Genesys Cloud MCP - Query and manage a Genesys Cloud organization.

Credentials come from GENESYS_CLOUD_CLIENT_ID / GENESYS_CLOUD_CLIENT_SECRET
(an OAuth client with the client-credentials grant).

Use 'list_operations' to see the supported resources and operations, then
'genesys_execute' with one parameter map per item, e.g.
  resource="queue", operation="getAll", items=[{"returnAll": true}]

"getAll" style operations return at most 'limit' items (default 50) unless
'returnAll' is true.
""",
)


# === Helper Functions ===


def clean_response(obj: Any) -> Any:
    """Make a response JSON serializable."""
    if isinstance(obj, dict):
        return {k: clean_response(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [clean_response(i) for i in obj]
    elif isinstance(obj, datetime):
        return obj.isoformat()
    return obj


def make_response(
    status: str,
    data: Any = None,
    message: str | None = None,
    **kwargs: Any,
) -> str:
    """Create a standardized JSON response."""
    response: dict[str, Any] = {"status": status}
    if message:
        response["message"] = message
    if data is not None:
        response["data"] = clean_response(data)
    response.update(kwargs)
    return json.dumps(response, indent=2, default=str)


# === Tools ===


@mcp.tool("list_regions", description="List the known Genesys Cloud regions")
async def list_regions() -> str:
    """List region domains with their display names."""
    active = get_session_manager().region
    regions = [
        {"region": domain, "name": name, "active": domain == active}
        for domain, name in REGIONS.items()
    ]
    return make_response("success", data=regions, count=len(regions))


@mcp.tool("select_region", description="Switch the Genesys Cloud region used for requests")
async def select_region(region: str) -> str:
    """Select the region domain (e.g. 'mypurecloud.ie')."""
    try:
        get_session_manager().select_region(region)
        message = f"Region set to '{region}'"
        if region not in REGIONS:
            message += " (not a known region; requests may fail)"
        return make_response("success", data={"region": region}, message=message)
    except Exception as e:
        logger.error("select_region_failed", error=str(e), region=region)
        return make_response("error", message=str(e))


@mcp.tool("get_connection_info", description="Check credentials and show the active connection")
async def get_connection_info() -> str:
    """Describe the active region and the token in use."""
    session_mgr = get_session_manager()
    try:
        token_info = await GenesysClient(session_mgr).get_token_info()
        data = {
            "region": session_mgr.get_region(),
            "api_base_url": session_mgr.api_base_url,
            "token": token_info,
        }
        return make_response("success", data=data)
    except GenesysMCPError as e:
        return make_response("error", message=e.message, **e.details)
    except Exception as e:
        logger.error("get_connection_info_failed", error=str(e))
        return make_response("error", message=str(e))


@mcp.tool("list_operations", description="List supported resources and their operations")
async def list_operations() -> str:
    """List every resource with its operations."""
    resources = ResourceRegistry.describe(GenesysClient(get_session_manager()))
    return make_response("success", data=resources, count=len(resources))


@mcp.tool("genesys_execute", description="Run a Genesys Cloud operation for one or more items")
async def genesys_execute(
    resource: str,
    operation: str,
    items: list[dict[str, Any]] | None = None,
    continue_on_fail: bool = False,
) -> str:
    """Run an operation once per item.

    Each item is a parameter map, e.g. {"queueId": "..."} for queue.get or
    {"returnAll": false, "limit": 10} for queue.getAll. With
    continue_on_fail, a failing item is returned with its error instead of
    aborting the batch.
    """
    try:
        engine = get_execution_engine()
        results = await engine.execute(
            resource,
            operation,
            [{}] if items is None else items,
            continue_on_fail=continue_on_fail,
        )
        data = [item.to_dict() for item in results]
        errors = sum(1 for item in results if item.error is not None)
        status = "partial" if errors else "success"
        return make_response(status, data=data, count=len(data), errors=errors)

    except GenesysMCPError as e:
        return make_response("error", message=e.message, **e.details)
    except Exception as e:
        logger.error("genesys_execute_failed", error=str(e), resource=resource, operation=operation)
        return make_response("error", message=str(e))


def main() -> None:
    """Main entry point for the server."""
    import argparse

    parser = argparse.ArgumentParser(description="Genesys Cloud MCP Server")
    parser.add_argument(
        "--region",
        default=None,
        help="Genesys Cloud region domain (overrides GENESYS_CLOUD_REGION)",
    )

    args = parser.parse_args()

    # Configure server
    config = ServerConfig.from_env()
    if args.region:
        config.region = args.region
    set_config(config)

    logger.info(
        "starting_server",
        region=get_config().region,
        credentials_configured=bool(config.client_id and config.client_secret),
    )

    # Run the server
    mcp.run()


if __name__ == "__main__":
    main()
