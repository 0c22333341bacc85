"""Core modules for Genesys Cloud MCP."""

from genesys_mcp.core.exceptions import (
    APIError,
    AuthenticationError,
    GenesysMCPError,
    JobTimeoutError,
    OperationError,
    RemoteJobError,
    ValidationError,
)
from genesys_mcp.core.session import SessionManager, get_session_manager

__all__ = [
    "APIError",
    "AuthenticationError",
    "GenesysMCPError",
    "JobTimeoutError",
    "OperationError",
    "RemoteJobError",
    "ValidationError",
    "SessionManager",
    "get_session_manager",
]
