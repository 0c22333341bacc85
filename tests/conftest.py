"""Pytest configuration and fixtures for Genesys Cloud MCP tests."""

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from genesys_mcp.config import ServerConfig, reset_config, set_config
from genesys_mcp.core.session import SessionManager, reset_session_manager
from genesys_mcp.execution.client import GenesysClient
from genesys_mcp.execution.engine import reset_execution_engine


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset global state before each test."""
    yield
    reset_session_manager()
    reset_execution_engine()
    reset_config()


@pytest.fixture
def server_config() -> ServerConfig:
    """Create a test server config."""
    return ServerConfig(
        region="mypurecloud.com",
        client_id="test-client",
        client_secret="test-secret",
        usage_poll_interval_seconds=0,
        usage_poll_max_attempts=3,
    )


@pytest.fixture
def configured_server(server_config: ServerConfig) -> Generator[ServerConfig, None, None]:
    """Set up server with test config."""
    set_config(server_config)
    yield server_config


@pytest.fixture
def session_manager(configured_server: ServerConfig) -> SessionManager:
    """Create a fresh session manager."""
    return SessionManager()


@pytest.fixture
def mock_session_manager() -> MagicMock:
    """Create a mock session manager whose transport is an AsyncMock."""
    manager = MagicMock(spec=SessionManager)
    manager.get_region.return_value = "mypurecloud.com"
    manager.http_request = AsyncMock(return_value={})
    return manager


@pytest.fixture
def mock_client(configured_server: ServerConfig) -> MagicMock:
    """Create a mock API client for plugin tests."""
    client = MagicMock(spec=GenesysClient)
    client.item_index = 0
    client.for_item.return_value = client
    client.request = AsyncMock(return_value={})
    client.request_all_items = AsyncMock(return_value=[])
    return client
