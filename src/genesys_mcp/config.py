"""Configuration management for Genesys Cloud MCP."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

DEFAULT_REGION = "mypurecloud.com"

# Region domain -> display name
REGIONS: dict[str, str] = {
    "mypurecloud.com": "US East (Virginia)",
    "use2.us-gov-pure.cloud": "US East 2 (Ohio)",
    "usw2.pure.cloud": "US West (Oregon)",
    "cac1.pure.cloud": "Canada (Central)",
    "mypurecloud.ie": "Europe (Ireland)",
    "euw2.pure.cloud": "Europe (London)",
    "mypurecloud.de": "Europe (Frankfurt)",
    "euc2.pure.cloud": "Europe (Zurich)",
    "aps1.pure.cloud": "Asia Pacific (Mumbai)",
    "mypurecloud.jp": "Asia Pacific (Tokyo)",
    "apne2.pure.cloud": "Asia Pacific (Seoul)",
    "apne3.pure.cloud": "Asia Pacific (Osaka)",
    "mypurecloud.com.au": "Asia Pacific (Sydney)",
    "sae1.pure.cloud": "South America (Sao Paulo)",
    "mec1.pure.cloud": "Middle East (UAE)",
}


class OperationCategory(Enum):
    """Categories of Genesys Cloud operations by their impact."""

    READ = "read"  # get, getAll, getMembers, getUsage
    WRITE = "write"  # create, addMembers


@dataclass
class ServerConfig:
    """Main server configuration."""

    # Credentials
    region: str = DEFAULT_REGION
    client_id: str | None = None
    client_secret: str | None = None

    # HTTP
    http_timeout_seconds: float = 30.0

    # Usage query polling
    usage_poll_interval_seconds: float = 3.0
    usage_poll_max_attempts: int = 10

    # Operations
    default_limit: int = 50

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        return cls(
            region=os.environ.get("GENESYS_CLOUD_REGION", DEFAULT_REGION),
            client_id=os.environ.get("GENESYS_CLOUD_CLIENT_ID"),
            client_secret=os.environ.get("GENESYS_CLOUD_CLIENT_SECRET"),
            http_timeout_seconds=float(os.environ.get("GENESYS_CLOUD_HTTP_TIMEOUT", "30")),
            usage_poll_interval_seconds=float(
                os.environ.get("GENESYS_CLOUD_USAGE_POLL_INTERVAL", "3")
            ),
            usage_poll_max_attempts=int(os.environ.get("GENESYS_CLOUD_USAGE_POLL_ATTEMPTS", "10")),
        )


# Global configuration instance
_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
