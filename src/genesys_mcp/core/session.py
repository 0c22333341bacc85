"""Genesys Cloud session management for Genesys Cloud MCP."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from genesys_mcp.config import REGIONS, get_config
from genesys_mcp.core.exceptions import AuthenticationError

logger = structlog.get_logger()

# Refresh the token this many seconds before the server-side expiry
TOKEN_EXPIRY_MARGIN_SECONDS = 60


@dataclass
class AccessToken:
    """An OAuth2 bearer token issued by the Genesys Cloud login service."""

    value: str
    expires_at: float

    def is_expired(self, now: float | None = None) -> bool:
        """Check whether the token must be refreshed."""
        now = time.monotonic() if now is None else now
        return now >= self.expires_at - TOKEN_EXPIRY_MARGIN_SECONDS


@dataclass
class SessionManager:
    """Manages the Genesys Cloud region, credentials and authenticated HTTP transport."""

    region: str | None = field(default_factory=lambda: get_config().region)
    client_id: str | None = field(default_factory=lambda: get_config().client_id)
    client_secret: str | None = field(default_factory=lambda: get_config().client_secret, repr=False)
    timeout: float = field(default_factory=lambda: get_config().http_timeout_seconds)
    _client: httpx.AsyncClient | None = field(default=None, repr=False)
    _token: AccessToken | None = field(default=None, repr=False)

    def get_region(self) -> str:
        """Return the configured region domain."""
        if not self.region:
            raise AuthenticationError(
                "No Genesys Cloud region configured",
                suggestion="Set GENESYS_CLOUD_REGION (e.g. 'mypurecloud.com')",
            )
        return self.region

    def select_region(self, region: str) -> None:
        """Switch to another region and drop the token issued for the previous one."""
        if region not in REGIONS:
            logger.warning("unknown_region_selected", region=region)
        self.region = region
        self._token = None
        logger.info("region_selected", region=region)

    @property
    def api_base_url(self) -> str:
        """Base URL of the Platform API for the active region."""
        return f"https://api.{self.get_region()}"

    @property
    def login_url(self) -> str:
        """OAuth token endpoint for the active region."""
        return f"https://login.{self.get_region()}/oauth/token"

    def get_http_client(self) -> httpx.AsyncClient:
        """Get or create the shared async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"Accept": "application/json"},
            )
        return self._client

    async def get_access_token(self) -> str:
        """Return a valid bearer token, requesting a new one when needed."""
        if self._token is not None and not self._token.is_expired():
            return self._token.value

        if not self.client_id or not self.client_secret:
            raise AuthenticationError(
                "Genesys Cloud client credentials are not configured",
                region=self.region,
                suggestion="Set GENESYS_CLOUD_CLIENT_ID and GENESYS_CLOUD_CLIENT_SECRET",
            )

        client = self.get_http_client()
        try:
            response = await client.post(
                self.login_url,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "token_request_failed",
                region=self.region,
                status=e.response.status_code,
            )
            raise AuthenticationError(
                f"Token request rejected with status {e.response.status_code}",
                region=self.region,
                suggestion="Check the OAuth client id, secret and region",
            ) from e

        payload = response.json()
        access_token = payload.get("access_token")
        if not access_token:
            raise AuthenticationError("Token response did not contain an access_token", region=self.region)

        expires_in = float(payload.get("expires_in", 0))
        self._token = AccessToken(value=access_token, expires_at=time.monotonic() + expires_in)
        logger.info("token_acquired", region=self.region, expires_in=expires_in)
        return access_token

    async def http_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Issue one authenticated request and decode the JSON response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra request headers
            json: JSON body (omitted when None)
            params: Query parameters (omitted when None)

        Returns:
            Decoded JSON payload, or an empty dict for an empty body

        Raises:
            httpx.HTTPError: On transport failures and non-2xx responses
            AuthenticationError: When no token can be obtained
        """
        token = await self.get_access_token()
        request_headers = {"Authorization": f"Bearer {token}"}
        if headers:
            request_headers.update(headers)

        client = self.get_http_client()
        response = await client.request(
            method,
            url,
            headers=request_headers,
            json=json,
            params=params,
        )

        if response.status_code == 401:
            # Force a fresh token on the next call
            self._token = None
        response.raise_for_status()

        if not response.content:
            return {}
        return response.json()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Global session manager instance
_session_manager: SessionManager | None = None


def get_session_manager() -> SessionManager:
    """Get the global session manager instance."""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager


def reset_session_manager() -> None:
    """Reset the global session manager (for testing)."""
    global _session_manager
    _session_manager = None
