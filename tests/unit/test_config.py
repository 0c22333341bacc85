"""Tests for configuration loading."""

from genesys_mcp.config import DEFAULT_REGION, REGIONS, ServerConfig, get_config, set_config


class TestServerConfig:
    """Tests for ServerConfig."""

    def test_defaults(self, monkeypatch) -> None:
        """Test the values used when nothing is set."""
        for name in [
            "GENESYS_CLOUD_REGION",
            "GENESYS_CLOUD_CLIENT_ID",
            "GENESYS_CLOUD_CLIENT_SECRET",
            "GENESYS_CLOUD_HTTP_TIMEOUT",
            "GENESYS_CLOUD_USAGE_POLL_INTERVAL",
            "GENESYS_CLOUD_USAGE_POLL_ATTEMPTS",
        ]:
            monkeypatch.delenv(name, raising=False)

        config = ServerConfig.from_env()

        assert config.region == DEFAULT_REGION
        assert config.client_id is None
        assert config.http_timeout_seconds == 30.0
        assert config.usage_poll_interval_seconds == 3.0
        assert config.usage_poll_max_attempts == 10
        assert config.default_limit == 50

    def test_from_env(self, monkeypatch) -> None:
        """Test loading every setting from the environment."""
        monkeypatch.setenv("GENESYS_CLOUD_REGION", "euw2.pure.cloud")
        monkeypatch.setenv("GENESYS_CLOUD_CLIENT_ID", "id")
        monkeypatch.setenv("GENESYS_CLOUD_CLIENT_SECRET", "secret")
        monkeypatch.setenv("GENESYS_CLOUD_HTTP_TIMEOUT", "5")
        monkeypatch.setenv("GENESYS_CLOUD_USAGE_POLL_INTERVAL", "0.5")
        monkeypatch.setenv("GENESYS_CLOUD_USAGE_POLL_ATTEMPTS", "4")

        config = ServerConfig.from_env()

        assert config.region == "euw2.pure.cloud"
        assert config.client_id == "id"
        assert config.client_secret == "secret"
        assert config.http_timeout_seconds == 5.0
        assert config.usage_poll_interval_seconds == 0.5
        assert config.usage_poll_max_attempts == 4

    def test_default_region_is_known(self) -> None:
        """Test that the default region is in the region table."""
        assert DEFAULT_REGION in REGIONS


class TestGlobalConfig:
    """Tests for the global configuration."""

    def test_set_and_get(self) -> None:
        """Test replacing the global configuration."""
        config = ServerConfig(region="mypurecloud.jp")
        set_config(config)
        assert get_config() is config
