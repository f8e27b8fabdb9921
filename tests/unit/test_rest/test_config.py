"""Unit tests for client configuration and environment settings."""

import pytest
from pydantic import ValidationError

from restclient.config import RestClientConfig
from restclient.models import Endpoint
from restclient.settings import AppSettings


class TestRestClientConfig:
    """Tests for RestClientConfig."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = RestClientConfig(endpoint_name="Users", root_url="http://localhost")

        assert config.default_headers == {}
        assert config.payload_log_length == 100

    def test_endpoint(self) -> None:
        """Test the derived endpoint identity."""
        config = RestClientConfig(endpoint_name="Users", root_url="http://localhost")

        assert config.endpoint == Endpoint(name="Users", root_url="http://localhost")

    def test_rejects_credentials_in_headers(self) -> None:
        """Test that credentials cannot be stored in config."""
        with pytest.raises(ValidationError, match="must not be stored in config"):
            RestClientConfig(
                endpoint_name="Users",
                root_url="http://localhost",
                default_headers={"Authorization": "Basic abc"},
            )

    def test_rejects_unknown_fields(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(ValidationError):
            RestClientConfig(
                endpoint_name="Users",
                root_url="http://localhost",
                timeout=3,  # type: ignore[call-arg]
            )

    def test_rejects_negative_payload_length(self) -> None:
        """Test the payload log length lower bound."""
        with pytest.raises(ValidationError):
            RestClientConfig(
                endpoint_name="Users",
                root_url="http://localhost",
                payload_log_length=-1,
            )

    def test_rejects_empty_name(self) -> None:
        """Test that the endpoint name is required."""
        with pytest.raises(ValidationError):
            RestClientConfig(endpoint_name="", root_url="http://localhost")

    def test_frozen(self) -> None:
        """Test that config is immutable."""
        config = RestClientConfig(endpoint_name="Users", root_url="http://localhost")

        with pytest.raises(ValidationError):
            config.payload_log_length = 5  # type: ignore[misc]


class TestAppSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults with a clean environment."""
        for name in ["LOG_LEVEL", "LOG_JSON", "PAYLOAD_LOG_LENGTH", "USERNAME", "PASSWORD"]:
            monkeypatch.delenv(f"RESTCLIENT_{name}", raising=False)

        settings = AppSettings(_env_file=None)  # type: ignore[call-arg]

        assert settings.log_level == "INFO"
        assert settings.log_json is True
        assert settings.payload_log_length == 100
        assert settings.has_basic_auth is False

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test reading RESTCLIENT_* variables."""
        monkeypatch.setenv("RESTCLIENT_LOG_LEVEL", "debug")
        monkeypatch.setenv("RESTCLIENT_LOG_JSON", "false")
        monkeypatch.setenv("RESTCLIENT_PAYLOAD_LOG_LENGTH", "12")
        monkeypatch.setenv("RESTCLIENT_USERNAME", "SomeUsername")
        monkeypatch.setenv("RESTCLIENT_PASSWORD", "SomePassword")

        settings = AppSettings(_env_file=None)  # type: ignore[call-arg]

        assert settings.log_level == "debug"
        assert settings.log_json is False
        assert settings.payload_log_length == 12
        assert settings.has_basic_auth is True
