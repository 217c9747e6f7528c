"""
Tests for PublisherConfig.

Tests cover:
- Defaults and DEFAULT_CONFIG
- URL and private key validation
- Immutability and overrides
- Loading from environment variables
"""

import pytest

from nanostore_publisher.config import (
    DEFAULT_CONFIG,
    DEFAULT_STORAGE_SERVICE_URL,
    DEFAULT_WALLET_URL,
    PublisherConfig,
    resolve_config,
)
from nanostore_publisher.errors import InvalidConfigError

from .conftest import SENDER_PRIVATE_KEY, STORAGE_URL


class TestPublisherConfigDefaults:
    """Tests for default configuration values."""

    def test_defaults(self) -> None:
        """Test default URLs and no private key."""
        config = PublisherConfig()
        assert config.storage_service_url == DEFAULT_STORAGE_SERVICE_URL
        assert config.wallet_url == DEFAULT_WALLET_URL
        assert config.client_private_key is None
        assert config.has_private_key is False

    def test_resolve_config(self) -> None:
        """Test None resolves to DEFAULT_CONFIG."""
        custom = PublisherConfig(storage_service_url=STORAGE_URL)
        assert resolve_config(None) is DEFAULT_CONFIG
        assert resolve_config(custom) is custom


class TestPublisherConfigValidation:
    """Tests for configuration validation."""

    def test_trailing_slash_stripped(self) -> None:
        """Test service URLs are normalized."""
        config = PublisherConfig(storage_service_url=STORAGE_URL + "/")
        assert config.storage_service_url == STORAGE_URL

    @pytest.mark.parametrize("url", ["", "ftp://nanostore.example.com", "https://"])
    def test_invalid_url(self, url: str) -> None:
        """Test malformed URLs are rejected."""
        with pytest.raises(InvalidConfigError):
            PublisherConfig(storage_service_url=url)

    def test_private_key_lowercased(self) -> None:
        """Test private keys are normalized to lowercase hex."""
        config = PublisherConfig(client_private_key="AB" * 32)
        assert config.client_private_key == "ab" * 32
        assert config.has_private_key is True

    def test_empty_private_key_is_none(self) -> None:
        """Test an empty private key means wallet delegation."""
        assert PublisherConfig(client_private_key="").client_private_key is None

    @pytest.mark.parametrize("key", ["abc", "zz" * 32, "11" * 33])
    def test_invalid_private_key(self, key: str) -> None:
        """Test malformed private keys are rejected."""
        with pytest.raises(InvalidConfigError) as exc_info:
            PublisherConfig(client_private_key=key)
        assert exc_info.value.field == "client_private_key"

    def test_private_key_not_in_repr(self) -> None:
        """Test the private key never appears in repr."""
        config = PublisherConfig(client_private_key=SENDER_PRIVATE_KEY)
        assert SENDER_PRIVATE_KEY not in repr(config)


class TestPublisherConfigImmutability:
    """Tests for immutability and overrides."""

    def test_frozen(self) -> None:
        """Test fields cannot be reassigned."""
        config = PublisherConfig()
        with pytest.raises(Exception):
            config.storage_service_url = STORAGE_URL  # type: ignore[misc]

    def test_with_overrides_returns_new_instance(self) -> None:
        """Test overrides leave the original untouched."""
        original = PublisherConfig()
        updated = original.with_overrides(storage_service_url=STORAGE_URL)

        assert updated is not original
        assert updated.storage_service_url == STORAGE_URL
        assert original.storage_service_url == DEFAULT_STORAGE_SERVICE_URL

    def test_with_overrides_validates(self) -> None:
        """Test overrides go through validation."""
        with pytest.raises(InvalidConfigError):
            PublisherConfig().with_overrides(wallet_url="not a url")


ENV_VARS = (
    "NANOSTORE_URL",
    "NANOSTORE_CLIENT_PRIVATE_KEY",
    "NANOSTORE_WALLET_URL",
    "NANOSTORE_WALLET_BACKEND_URL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Unset NanoStore variables, restoring them (and anything .env adds) afterwards."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestPublisherConfigFromEnv:
    """Tests for environment loading."""

    def test_from_env(self, clean_env: pytest.MonkeyPatch, tmp_path) -> None:
        """Test variables are read from the environment."""
        clean_env.setenv("NANOSTORE_URL", STORAGE_URL)
        clean_env.setenv("NANOSTORE_CLIENT_PRIVATE_KEY", SENDER_PRIVATE_KEY)

        config = PublisherConfig.from_env(dotenv_path=str(tmp_path / "missing.env"))

        assert config.storage_service_url == STORAGE_URL
        assert config.client_private_key == SENDER_PRIVATE_KEY
        assert config.wallet_url == DEFAULT_WALLET_URL

    def test_from_dotenv_file(self, clean_env: pytest.MonkeyPatch, tmp_path) -> None:
        """Test variables are loaded from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("NANOSTORE_WALLET_URL=http://127.0.0.1:4000\n")

        config = PublisherConfig.from_env(dotenv_path=str(env_file))

        assert config.wallet_url == "http://127.0.0.1:4000"
        assert config.client_private_key is None

    def test_environment_wins_over_dotenv(self, clean_env: pytest.MonkeyPatch, tmp_path) -> None:
        """Test variables already set are not overridden by the .env file."""
        clean_env.setenv("NANOSTORE_WALLET_URL", "http://localhost:5000")
        env_file = tmp_path / ".env"
        env_file.write_text("NANOSTORE_WALLET_URL=http://127.0.0.1:4000\n")

        config = PublisherConfig.from_env(dotenv_path=str(env_file))

        assert config.wallet_url == "http://localhost:5000"
