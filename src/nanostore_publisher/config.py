"""
Publisher configuration.

A PublisherConfig is an immutable value passed into every operation. When an
operation is called without one, :data:`DEFAULT_CONFIG` is used. Nothing in
the SDK mutates a configuration; use :meth:`PublisherConfig.with_overrides`
to derive a new one.
"""

from __future__ import annotations

import os
import re
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from nanostore_publisher.errors import InvalidConfigError
from nanostore_publisher.utils.validation import validate_service_url

DEFAULT_STORAGE_SERVICE_URL = "https://nanostore.babbage.systems"
DEFAULT_WALLET_BACKEND_URL = "https://dojo.babbage.systems"
DEFAULT_WALLET_URL = "http://localhost:3301"

PRIVATE_KEY_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")

ENV_STORAGE_SERVICE_URL = "NANOSTORE_URL"
ENV_CLIENT_PRIVATE_KEY = "NANOSTORE_CLIENT_PRIVATE_KEY"
ENV_WALLET_BACKEND_URL = "NANOSTORE_WALLET_BACKEND_URL"
ENV_WALLET_URL = "NANOSTORE_WALLET_URL"


class PublisherConfig(BaseModel):
    """
    Configuration for the NanoStore publisher.

    When ``client_private_key`` is set, payments are derived and signed with
    that key (server environments). Otherwise the SDK delegates key
    derivation, transaction creation and request signing to the wallet
    listening at ``wallet_url``.

    Example:
        ```python
        config = PublisherConfig(
            storage_service_url="https://nanostore.babbage.systems",
            client_private_key=os.environ["NANOSTORE_CLIENT_PRIVATE_KEY"],
        )
        ```
    """

    model_config = ConfigDict(frozen=True)

    storage_service_url: str = Field(
        default=DEFAULT_STORAGE_SERVICE_URL,
        description="Base URL of the NanoStore service",
    )
    client_private_key: Optional[str] = Field(
        default=None,
        repr=False,
        description="Hex private key for direct-key payments. SECURITY: Store in env var",
    )
    wallet_backend_url: str = Field(
        default=DEFAULT_WALLET_BACKEND_URL,
        description="Transaction-builder backend used with client_private_key",
    )
    wallet_url: str = Field(
        default=DEFAULT_WALLET_URL,
        description="Local wallet endpoint used when no private key is configured",
    )

    @field_validator("storage_service_url", "wallet_backend_url", "wallet_url", mode="before")
    @classmethod
    def _check_url(cls, value: Any, info: ValidationInfo) -> str:
        return validate_service_url(value, info.field_name)

    @field_validator("client_private_key", mode="before")
    @classmethod
    def _check_private_key(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        if not isinstance(value, str) or not PRIVATE_KEY_PATTERN.match(value):
            raise InvalidConfigError(
                "client_private_key must be 64 hex characters",
                field="client_private_key",
            )
        return value.lower()

    @property
    def has_private_key(self) -> bool:
        """Whether payments use the direct-key path."""
        return self.client_private_key is not None

    def with_overrides(self, **overrides: Any) -> "PublisherConfig":
        """Return a new, validated config with some fields replaced."""
        data = self.model_dump()
        data.update(overrides)
        return PublisherConfig(**data)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "PublisherConfig":
        """
        Build a config from environment variables.

        A ``.env`` file is loaded first (without overriding variables that
        are already set). Unset variables fall back to the defaults.

        Variables:
            NANOSTORE_URL, NANOSTORE_CLIENT_PRIVATE_KEY,
            NANOSTORE_WALLET_BACKEND_URL, NANOSTORE_WALLET_URL
        """
        load_dotenv(dotenv_path)
        values = {
            "storage_service_url": os.environ.get(ENV_STORAGE_SERVICE_URL),
            "client_private_key": os.environ.get(ENV_CLIENT_PRIVATE_KEY),
            "wallet_backend_url": os.environ.get(ENV_WALLET_BACKEND_URL),
            "wallet_url": os.environ.get(ENV_WALLET_URL),
        }
        return cls(**{key: value for key, value in values.items() if value})


DEFAULT_CONFIG = PublisherConfig()
"""Process-wide default configuration (public NanoStore, wallet delegation)."""


def resolve_config(config: Optional[PublisherConfig]) -> PublisherConfig:
    """Return ``config`` or the default configuration."""
    return config if config is not None else DEFAULT_CONFIG
