"""
Runtime Configuration

Endpoint, credentials and HTTP settings for the Sellsy client.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from sellsy.auth.oauth import OAuthCredentials
from sellsy.client import DEFAULT_API_URL
from sellsy.http.tls import TlsPolicy

load_dotenv()


DEFAULT_USER_AGENT = "sellsy-client/0.1.0"

_SECRET_MASK = "********"

_CREDENTIAL_FIELDS = (
    "consumer_key",
    "consumer_secret",
    "access_token",
    "access_token_secret",
)


@dataclass
class HttpConfig:
    """Configuration for the HTTP executor."""
    timeout: float = 30.0
    tls_policy: TlsPolicy = TlsPolicy.AUTO
    proxy: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        self.tls_policy = TlsPolicy.parse(self.tls_policy)
        self.timeout = float(self.timeout)


@dataclass
class ClientConfig:
    """
    Complete configuration for a SellsyClient.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    api_url: str = DEFAULT_API_URL
    consumer_key: str = field(default="", repr=False)
    consumer_secret: str = field(default="", repr=False)
    access_token: str = field(default="", repr=False)
    access_token_secret: str = field(default="", repr=False)
    http: HttpConfig = field(default_factory=HttpConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    def credentials(self) -> OAuthCredentials:
        """The four OAuth keys as an immutable credentials value."""
        return OAuthCredentials(
            consumer_key=self.consumer_key,
            consumer_secret=self.consumer_secret,
            access_token=self.access_token,
            access_token_secret=self.access_token_secret,
        )

    @property
    def has_credentials(self) -> bool:
        return all(getattr(self, name) for name in _CREDENTIAL_FIELDS)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - SELLSY_API_URL: API endpoint
        - SELLSY_CONSUMER_KEY / SELLSY_CONSUMER_SECRET: OAuth consumer pair
        - SELLSY_ACCESS_TOKEN / SELLSY_ACCESS_TOKEN_SECRET: OAuth token pair
        - SELLSY_HTTP_TIMEOUT: request timeout in seconds
        - SELLSY_TLS_POLICY: auto, always or never
        - SELLSY_HTTP_PROXY: HTTP proxy URL
        """
        overrides: dict[str, Any] = {}

        if os.getenv("SELLSY_API_URL"):
            overrides["api_url"] = os.getenv("SELLSY_API_URL")

        for name in _CREDENTIAL_FIELDS:
            value = os.getenv(f"SELLSY_{name.upper()}")
            if value:
                overrides[name] = value

        # HTTP settings
        if os.getenv("SELLSY_HTTP_TIMEOUT"):
            overrides.setdefault("http", {})["timeout"] = float(os.getenv("SELLSY_HTTP_TIMEOUT"))
        if os.getenv("SELLSY_TLS_POLICY"):
            overrides.setdefault("http", {})["tls_policy"] = os.getenv("SELLSY_TLS_POLICY")
        if os.getenv("SELLSY_HTTP_PROXY"):
            overrides.setdefault("http", {})["proxy"] = os.getenv("SELLSY_HTTP_PROXY")

        return overrides

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ClientConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Load configuration from a dictionary (supports partial data)."""
        http_data = data.get("http", {})
        http = HttpConfig(**http_data) if http_data else HttpConfig()

        return cls(
            api_url=data.get("api_url") or DEFAULT_API_URL,
            consumer_key=data.get("consumer_key") or "",
            consumer_secret=data.get("consumer_secret") or "",
            access_token=data.get("access_token") or "",
            access_token_secret=data.get("access_token_secret") or "",
            http=http,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "ClientConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.items():
            if key == "http":
                continue
            setattr(new_config, key, value)

        if "http" in overrides:
            for key, value in overrides["http"].items():
                setattr(new_config.http, key, value)
            new_config.http.tls_policy = TlsPolicy.parse(new_config.http.tls_policy)

        return new_config

    def to_dict(self, mask_secrets: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        credentials = {
            name: (_SECRET_MASK if mask_secrets and getattr(self, name) else getattr(self, name))
            for name in _CREDENTIAL_FIELDS
        }
        return {
            "api_url": self.api_url,
            **credentials,
            "http": {
                "timeout": self.http.timeout,
                "tls_policy": self.http.tls_policy.value,
                "proxy": self.http.proxy,
                "user_agent": self.http.user_agent,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[ClientConfig] = None


def get_default_config() -> ClientConfig:
    """Get the default client configuration."""
    global _default_config
    if _default_config is None:
        _default_config = ClientConfig.from_env()
    return _default_config


def set_default_config(config: Optional[ClientConfig]) -> None:
    """Set the default client configuration (None resets it)."""
    global _default_config
    _default_config = config
