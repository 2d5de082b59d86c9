"""
CLI Configuration

Configuration management for the Sellsy CLI.
Supports environment variables and YAML configuration files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from sellsy.config.runtime import ClientConfig


# Environment variable prefix
ENV_PREFIX = "SELLSY_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Client settings (endpoint, credentials, HTTP)
    client: ClientConfig = field(default_factory=ClientConfig)

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_dict(self) -> dict[str, Any]:
        """Effective configuration with secrets masked."""
        data = self.client.to_dict(mask_secrets=True)
        data["log_level"] = self.log_level
        data["log_file"] = self.log_file
        data["default_output_format"] = self.default_output_format
        return data


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    config = CLIConfig(client=ClientConfig.from_dict(data))

    # Logging
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    # Output
    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    # Start with defaults
    config = CLIConfig()

    # Load from file if provided
    if config_path and config_path.exists():
        config = load_config_from_file(config_path)

    # Check for default config locations
    default_paths = [
        Path.cwd() / "sellsy.yaml",
        Path.cwd() / ".sellsy.yaml",
        Path.home() / ".config" / "sellsy" / "config.yaml",
    ]

    if config_path is None:
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    # Override with environment variables
    config.client = config.client.with_env_overrides()
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """# Sellsy CLI configuration
api_url: https://apifeed.sellsy.com/0/
consumer_key: ""
consumer_secret: ""
access_token: ""
access_token_secret: ""
http:
  timeout: 30
  # auto: verify certificates for https endpoints only
  tls_policy: auto
  proxy: null
log_level: INFO
log_file: null
default_output_format: human
"""
