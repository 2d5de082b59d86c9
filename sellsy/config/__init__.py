"""
Runtime Configuration Module

Provides configuration loading for the Sellsy client.
"""

from .runtime import ClientConfig, HttpConfig, get_default_config, set_default_config

__all__ = [
    "ClientConfig",
    "HttpConfig",
    "get_default_config",
    "set_default_config",
]
