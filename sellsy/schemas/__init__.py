"""
Schemas: error models and exceptions shared across the client.
"""

from .errors import (
    ApiError,
    ApiErrorPayload,
    ConfigurationError,
    ErrorCodes,
    RequestFailure,
    SellsyError,
    SellsyException,
)

__all__ = [
    "ApiError",
    "ApiErrorPayload",
    "ConfigurationError",
    "ErrorCodes",
    "RequestFailure",
    "SellsyError",
    "SellsyException",
]
