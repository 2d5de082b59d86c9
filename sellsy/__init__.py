"""
Sellsy API client.

    from sellsy import SellsyClient, OAuthCredentials

    client = SellsyClient(OAuthCredentials(consumer_key=..., ...))
    client.document().getList({"doctype": "invoice"})
"""

from sellsy.auth import OAuthAuthenticator, OAuthCredentials
from sellsy.client import DEFAULT_API_URL, SellsyClient
from sellsy.collection import ApiModule, Collection, CollectionGenerator
from sellsy.config import ClientConfig, HttpConfig
from sellsy.http import HttpClient, HttpError, HttpResponse, TlsPolicy
from sellsy.schemas import (
    ApiError,
    ApiErrorPayload,
    ConfigurationError,
    ErrorCodes,
    RequestFailure,
    SellsyException,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_API_URL",
    "ApiError",
    "ApiErrorPayload",
    "ApiModule",
    "ClientConfig",
    "Collection",
    "CollectionGenerator",
    "ConfigurationError",
    "ErrorCodes",
    "HttpClient",
    "HttpConfig",
    "HttpError",
    "HttpResponse",
    "OAuthAuthenticator",
    "OAuthCredentials",
    "RequestFailure",
    "SellsyClient",
    "SellsyException",
    "TlsPolicy",
]
