"""
HTTP Client Module

requests-based executor for the single API endpoint.
"""

from .client import HttpClient, HttpError, HttpResponse, RequestExecutor
from .tls import TlsPolicy, should_verify_peer

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "RequestExecutor",
    "TlsPolicy",
    "should_verify_peer",
]
