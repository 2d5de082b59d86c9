"""
OAuth PLAINTEXT authentication.
"""

from .oauth import (
    OAUTH_VERSION,
    SIGNATURE_METHOD,
    OAuthAuthenticator,
    OAuthCredentials,
    compute_nonce,
    percent_encode,
    plaintext_signature,
)

__all__ = [
    "OAUTH_VERSION",
    "SIGNATURE_METHOD",
    "OAuthAuthenticator",
    "OAuthCredentials",
    "compute_nonce",
    "percent_encode",
    "plaintext_signature",
]
