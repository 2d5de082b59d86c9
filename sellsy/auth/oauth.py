"""
OAuth 1.0 PLAINTEXT request signing.

Sellsy authenticates every call with an OAuth header whose signature is the
percent-encoded consumer secret and access token secret joined by "&". No
HMAC is computed: integrity is left to TLS.

This module provides:
- OAuthCredentials, the four opaque secrets
- RFC 3986 percent-encoding of header values
- Nonce/timestamp generation with an injectable clock and random source
- The Authorization / Expect header pair sent with each request
"""
from __future__ import annotations

import hashlib
import random
from datetime import datetime, timezone
from typing import Callable, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, SecretStr


SIGNATURE_METHOD = "PLAINTEXT"
OAUTH_VERSION = "1.0"

# Upper bound (exclusive) of the jitter added to the timestamp before hashing.
NONCE_JITTER = 1000

Clock = Callable[[], datetime]


class OAuthCredentials(BaseModel):
    """
    Consumer and access-token key pairs.

    Immutable; every field is a SecretStr so the values never show up in
    repr(), str() or logs. Use get_secret_value() to read one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    consumer_key: SecretStr = Field(default=SecretStr(""))
    consumer_secret: SecretStr = Field(default=SecretStr(""))
    access_token: SecretStr = Field(default=SecretStr(""))
    access_token_secret: SecretStr = Field(default=SecretStr(""))

    def replace(self, **changes: str) -> "OAuthCredentials":
        """Return a copy with some fields replaced by new plain-string values."""
        data = {
            name: getattr(self, name).get_secret_value()
            for name in type(self).model_fields
        }
        data.update(changes)
        return type(self)(**data)


def percent_encode(value: object) -> str:
    """
    Percent-encode a value the way rawurlencode does (RFC 3986).

    Only unreserved characters (A-Z a-z 0-9 - . _ ~) are left as-is; text is
    encoded as UTF-8 first.

    Example:
        >>> percent_encode('a&b "c"')
        'a%26b%20%22c%22'
    """
    return quote(str(value), safe="")


def compute_nonce(timestamp: int, rng: Optional[random.Random] = None) -> str:
    """
    Compute the oauth_nonce for a given timestamp.

    md5 of the timestamp plus a random integer in [0, 1000). Collisions are
    tolerated; this is not a security primitive.
    """
    jitter = (rng or random).randrange(0, NONCE_JITTER)
    return hashlib.md5(str(timestamp + jitter).encode("ascii")).hexdigest()


def plaintext_signature(credentials: OAuthCredentials) -> str:
    """PLAINTEXT signature: enc(consumer_secret) & enc(access_token_secret)."""
    return (
        percent_encode(credentials.consumer_secret.get_secret_value())
        + "&"
        + percent_encode(credentials.access_token_secret.get_secret_value())
    )


class OAuthAuthenticator:
    """
    Builds the per-request authentication headers.

    Args:
        clock: Returns "now"; defaults to the real UTC time
        rng: Random source for the nonce jitter; defaults to the random module
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.clock = clock
        self.rng = rng

    def _now(self) -> datetime:
        if self.clock is not None:
            return self.clock()
        return datetime.now(timezone.utc)

    def oauth_params(self, credentials: OAuthCredentials) -> dict[str, str]:
        """Compute the seven OAuth fields, in the order they are sent."""
        timestamp = int(self._now().timestamp())
        return {
            "oauth_consumer_key": credentials.consumer_key.get_secret_value(),
            "oauth_token": credentials.access_token.get_secret_value(),
            "oauth_nonce": compute_nonce(timestamp, self.rng),
            "oauth_timestamp": str(timestamp),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_version": OAUTH_VERSION,
            "oauth_signature": plaintext_signature(credentials),
        }

    @staticmethod
    def encode_authorization(params: dict[str, str]) -> str:
        """Render OAuth params as an Authorization header value."""
        pairs = [f'{key}="{percent_encode(value)}"' for key, value in params.items()]
        return "OAuth " + ", ".join(pairs)

    def headers(self, credentials: OAuthCredentials) -> dict[str, str]:
        """
        Headers to send with one request.

        The empty Expect header stops the HTTP stack from negotiating
        "100-continue", which the API does not handle.
        """
        return {
            "Authorization": self.encode_authorization(self.oauth_params(credentials)),
            "Expect": "",
        }

    def header_lines(self, credentials: OAuthCredentials) -> tuple[str, str]:
        """Same headers as raw "Name: value" lines."""
        headers = self.headers(credentials)
        return (
            f"Authorization: {headers['Authorization']}",
            "Expect:",
        )
