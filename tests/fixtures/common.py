"""
Common test fixtures shared by all modules.

Provides factory functions for the client's collaborators so tests never
touch the network:
- OAuthCredentials
- A fixed clock
- HttpResponse objects built from JSON or raw text
- StubExecutor, a RequestExecutor that records calls
"""

import json
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from sellsy.auth.oauth import OAuthCredentials
from sellsy.http.client import HttpError, HttpResponse


FIXED_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
FIXED_TIMESTAMP = int(FIXED_NOW.timestamp())


def fixed_clock() -> datetime:
    """Clock that always returns FIXED_NOW."""
    return FIXED_NOW


def make_credentials(
    consumer_key: str = "consumer-key",
    consumer_secret: str = "consumer-secret",
    access_token: str = "access-token",
    access_token_secret: str = "access-secret",
) -> OAuthCredentials:
    """Create OAuthCredentials with sensible test defaults."""
    return OAuthCredentials(
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        access_token=access_token,
        access_token_secret=access_token_secret,
    )


def make_response(
    payload: Any = None,
    *,
    text: Optional[str] = None,
    status_code: int = 200,
) -> HttpResponse:
    """Create an HttpResponse from a JSON payload or raw text."""
    body = text if text is not None else json.dumps(payload)
    return HttpResponse(
        status_code=status_code,
        content=body.encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


class StubExecutor:
    """RequestExecutor double: returns a canned response or raises."""

    def __init__(
        self,
        response: Optional[HttpResponse] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    @classmethod
    def returning(cls, payload: Any) -> "StubExecutor":
        return cls(response=make_response(payload))

    @classmethod
    def returning_text(cls, text: str, status_code: int = 200) -> "StubExecutor":
        return cls(response=make_response(text=text, status_code=status_code))

    @classmethod
    def failing(cls, message: str = "Connection refused") -> "StubExecutor":
        return cls(error=HttpError(message))

    def post(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        data: Optional[Any] = None,
        verify: bool = True,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        self.calls.append({
            "url": url,
            "headers": dict(headers or {}),
            "data": data,
            "verify": verify,
            "timeout": timeout,
        })
        if self.error is not None:
            raise self.error
        assert self.response is not None, "StubExecutor has nothing to return"
        return self.response

    @property
    def last_call(self) -> dict[str, Any]:
        return self.calls[-1]
