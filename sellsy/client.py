"""
Sellsy API client.

Every API call is one form-encoded POST to a single endpoint:

    request=1
    io_mode=json
    do_in={"method": "Document.getList", "params": {...}}

signed with an OAuth PLAINTEXT Authorization header. The JSON answer is an
envelope whose "status" is "success" or "error".

A client keeps the last request body and the last parsed answer for
diagnostics. That state belongs to the instance, so one instance must not be
shared between threads without external locking.
"""

from __future__ import annotations

import json
import logging
import random
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from sellsy.auth.oauth import Clock, OAuthAuthenticator, OAuthCredentials
from sellsy.collection import ApiModule, Collection, CollectionGenerator
from sellsy.http.client import HttpClient, HttpError, RequestExecutor
from sellsy.http.tls import TlsPolicy, should_verify_peer
from sellsy.schemas.errors import (
    ApiError,
    ApiErrorPayload,
    ErrorCodes,
    RequestFailure,
)

if TYPE_CHECKING:
    from sellsy.config.runtime import ClientConfig


logger = logging.getLogger(__name__)


DEFAULT_API_URL = "https://apifeed.sellsy.com/0/"

# Marker the server puts in a plain-text body when it rejects the OAuth header.
OAUTH_PROBLEM_MARKER = "oauth_problem"


class SellsyClient:
    """
    Client for the Sellsy API.

    Usage:
        client = SellsyClient(
            OAuthCredentials(
                consumer_key="...",
                consumer_secret="...",
                access_token="...",
                access_token_secret="...",
            ),
        )
        infos = client.get_infos()
        docs = client.document().getList({"doctype": "invoice"})

    Args:
        credentials: OAuth keys; empty credentials when omitted
        api_url: Endpoint every call is posted to
        executor: Performs the HTTP POST (defaults to HttpClient)
        collection_generator: Builds the per-module accessors
        clock: "Now" for the OAuth timestamp (defaults to real time)
        rng: Random source for the OAuth nonce
        tls_policy: When to verify the server certificate
        timeout: Request timeout in seconds, passed to the executor
    """

    def __init__(
        self,
        credentials: Optional[OAuthCredentials] = None,
        *,
        api_url: str = DEFAULT_API_URL,
        executor: Optional[RequestExecutor] = None,
        collection_generator: Optional[CollectionGenerator] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        tls_policy: "TlsPolicy | str" = TlsPolicy.AUTO,
        timeout: float = 30.0,
    ) -> None:
        self._credentials = credentials or OAuthCredentials()
        self._api_url = api_url
        self._executor = executor or HttpClient(timeout=timeout)
        self._owns_executor = executor is None
        self._collection_generator = collection_generator or CollectionGenerator()
        self._authenticator = OAuthAuthenticator(clock=clock, rng=rng)
        self._tls_policy = TlsPolicy.parse(tls_policy)
        self.timeout = timeout

        self._last_request: Optional[dict[str, Any]] = None
        self._last_answer: Any = None

    @classmethod
    def from_config(
        cls,
        config: "ClientConfig",
        **kwargs: Any,
    ) -> "SellsyClient":
        """Build a client from a ClientConfig; kwargs override constructor args."""
        options: dict[str, Any] = {
            "api_url": config.api_url,
            "tls_policy": config.http.tls_policy,
            "timeout": config.http.timeout,
        }
        if "executor" not in kwargs:
            options["executor"] = HttpClient(
                timeout=config.http.timeout,
                default_headers={"User-Agent": config.http.user_agent},
                proxy=config.http.proxy,
            )
        options.update(kwargs)
        client = cls(config.credentials(), **options)
        if "executor" not in kwargs:
            client._owns_executor = True
        return client

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def api_url(self) -> str:
        return self._api_url

    @api_url.setter
    def api_url(self, value: str) -> None:
        self._api_url = value

    @property
    def credentials(self) -> OAuthCredentials:
        return self._credentials

    @credentials.setter
    def credentials(self, value: OAuthCredentials) -> None:
        self._credentials = value

    @property
    def consumer_key(self) -> str:
        return self._credentials.consumer_key.get_secret_value()

    @consumer_key.setter
    def consumer_key(self, value: str) -> None:
        self._credentials = self._credentials.replace(consumer_key=value)

    @property
    def consumer_secret(self) -> str:
        return self._credentials.consumer_secret.get_secret_value()

    @consumer_secret.setter
    def consumer_secret(self, value: str) -> None:
        self._credentials = self._credentials.replace(consumer_secret=value)

    @property
    def access_token(self) -> str:
        return self._credentials.access_token.get_secret_value()

    @access_token.setter
    def access_token(self, value: str) -> None:
        self._credentials = self._credentials.replace(access_token=value)

    @property
    def access_token_secret(self) -> str:
        return self._credentials.access_token_secret.get_secret_value()

    @access_token_secret.setter
    def access_token_secret(self, value: str) -> None:
        self._credentials = self._credentials.replace(access_token_secret=value)

    @property
    def tls_policy(self) -> TlsPolicy:
        return self._tls_policy

    @tls_policy.setter
    def tls_policy(self, value: "TlsPolicy | str") -> None:
        self._tls_policy = TlsPolicy.parse(value)

    @property
    def authenticator(self) -> OAuthAuthenticator:
        return self._authenticator

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    @property
    def verify_peer(self) -> bool:
        """Whether the next request will verify the server certificate."""
        return should_verify_peer(self._api_url, self._tls_policy)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def last_request(self) -> Optional[dict[str, Any]]:
        """Form body of the most recent call, or None before the first one."""
        return self._last_request

    @property
    def last_answer(self) -> Any:
        """Parsed envelope of the most recent answered call, or None."""
        return self._last_answer

    def get_last_request(self) -> Optional[dict[str, Any]]:
        return self._last_request

    def get_last_answer(self) -> Any:
        return self._last_answer

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    @staticmethod
    def build_request_body(request_settings: Mapping[str, Any]) -> dict[str, Any]:
        """Wrap a {method, params} envelope into the form fields the API expects."""
        return {
            "request": 1,
            "io_mode": "json",
            "do_in": json.dumps(dict(request_settings), separators=(",", ":")),
        }

    def request_api(self, request_settings: Mapping[str, Any]) -> Any:
        """
        Perform one API call.

        Args:
            request_settings: {"method": "Module.action", "params": {...}}

        Returns:
            The parsed response envelope

        Raises:
            RequestFailure: if the exchange failed, the OAuth header was
                rejected, or the answer is not JSON
            ApiError: if the API answered with status "error"
        """
        method = request_settings.get("method", "")
        self._last_request = self.build_request_body(request_settings)

        verify = self.verify_peer
        if not verify:
            logger.warning(
                f"TLS peer verification disabled for {self._api_url} "
                f"(policy={self._tls_policy.value})"
            )

        logger.debug(f"Calling {method} on {self._api_url}")
        try:
            response = self._executor.post(
                self._api_url,
                headers=self._authenticator.headers(self._credentials),
                data=self._last_request,
                verify=verify,
                timeout=self.timeout,
            )
        except (HttpError, OSError) as e:
            logger.error(f"Request for {method} failed: {e}")
            raise RequestFailure(
                f"Request to {self._api_url} failed: {e}",
                code=ErrorCodes.TRANSPORT_ERROR,
                details={"method": method},
            ) from e

        logger.debug(f"{method} -> HTTP {response.status_code} in {response.elapsed_ms:.0f}ms")
        raw = response.text

        if OAUTH_PROBLEM_MARKER in raw:
            logger.warning(f"OAuth rejected for {method}: {raw[:200]}")
            raise RequestFailure(
                raw,
                code=ErrorCodes.OAUTH_PROBLEM,
                raw_response=raw,
                details={"method": method, "status_code": response.status_code},
            )

        try:
            answer = json.loads(raw)
        except ValueError as e:
            logger.error(f"Invalid JSON answer for {method} (HTTP {response.status_code})")
            raise RequestFailure(
                f"Invalid JSON answer from {self._api_url}: {e}",
                code=ErrorCodes.INVALID_RESPONSE,
                raw_response=raw,
                details={"method": method, "status_code": response.status_code},
            ) from e

        self._last_answer = answer

        if isinstance(answer, dict) and answer.get("status") == "error":
            error = ApiErrorPayload.from_raw(answer.get("error"))
            logger.warning(f"API error for {method}: {error.code} {error.message}")
            raise ApiError(error)

        return answer

    def call(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Shortcut for request_api({"method": method, "params": params})."""
        return self.request_api({"method": method, "params": dict(params or {})})

    def get_infos(self) -> Any:
        """Account information (Infos.getInfos)."""
        return self.call("Infos.getInfos")

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def collection(self, module: "str | ApiModule") -> Collection:
        """Accessor for the methods of one API module."""
        return self._collection_generator.get_collection(self, module)

    def __getattr__(self, name: str) -> Callable[[], Collection]:
        # client.document(), client.smart_tags(), ... for every ApiModule.
        if name.startswith("_"):
            raise AttributeError(name)
        module = ApiModule.from_accessor(name)
        if module is None:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
        return lambda: self.collection(module)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | {m.accessor_name for m in ApiModule})

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the executor if this client created it."""
        if self._owns_executor and hasattr(self._executor, "close"):
            self._executor.close()

    def __enter__(self) -> "SellsyClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SellsyClient(api_url={self._api_url!r})"
