"""
Error taxonomy for the Sellsy client.

Defines a Pydantic model for the error payload the API returns and the
Python exceptions raised to callers.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes raised by the client itself."""

    # Exchange failures
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    OAUTH_PROBLEM = "OAUTH_PROBLEM"
    INVALID_RESPONSE = "INVALID_RESPONSE"

    # Server-side rejection of the call
    API_ERROR = "API_ERROR"

    # Local setup
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models
# =============================================================================

class ApiErrorPayload(BaseModel):
    """
    The `error` object of an envelope whose status is "error".

    Sellsy sends at least a code and a message; anything else it adds
    (`more`, `inerror`, ...) is kept verbatim as extra fields.
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
    )

    code: Any = Field(
        default=None,
        description="Server error code, e.g. E_OBJ_NOT_LOADABLE",
    )
    message: Any = Field(
        default="",
        description="Human-readable error message",
    )

    @classmethod
    def from_raw(cls, raw: Any) -> "ApiErrorPayload":
        """Build a payload from whatever the envelope carried under `error`."""
        if isinstance(raw, dict):
            return cls.model_validate(raw)
        if raw is None:
            return cls()
        return cls(message=raw)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class SellsyError(BaseModel):
    """Structured error, for reporting failures without raising."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.TRANSPORT_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SellsyException(Exception):
    """
    Base exception for all errors raised by the client.

    Carries structured error information and can be converted to a
    SellsyError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "SELLSY_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> SellsyError:
        """Convert this exception to a SellsyError model."""
        return SellsyError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class RequestFailure(SellsyException):
    """
    The HTTP exchange did not complete cleanly.

    Raised on transport errors (the original error is the __cause__), on an
    OAuth rejection reported in plain text, and on a body that is not JSON.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.TRANSPORT_ERROR,
        raw_response: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details)
        self.raw_response = raw_response


class ApiError(SellsyException):
    """The API answered with a JSON envelope whose status is "error"."""

    def __init__(self, error: ApiErrorPayload) -> None:
        message = str(error.message) if error.message else "Sellsy API returned an error"
        if error.code is not None:
            message = f"{error.code}: {message}"
        super().__init__(
            message=message,
            code=ErrorCodes.API_ERROR,
            details=error.to_dict(),
        )
        self.error = error

    @property
    def api_code(self) -> Any:
        """Error code sent by the server."""
        return self.error.code

    @property
    def api_message(self) -> Any:
        """Error message sent by the server."""
        return self.error.message


class ConfigurationError(SellsyException):
    """Raised when client configuration is invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=details,
        )
