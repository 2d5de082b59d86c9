"""
TLS peer verification policy.

AUTO keeps the historical behaviour of the library: certificates are checked
for https endpoints and not checked for anything else (plain-http test
servers). ALWAYS / NEVER make the choice explicit instead of tying it to the
URL scheme.
"""

from __future__ import annotations

import re
from enum import Enum

from sellsy.schemas.errors import ConfigurationError


_HTTPS_RE = re.compile(r"^https", re.IGNORECASE)


class TlsPolicy(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def parse(cls, value: "str | TlsPolicy") -> "TlsPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ConfigurationError(
                f"Unknown TLS policy {value!r} (expected one of: {choices})",
                details={"tls_policy": str(value)},
            ) from None


def should_verify_peer(url: str, policy: TlsPolicy = TlsPolicy.AUTO) -> bool:
    """Whether the peer certificate must be verified for a request to url."""
    if policy is TlsPolicy.ALWAYS:
        return True
    if policy is TlsPolicy.NEVER:
        return False
    return bool(_HTTPS_RE.match(url or ""))
