"""
LicenseChain NFT client error taxonomy.

Every failure raised by this package is a ``LicenseChainError`` carrying
exactly one ``ErrorKind``. Callers branch on ``error.kind`` or
``error.code`` rather than on message text:

- **ValidationError**: input rejected client-side, or HTTP 400
- **AuthenticationError**: HTTP 401/403, or a bad webhook signature
- **NotFoundError**: HTTP 404
- **RateLimitError**: HTTP 429
- **ServerError**: HTTP 5xx and any unmapped status
- **NetworkError**: timeouts and connection failures, after retries
- **NFTError / CollectionError / MarketplaceError**: the service answered
  with a payload that does not match the expected envelope
- **ConfigError**: client configuration cannot be built

Retry Policy:
    Only raw transport failures are retried by the executor. A classified
    error means the service (or the client) has answered definitively,
    so it propagates immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    GENERIC = "generic"
    CONFIGURATION = "configuration"
    NETWORK = "network"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    NFT = "nft"
    MARKETPLACE = "marketplace"
    COLLECTION = "collection"


@dataclass(frozen=True)
class LicenseChainError(Exception):
    """
    Base exception for all LicenseChain NFT client errors.

    Dataclass exception with structured error information for
    logging and branching.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable code; defaults to the kind's code.
        status_code: HTTP status code (None for non-HTTP errors).
        response_text: Raw response body text.
    """
    message: str
    code: str | None = None
    status_code: int | None = None
    response_text: str | None = None

    kind: ClassVar[ErrorKind] = ErrorKind.GENERIC
    default_code: ClassVar[str] = "LICENSECHAIN_NFT_ERROR"

    def __post_init__(self) -> None:
        if self.code is None:
            object.__setattr__(self, "code", self.default_code)

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.response_text:
            parts.append(f"response={self.response_text}")
        return " | ".join(parts)


class ConfigError(LicenseChainError):
    """Raised when client configuration cannot be loaded or validated."""

    kind = ErrorKind.CONFIGURATION
    default_code = "CONFIGURATION_ERROR"


class NetworkError(LicenseChainError):
    """
    Transport-level failure.

    Raised for timeouts and connection errors once the retry budget
    is exhausted. The message is "Request timeout" for timeouts.
    """

    kind = ErrorKind.NETWORK
    default_code = "NETWORK_ERROR"


class ValidationError(LicenseChainError):
    """Input rejected before dispatch, or HTTP 400 from the service."""

    kind = ErrorKind.VALIDATION
    default_code = "VALIDATION_ERROR"


class AuthenticationError(LicenseChainError):
    """HTTP 401/403 - missing, invalid or insufficient credentials."""

    kind = ErrorKind.AUTHENTICATION
    default_code = "AUTHENTICATION_ERROR"


class NotFoundError(LicenseChainError):
    kind = ErrorKind.NOT_FOUND
    default_code = "NOT_FOUND_ERROR"


class RateLimitError(LicenseChainError):
    """
    HTTP 429 - Rate limit exceeded.

    Not retried by the executor; the caller decides when to try again.
    """

    kind = ErrorKind.RATE_LIMIT
    default_code = "RATE_LIMIT_ERROR"


class ServerError(LicenseChainError):
    """HTTP 5xx, any unmapped status, or an unreadable success body."""

    kind = ErrorKind.SERVER
    default_code = "SERVER_ERROR"


class NFTError(LicenseChainError):
    kind = ErrorKind.NFT
    default_code = "NFT_ERROR"


class MarketplaceError(LicenseChainError):
    kind = ErrorKind.MARKETPLACE
    default_code = "MARKETPLACE_ERROR"


class CollectionError(LicenseChainError):
    kind = ErrorKind.COLLECTION
    default_code = "COLLECTION_ERROR"
