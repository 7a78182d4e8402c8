"""
HTTP status classification.

Maps a non-success response onto the error taxonomy. The mapping is
deterministic and total: every status code resolves to exactly one
error kind.

Classification Table:
    400             → ValidationError      "Bad Request: ..."
    401             → AuthenticationError  "Unauthorized: ..."
    403             → AuthenticationError  "Forbidden: ..."
    404             → NotFoundError        "Not Found: ..."
    429             → RateLimitError       "Rate Limited: ..."
    500/502/503/504 → ServerError          "Server Error: ..."
    anything else   → ServerError          "Unexpected response: <code> ..."
"""

from __future__ import annotations

import json

from licensechain_nft.errors import (
    AuthenticationError,
    LicenseChainError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)

UNKNOWN_ERROR = "Unknown error"

_STATUS_TABLE: dict[int, tuple[type[LicenseChainError], str]] = {
    400: (ValidationError, "Bad Request"),
    401: (AuthenticationError, "Unauthorized"),
    403: (AuthenticationError, "Forbidden"),
    404: (NotFoundError, "Not Found"),
    429: (RateLimitError, "Rate Limited"),
    500: (ServerError, "Server Error"),
    502: (ServerError, "Server Error"),
    503: (ServerError, "Server Error"),
    504: (ServerError, "Server Error"),
}


def extract_error_message(body: str | None) -> str:
    """
    Pull a human-readable message out of an error response body.

    A JSON object yields its ``error`` or ``message`` field; any other
    body yields its raw text; an empty body yields "Unknown error".
    Never raises.
    """
    if not body:
        return UNKNOWN_ERROR
    try:
        payload = json.loads(body)
    except ValueError:
        return body
    if isinstance(payload, dict):
        for key in ("error", "message"):
            value = payload.get(key)
            if value:
                return str(value)
        return UNKNOWN_ERROR
    return body


def classify_status(status_code: int, message: str, *, response_text: str | None = None) -> LicenseChainError:
    entry = _STATUS_TABLE.get(status_code)
    if entry is None:
        return ServerError(
            f"Unexpected response: {status_code} {message}",
            status_code=status_code,
            response_text=response_text,
        )
    error_cls, label = entry
    return error_cls(f"{label}: {message}", status_code=status_code, response_text=response_text)
