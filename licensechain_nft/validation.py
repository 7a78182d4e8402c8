"""
Client-side input validation.

Format checks (``is_*``) return a boolean and never raise. Requirement
checks (``require_*``) raise ``ValidationError`` naming the offending
field. Managers run these before building a request, so a call known
to violate an invariant never reaches the network.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from licensechain_nft.errors import ValidationError

_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")
_TOKEN_ID_RE = re.compile(r"[0-9]+")
_METADATA_FIELDS = ("name", "description", "image")


def is_ethereum_address(value: Any) -> bool:
    return isinstance(value, str) and _ADDRESS_RE.fullmatch(value) is not None


def is_token_id(value: Any) -> bool:
    return isinstance(value, str) and _TOKEN_ID_RE.fullmatch(value) is not None


def is_valid_metadata(value: Any) -> bool:
    """True when ``value`` is a mapping with non-empty string name, description and image."""
    if not isinstance(value, Mapping):
        return False
    for key in _METADATA_FIELDS:
        item = value.get(key)
        if not isinstance(item, str) or not item:
            return False
    return True


def require_address(value: Any, field: str) -> str:
    if not is_ethereum_address(value):
        raise ValidationError(f"Invalid {field} format")
    return value


def require_token_id(value: Any, field: str = "token_id") -> str:
    if not is_token_id(value):
        raise ValidationError(f"Invalid {field} format")
    return value


def require_not_empty(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} cannot be empty")
    return value


def require_id(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    # dot segments survive percent-encoding and would be collapsed by URL normalization
    if value in (".", ".."):
        raise ValidationError(f"Invalid {field} format")
    return value


def _as_number(value: Any, field: str) -> float:
    # bool is an int subclass; True must not pass as a quantity
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number")
    if math.isnan(value):
        raise ValidationError(f"{field} must be a number")
    return value


def require_positive(value: Any, field: str) -> float:
    number = _as_number(value, field)
    if number <= 0:
        raise ValidationError(f"{field} must be positive")
    return number


def require_range(value: Any, low: float, high: float, field: str) -> float:
    number = _as_number(value, field)
    if number < low or number > high:
        raise ValidationError(f"{field} must be between {low} and {high}")
    return number


def require_metadata(value: Any, field: str = "metadata") -> Mapping[str, Any]:
    if not is_valid_metadata(value):
        raise ValidationError(f"Invalid {field} format")
    return value
