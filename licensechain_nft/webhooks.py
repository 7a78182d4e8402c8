"""
Webhook signature helpers.

The service signs each webhook body with HMAC-SHA256 over the raw payload
using the shared webhook secret, hex-encoded. Verification compares in
constant time.
"""

from __future__ import annotations

import hashlib
import hmac
import json

import pydantic

from licensechain_nft.errors import AuthenticationError, ValidationError
from licensechain_nft.models.marketplace import WebhookEvent


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def create_webhook_signature(payload: str | bytes, secret: str | bytes) -> str:
    return hmac.new(_as_bytes(secret), _as_bytes(payload), hashlib.sha256).hexdigest()


def verify_webhook_signature(payload: str | bytes, signature: str, secret: str | bytes) -> bool:
    """Return True only when ``signature`` is the hex HMAC of ``payload``; never raises on bad input."""
    if not isinstance(signature, str):
        return False
    expected = create_webhook_signature(payload, secret)
    return hmac.compare_digest(signature.strip().lower().encode("ascii", "replace"), expected.encode("ascii"))


def parse_webhook_event(payload: str | bytes, signature: str, secret: str | bytes) -> WebhookEvent:
    if not verify_webhook_signature(payload, signature, secret):
        raise AuthenticationError("Invalid webhook signature")
    try:
        return WebhookEvent.model_validate(json.loads(payload))
    except (ValueError, pydantic.ValidationError) as exc:
        raise ValidationError(f"Invalid webhook payload: {exc}") from exc
