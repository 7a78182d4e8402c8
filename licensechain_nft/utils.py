from __future__ import annotations

import math
import secrets

from licensechain_nft.errors import ValidationError

DEFAULT_CURRENCY = "ETH"


def generate_token_id() -> str:
    """Random decimal token id below 10**9, suitable for ``CreateNFTRequest.token_id``."""
    return str(secrets.randbelow(1_000_000_000))


def format_price(price: float, currency: str) -> str:
    return f"{price:.4f} {currency}"


def parse_price(text: str) -> tuple[float, str]:
    """Parse ``"1.5 ETH"`` into ``(1.5, "ETH")``; a bare number defaults to ETH."""
    parts = text.split()
    if not parts or len(parts) > 2:
        raise ValidationError(f"Invalid price: {text!r}")
    try:
        price = float(parts[0])
    except ValueError as exc:
        raise ValidationError(f"Invalid price: {text!r}") from exc
    if not math.isfinite(price):
        raise ValidationError(f"Invalid price: {text!r}")
    currency = parts[1] if len(parts) == 2 else DEFAULT_CURRENCY
    return price, currency
