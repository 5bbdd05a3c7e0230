from __future__ import annotations

import hashlib
import hmac
import json
import secrets
import time
from typing import Any, Mapping

from payment_hub.payments.paytech.constants import PAYTECH_CURRENCIES


def is_valid_currency(currency: str) -> bool:
    return currency.upper() in PAYTECH_CURRENCIES


def is_valid_amount(amount: float) -> bool:
    # No upper bound or minor-unit precision check; Paytech rejects what it cannot take.
    return amount > 0


def _canonical_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def canonical_payload_string(payload: Mapping[str, Any]) -> str:
    return "&".join(f"{key}={_canonical_value(payload[key])}" for key in sorted(payload))


def create_webhook_signature(payload: Mapping[str, Any], secret: str) -> str:
    message = canonical_payload_string(payload)
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_webhook_signature(payload: Mapping[str, Any], signature: str, secret: str) -> bool:
    expected = create_webhook_signature(payload, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


def generate_nonce() -> str:
    return secrets.token_hex(13)


def format_amount(amount: float, currency: str) -> str:
    code = currency.upper()
    if code == "XOF":
        return f"{_group_digits(amount, ' ', ',')} FCFA"
    if code == "EUR":
        return f"{_group_digits(amount, ' ', ',')} €"
    if code == "USD":
        return f"${_group_digits(amount, ',', '.')}"
    if code == "GBP":
        return f"£{_group_digits(amount, ',', '.')}"
    return f"{_plain_number(amount)} {currency}"


def _plain_number(amount: float) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def _group_digits(amount: float, thousands: str, decimal: str) -> str:
    # At most three fraction digits, trailing zeros dropped.
    formatted = f"{amount:,.3f}".rstrip("0").rstrip(".")
    whole, _, fraction = formatted.partition(".")
    whole = whole.replace(",", thousands)
    return f"{whole}{decimal}{fraction}" if fraction else whole


def generate_reference(prefix: str = "PAY") -> str:
    timestamp = int(time.time() * 1000)
    random_part = f"{secrets.randbelow(1_000_000):06d}"
    return f"{prefix}-{timestamp}-{random_part}"
