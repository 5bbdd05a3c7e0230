from __future__ import annotations

from typing import Any, Mapping

from payment_hub.logging_config import get_logger
from payment_hub.payments.paytech.constants import (
    PAYTECH_SIGNATURE_HEADERS,
    PAYTECH_WEBHOOK_REQUIRED_FIELDS,
)
from payment_hub.payments.paytech.mappers import map_from_paytech_webhook
from payment_hub.payments.paytech.schemas import PaytechWebhookPayload
from payment_hub.payments.paytech.utils import verify_webhook_signature
from payment_hub.payments.types import WebhookEvent, WebhookValidationResult

logger = get_logger(__name__)


def _signature_from_headers(headers: Mapping[str, str]) -> str | None:
    for name in PAYTECH_SIGNATURE_HEADERS:
        value = headers.get(name)
        if value:
            return value
    return None


def validate_paytech_webhook(
    payload: Mapping[str, Any] | None,
    headers: Mapping[str, str],
    webhook_secret: str | None = None,
) -> WebhookValidationResult:
    """Check an IPN payload for completeness and, when a secret is set, its signature.

    Without a webhook secret any well-formed payload is accepted; authenticity
    is then the caller's problem.
    """
    if not payload:
        return WebhookValidationResult(is_valid=False, reason="Empty payload")

    for field_name in PAYTECH_WEBHOOK_REQUIRED_FIELDS:
        if not payload.get(field_name):
            return WebhookValidationResult(is_valid=False, reason=f"Missing required field: {field_name}")

    if webhook_secret:
        signature = _signature_from_headers(headers or {})
        if not signature:
            logger.warning("paytech_webhook_signature_missing", token=payload.get("token"))
            return WebhookValidationResult(is_valid=False, reason="Missing signature header")

        if not verify_webhook_signature(payload, signature, webhook_secret):
            logger.warning("paytech_webhook_signature_invalid", token=payload.get("token"))
            return WebhookValidationResult(is_valid=False, reason="Invalid signature")

    return WebhookValidationResult(is_valid=True)


def process_paytech_webhook(payload: Mapping[str, Any]) -> WebhookEvent:
    return map_from_paytech_webhook(PaytechWebhookPayload.model_validate(dict(payload)))


def generate_paytech_webhook_response(success: bool, message: str | None = None) -> dict[str, str]:
    default_message = "Webhook processed successfully" if success else "Failed to process webhook"
    return {
        "status": "success" if success else "error",
        "message": message or default_message,
    }
