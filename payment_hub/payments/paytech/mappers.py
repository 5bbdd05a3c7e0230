"""
Translation between the unified payment model and Paytech's wire format.

Every function here is pure apart from reading the clock for timestamps the
provider does not supply. Unknown provider vocabulary never raises: statuses
fall back to ``TransactionStatus.FAILED`` and event types to
``WebhookEventType.PAYMENT_SUCCESS``.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from payment_hub.logging_config import get_logger
from payment_hub.payments.paytech.constants import (
    PAYTECH_GATEWAY_NAME,
    PaytechEnvironment,
    PaytechWebhookEvent,
)
from payment_hub.payments.paytech.schemas import (
    PaytechPaymentRequest,
    PaytechPaymentResponse,
    PaytechRefundResponse,
    PaytechStatusResponse,
    PaytechWebhookPayload,
)
from payment_hub.payments.types import (
    PaymentRequest,
    PaymentResponse,
    RefundResponse,
    TransactionStatus,
    WebhookEvent,
    WebhookEventData,
    WebhookEventType,
    utcnow,
)

logger = get_logger(__name__)

STATUS_MAPPING: dict[str, TransactionStatus] = {
    "completed": TransactionStatus.COMPLETED,
    "success": TransactionStatus.COMPLETED,
    "pending": TransactionStatus.PENDING,
    "waiting": TransactionStatus.PENDING,
    "canceled": TransactionStatus.CANCELED,
    "cancelled": TransactionStatus.CANCELED,
    "refunded": TransactionStatus.REFUNDED,
}

WEBHOOK_EVENT_MAPPING: dict[str, WebhookEventType] = {
    PaytechWebhookEvent.PAYMENT_SUCCESS.value: WebhookEventType.PAYMENT_SUCCESS,
    PaytechWebhookEvent.PAYMENT_FAILED.value: WebhookEventType.PAYMENT_FAILED,
    PaytechWebhookEvent.PAYMENT_CANCELED.value: WebhookEventType.PAYMENT_FAILED,
    PaytechWebhookEvent.REFUND_SUCCESS.value: WebhookEventType.REFUND_SUCCESS,
    PaytechWebhookEvent.REFUND_FAILED.value: WebhookEventType.REFUND_FAILED,
}


def map_to_paytech_request(request: PaymentRequest, environment: str) -> PaytechPaymentRequest:
    return PaytechPaymentRequest(
        item_name=request.description,
        item_price=_amount_to_string(request.amount),
        currency=request.currency,
        ref_command=request.reference,
        command_name=request.description,
        env=PaytechEnvironment.PRODUCTION if environment == "production" else PaytechEnvironment.TEST,
        ipn_url=request.webhook_url,
        success_url=request.return_url,
        cancel_url=request.cancel_url,
        custom_field=json.dumps(request.metadata) if request.metadata is not None else None,
    )


def map_from_paytech_response(response: PaytechPaymentResponse) -> PaymentResponse:
    if response.success == 1:
        return PaymentResponse(
            success=True,
            redirect_url=response.redirect_url,
            token=response.token,
            # Paytech has no payment id separate from the token.
            payment_id=response.token,
            status=TransactionStatus.PENDING,
        )

    return PaymentResponse(
        success=False,
        message=response.error or "Unknown error occurred",
        status=TransactionStatus.FAILED,
    )


def map_status(value: str | None) -> TransactionStatus:
    return STATUS_MAPPING.get((value or "").strip().lower(), TransactionStatus.FAILED)


def map_paytech_status(status_response: PaytechStatusResponse) -> TransactionStatus:
    if not status_response.success:
        return TransactionStatus.FAILED
    return map_status(status_response.status)


def map_from_paytech_refund_response(
    response: PaytechRefundResponse,
    requested_amount: float | None = None,
) -> RefundResponse:
    if response.success == 1:
        return RefundResponse(
            success=True,
            refund_id=response.refund_id,
            amount=requested_amount or _parse_amount(response.amount),
            status=TransactionStatus.REFUNDED,
            created_at=parse_paytech_date(response.date),
        )

    return RefundResponse(
        success=False,
        message=response.error or "Refund failed",
        status=TransactionStatus.FAILED,
    )


def map_from_paytech_webhook(payload: PaytechWebhookPayload) -> WebhookEvent:
    event_type = WEBHOOK_EVENT_MAPPING.get(payload.type)
    if event_type is None:
        logger.warning("paytech_webhook_unknown_event_type", event_type=payload.type, token=payload.token)
        event_type = WebhookEventType.PAYMENT_SUCCESS

    extra: dict[str, Any] = {}
    if payload.customer_info is not None:
        extra["customer_email"] = payload.customer_info.email
        extra["customer_name"] = payload.customer_info.name
        extra["customer_phone"] = payload.customer_info.phone

    return WebhookEvent(
        type=event_type,
        data=WebhookEventData(
            reference=payload.ref_command,
            payment_id=payload.token,
            amount=_parse_amount(payload.amount),
            currency=payload.currency,
            status=map_status(payload.status),
            gateway_reference=payload.transaction_id,
            metadata=_parse_custom_field(payload.custom_field, token=payload.token),
            extra=extra,
        ),
        created_at=parse_paytech_date(payload.date),
        gateway_name=PAYTECH_GATEWAY_NAME,
    )


def parse_paytech_date(value: str | None) -> datetime:
    if not value:
        return utcnow()
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.warning("paytech_date_unparseable", value=value)
        return utcnow()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _amount_to_string(amount: float) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def _parse_amount(value: str | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_custom_field(value: Any, *, token: str | None) -> dict[str, Any]:
    if value is None or value == "":
        return {}
    if isinstance(value, dict):
        return value
    if not isinstance(value, str):
        logger.warning("paytech_webhook_metadata_unparseable", token=token)
        return {"raw": value}
    try:
        parsed = json.loads(value)
    except ValueError:
        logger.warning("paytech_webhook_metadata_unparseable", token=token)
        return {"raw": value}
    if not isinstance(parsed, dict):
        return {"raw": value}
    return parsed
