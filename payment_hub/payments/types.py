from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Environment(str, Enum):
    TEST = "test"
    PRODUCTION = "production"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


class WebhookEventType(str, Enum):
    PAYMENT_SUCCESS = "payment.success"
    PAYMENT_FAILED = "payment.failed"
    PAYMENT_PENDING = "payment.pending"
    REFUND_SUCCESS = "refund.success"
    REFUND_FAILED = "refund.failed"
    SUBSCRIPTION_CREATED = "subscription.created"
    SUBSCRIPTION_CANCELED = "subscription.canceled"
    SUBSCRIPTION_PAYMENT = "subscription.payment"
    SUBSCRIPTION_FAILED = "subscription.failed"


@dataclass(frozen=True)
class GatewayConfig:
    api_key: str
    api_secret: str
    environment: Literal["test", "production"] = "test"
    webhook_secret: str | None = None
    additional_config: dict[str, Any] | None = None


@dataclass(frozen=True)
class PaymentRequest:
    amount: float
    currency: str
    reference: str
    description: str
    customer_email: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    metadata: dict[str, Any] | None = None
    return_url: str | None = None
    cancel_url: str | None = None
    webhook_url: str | None = None


@dataclass(frozen=True)
class PaymentResponse:
    success: bool
    redirect_url: str | None = None
    payment_id: str | None = None
    token: str | None = None
    message: str | None = None
    status: TransactionStatus | None = None
    gateway_reference: str | None = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class RefundResponse:
    success: bool
    refund_id: str | None = None
    amount: float | None = None
    message: str | None = None
    status: TransactionStatus | None = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class WebhookValidationResult:
    is_valid: bool
    reason: str | None = None


@dataclass(frozen=True)
class WebhookEventData:
    reference: str
    status: TransactionStatus
    payment_id: str | None = None
    amount: float | None = None
    currency: str | None = None
    metadata: dict[str, Any] | None = None
    gateway_reference: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WebhookEvent:
    type: WebhookEventType
    data: WebhookEventData
    gateway_name: str
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class SubscriptionRequest:
    plan_name: str
    amount: float
    currency: str
    interval: Literal["daily", "weekly", "monthly", "yearly"]
    customer_email: str
    interval_count: int | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    metadata: dict[str, Any] | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    return_url: str | None = None
    cancel_url: str | None = None
    webhook_url: str | None = None


@dataclass(frozen=True)
class SubscriptionResponse:
    success: bool
    subscription_id: str | None = None
    redirect_url: str | None = None
    status: Literal["active", "pending", "canceled", "expired"] | None = None
    message: str | None = None
    gateway_reference: str | None = None
    next_billing_date: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
