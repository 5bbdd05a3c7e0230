from payment_hub.payments.manager import MultiPaymentGateway, PaymentProviderName, create_gateway
from payment_hub.payments.provider import PaymentGateway
from payment_hub.payments.types import (
    Environment,
    GatewayConfig,
    PaymentRequest,
    PaymentResponse,
    RefundResponse,
    SubscriptionRequest,
    SubscriptionResponse,
    TransactionStatus,
    WebhookEvent,
    WebhookEventData,
    WebhookEventType,
    WebhookValidationResult,
)

__all__ = [
    "Environment",
    "GatewayConfig",
    "MultiPaymentGateway",
    "PaymentGateway",
    "PaymentProviderName",
    "PaymentRequest",
    "PaymentResponse",
    "RefundResponse",
    "SubscriptionRequest",
    "SubscriptionResponse",
    "TransactionStatus",
    "WebhookEvent",
    "WebhookEventData",
    "WebhookEventType",
    "WebhookValidationResult",
    "create_gateway",
]
