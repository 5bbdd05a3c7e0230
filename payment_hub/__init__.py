from payment_hub.errors import AppException, ErrorCode
from payment_hub.payments import (
    Environment,
    GatewayConfig,
    MultiPaymentGateway,
    PaymentGateway,
    PaymentProviderName,
    PaymentRequest,
    PaymentResponse,
    RefundResponse,
    TransactionStatus,
    WebhookEvent,
    WebhookEventData,
    WebhookEventType,
    WebhookValidationResult,
    create_gateway,
)

__all__ = [
    "AppException",
    "Environment",
    "ErrorCode",
    "GatewayConfig",
    "MultiPaymentGateway",
    "PaymentGateway",
    "PaymentProviderName",
    "PaymentRequest",
    "PaymentResponse",
    "RefundResponse",
    "TransactionStatus",
    "WebhookEvent",
    "WebhookEventData",
    "WebhookEventType",
    "WebhookValidationResult",
    "create_gateway",
]
