from payment_hub.payments.paytech.gateway import PaytechConfig, PaytechGateway
from payment_hub.payments.paytech.mappers import (
    map_from_paytech_refund_response,
    map_from_paytech_response,
    map_from_paytech_webhook,
    map_paytech_status,
    map_status,
    map_to_paytech_request,
)
from payment_hub.payments.paytech.utils import (
    create_webhook_signature,
    format_amount,
    generate_nonce,
    generate_reference,
    is_valid_amount,
    is_valid_currency,
    verify_webhook_signature,
)
from payment_hub.payments.paytech.webhooks import (
    generate_paytech_webhook_response,
    process_paytech_webhook,
    validate_paytech_webhook,
)

__all__ = [
    "PaytechConfig",
    "PaytechGateway",
    "create_webhook_signature",
    "format_amount",
    "generate_nonce",
    "generate_paytech_webhook_response",
    "generate_reference",
    "is_valid_amount",
    "is_valid_currency",
    "map_from_paytech_refund_response",
    "map_from_paytech_response",
    "map_from_paytech_webhook",
    "map_paytech_status",
    "map_status",
    "map_to_paytech_request",
    "process_paytech_webhook",
    "validate_paytech_webhook",
    "verify_webhook_signature",
]
