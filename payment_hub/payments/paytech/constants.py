from __future__ import annotations

from enum import Enum

PAYTECH_GATEWAY_NAME = "paytech"

PAYTECH_API_BASE_URL = "https://paytech.sn/api"

PAYTECH_REQUEST_PAYMENT_ENDPOINT = "/payment/request-payment"
PAYTECH_CHECK_STATUS_ENDPOINT = "/payment/check-status"
PAYTECH_REFUND_ENDPOINT = "/payment/refund"

PAYTECH_DEFAULT_TIMEOUT_MS = 10_000

# XOF is the West African CFA franc, MAD the Moroccan dirham.
PAYTECH_CURRENCIES: tuple[str, ...] = ("XOF", "EUR", "USD", "CAD", "GBP", "MAD")

PAYTECH_SIGNATURE_HEADERS: tuple[str, ...] = ("x-paytech-signature", "X-Paytech-Signature")

PAYTECH_WEBHOOK_REQUIRED_FIELDS: tuple[str, ...] = ("token", "ref_command", "type", "status")


class PaytechEnvironment(str, Enum):
    TEST = "test"
    PRODUCTION = "prod"


class PaytechWebhookEvent(str, Enum):
    PAYMENT_SUCCESS = "payment_success"
    PAYMENT_FAILED = "payment_failed"
    PAYMENT_CANCELED = "payment_canceled"
    REFUND_SUCCESS = "refund_success"
    REFUND_FAILED = "refund_failed"
