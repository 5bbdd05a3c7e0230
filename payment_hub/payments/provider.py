from __future__ import annotations

from typing import Any, Mapping, Protocol

from payment_hub.payments.types import (
    GatewayConfig,
    PaymentRequest,
    PaymentResponse,
    RefundResponse,
    SubscriptionRequest,
    SubscriptionResponse,
    TransactionStatus,
    WebhookEvent,
    WebhookValidationResult,
)


class PaymentGateway(Protocol):
    provider_name: str

    @property
    def is_initialized(self) -> bool:
        ...

    async def initialize(self, config: GatewayConfig) -> bool:
        ...

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        ...

    async def verify_payment(self, payment_id: str) -> TransactionStatus:
        ...

    async def refund_payment(self, payment_id: str, amount: float | None = None) -> RefundResponse:
        ...

    async def validate_webhook(
        self,
        payload: Mapping[str, Any] | None,
        headers: Mapping[str, str],
    ) -> WebhookValidationResult:
        ...

    async def process_webhook(self, payload: Mapping[str, Any] | None) -> WebhookEvent:
        ...

    async def create_subscription(self, request: SubscriptionRequest) -> SubscriptionResponse:
        ...

    async def cancel_subscription(self, subscription_id: str) -> bool:
        ...

    async def aclose(self) -> None:
        ...
