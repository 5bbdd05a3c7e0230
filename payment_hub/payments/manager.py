from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

import httpx

from payment_hub.errors import gateway_not_initialized, provider_not_supported
from payment_hub.logging_config import get_logger
from payment_hub.payments.paytech.gateway import PaytechGateway
from payment_hub.payments.provider import PaymentGateway
from payment_hub.payments.types import (
    GatewayConfig,
    PaymentRequest,
    PaymentResponse,
    RefundResponse,
    TransactionStatus,
    WebhookEvent,
    WebhookValidationResult,
)
from payment_hub.settings import get_settings

logger = get_logger(__name__)


class PaymentProviderName(str, Enum):
    PAYTECH = "paytech"
    CINETPAY = "cinetpay"
    MONEY_FUSION = "moneyfusion"


_NOT_YET_IMPLEMENTED = {
    PaymentProviderName.CINETPAY: "CinetPay",
    PaymentProviderName.MONEY_FUSION: "MoneyFusion",
}


def create_gateway(
    provider: PaymentProviderName | str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PaymentGateway:
    key = provider.value if isinstance(provider, PaymentProviderName) else str(provider).lower()
    try:
        name = PaymentProviderName(key)
    except ValueError as err:
        raise provider_not_supported(f"Unsupported payment provider: {provider}", str(provider)) from err

    if name in _NOT_YET_IMPLEMENTED:
        raise provider_not_supported(f"{_NOT_YET_IMPLEMENTED[name]} provider not yet implemented", name.value)

    return PaytechGateway(transport=transport)


class MultiPaymentGateway:
    """Owns the active provider adapter and forwards the gateway contract to it.

    Construct one per provider configuration; several may coexist in a process.
    """

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport
        self._gateway: PaymentGateway | None = None
        self._provider: PaymentProviderName | None = None

    @classmethod
    async def configure_from_settings(cls) -> "MultiPaymentGateway":
        settings = get_settings()
        hub = cls()
        await hub.initialize(settings.payment_provider, settings.gateway_config())
        return hub

    @property
    def provider(self) -> PaymentProviderName | None:
        return self._provider

    @property
    def gateway(self) -> PaymentGateway:
        if self._gateway is None:
            raise gateway_not_initialized("Payment gateway not initialized. Call initialize() first.")
        return self._gateway

    async def initialize(self, provider: PaymentProviderName | str, config: GatewayConfig) -> bool:
        gateway = create_gateway(provider, transport=self._transport)
        initialized = await gateway.initialize(config)

        previous = self._gateway
        self._gateway = gateway
        self._provider = PaymentProviderName(gateway.provider_name)
        if previous is not None:
            await previous.aclose()

        logger.info("payment_gateway_selected", provider=self._provider.value, replaced=previous is not None)
        return initialized

    async def aclose(self) -> None:
        if self._gateway is not None:
            await self._gateway.aclose()
        self._gateway = None
        self._provider = None

    async def __aenter__(self) -> "MultiPaymentGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        return await self.gateway.create_payment(request)

    async def verify_payment(self, payment_id: str) -> TransactionStatus:
        return await self.gateway.verify_payment(payment_id)

    async def refund_payment(self, payment_id: str, amount: float | None = None) -> RefundResponse:
        return await self.gateway.refund_payment(payment_id, amount)

    async def validate_webhook(
        self,
        payload: Mapping[str, Any] | None,
        headers: Mapping[str, str],
    ) -> WebhookValidationResult:
        return await self.gateway.validate_webhook(payload, headers)

    async def process_webhook(self, payload: Mapping[str, Any] | None) -> WebhookEvent:
        return await self.gateway.process_webhook(payload)
