from __future__ import annotations

import httpx
import pytest

from payment_hub import settings as settings_module
from payment_hub.errors import AppException, ErrorCode
from payment_hub.payments.manager import MultiPaymentGateway, PaymentProviderName, create_gateway
from payment_hub.payments.paytech.gateway import PaytechGateway
from payment_hub.payments.types import GatewayConfig, PaymentRequest, TransactionStatus


def _config(**overrides) -> GatewayConfig:
    payload = {"api_key": "key", "api_secret": "secret", "environment": "test"}
    payload.update(overrides)
    return GatewayConfig(**payload)


def _provider_api(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/payment/request-payment"):
        return httpx.Response(200, json={"success": 1, "redirect_url": "https://x/y", "token": "abc123"})
    if "/payment/check-status/" in request.url.path:
        return httpx.Response(200, json={"success": 1, "status": "pending"})
    if request.url.path.endswith("/payment/refund"):
        return httpx.Response(200, json={"success": 1, "refund_id": "rf-1"})
    return httpx.Response(404)


def test_create_gateway_returns_paytech_adapter():
    assert isinstance(create_gateway("paytech"), PaytechGateway)
    assert isinstance(create_gateway(PaymentProviderName.PAYTECH), PaytechGateway)
    assert isinstance(create_gateway("PayTech"), PaytechGateway)


@pytest.mark.parametrize(
    ("provider", "message"),
    [
        ("cinetpay", "CinetPay provider not yet implemented"),
        (PaymentProviderName.MONEY_FUSION, "MoneyFusion provider not yet implemented"),
        ("stripe", "Unsupported payment provider: stripe"),
    ],
)
def test_create_gateway_rejects_unavailable_providers(provider, message: str):
    with pytest.raises(AppException) as exc_info:
        create_gateway(provider)

    assert str(exc_info.value) == message
    assert exc_info.value.code == ErrorCode.PAYMENT_PROVIDER_UNSUPPORTED


@pytest.mark.asyncio
async def test_calls_before_initialize_raise_not_initialized():
    hub = MultiPaymentGateway()

    assert hub.provider is None
    with pytest.raises(AppException, match="Payment gateway not initialized") as exc_info:
        await hub.create_payment(
            PaymentRequest(amount=100, currency="XOF", reference="r", description="d")
        )
    assert exc_info.value.code == ErrorCode.GATEWAY_NOT_INITIALIZED

    with pytest.raises(AppException, match="Payment gateway not initialized"):
        await hub.verify_payment("abc123")
    with pytest.raises(AppException, match="Payment gateway not initialized"):
        await hub.refund_payment("abc123")
    with pytest.raises(AppException, match="Payment gateway not initialized"):
        await hub.validate_webhook({}, {})
    with pytest.raises(AppException, match="Payment gateway not initialized"):
        await hub.process_webhook({})


@pytest.mark.asyncio
async def test_initialize_and_delegate_to_paytech():
    async with MultiPaymentGateway(transport=httpx.MockTransport(_provider_api)) as hub:
        assert await hub.initialize("paytech", _config()) is True
        assert hub.provider == PaymentProviderName.PAYTECH

        payment = await hub.create_payment(
            PaymentRequest(amount=5000, currency="XOF", reference="order-1", description="Order 1")
        )
        assert payment.success is True
        assert payment.payment_id == "abc123"

        assert await hub.verify_payment("abc123") == TransactionStatus.PENDING

        refund = await hub.refund_payment("abc123", 1000)
        assert refund.success is True
        assert refund.amount == 1000

        validation = await hub.validate_webhook(
            {"token": "abc123", "ref_command": "order-1", "type": "payment_success", "status": "completed"},
            {},
        )
        assert validation.is_valid is True

    assert hub.provider is None


@pytest.mark.asyncio
async def test_reinitialize_replaces_and_closes_previous_adapter():
    hub = MultiPaymentGateway(transport=httpx.MockTransport(_provider_api))
    await hub.initialize(PaymentProviderName.PAYTECH, _config(api_key="first"))
    first = hub.gateway

    await hub.initialize(PaymentProviderName.PAYTECH, _config(api_key="second"))

    assert hub.gateway is not first
    assert first.is_initialized is False
    assert hub.gateway.config.api_key == "second"
    await hub.aclose()


@pytest.mark.asyncio
async def test_failed_initialize_keeps_current_adapter():
    hub = MultiPaymentGateway(transport=httpx.MockTransport(_provider_api))
    await hub.initialize("paytech", _config())
    current = hub.gateway

    with pytest.raises(AppException, match="CinetPay provider not yet implemented"):
        await hub.initialize("cinetpay", _config())

    assert hub.gateway is current
    assert hub.provider == PaymentProviderName.PAYTECH
    await hub.aclose()


@pytest.mark.asyncio
async def test_separate_hubs_hold_independent_configurations():
    transport = httpx.MockTransport(_provider_api)
    test_hub = MultiPaymentGateway(transport=transport)
    live_hub = MultiPaymentGateway(transport=transport)

    await test_hub.initialize("paytech", _config(api_key="test-key"))
    await live_hub.initialize("paytech", _config(api_key="live-key", environment="production"))

    assert test_hub.gateway.config.api_key == "test-key"
    assert live_hub.gateway.config.environment.value == "production"
    await test_hub.aclose()
    await live_hub.aclose()


@pytest.mark.asyncio
async def test_configure_from_settings_initializes_paytech(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PAYMENT_PROVIDER", "paytech")
    monkeypatch.setenv("PAYMENT_ENVIRONMENT", "test")
    monkeypatch.setenv("PAYTECH_API_KEY", "env-key")
    monkeypatch.setenv("PAYTECH_API_SECRET", "env-secret")
    monkeypatch.setenv("PAYTECH_TIMEOUT_MS", "15000")
    monkeypatch.setenv("PAYTECH_DEFAULT_IPN_URL", "https://example.com/ipn")
    settings_module.get_settings.cache_clear()

    try:
        hub = await MultiPaymentGateway.configure_from_settings()
    finally:
        settings_module.get_settings.cache_clear()

    assert hub.provider == PaymentProviderName.PAYTECH
    assert hub.gateway.config.api_key == "env-key"
    assert hub.gateway.config.timeout_ms == 15000
    assert hub.gateway.config.default_ipn_url == "https://example.com/ipn"
    await hub.aclose()
