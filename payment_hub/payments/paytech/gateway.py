from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

import httpx
from fastapi import status
from pydantic import ValidationError

from payment_hub.errors import (
    AppException,
    ErrorCode,
    gateway_not_initialized,
    invalid_payment_request,
    operation_not_supported,
)
from payment_hub.logging_config import get_logger
from payment_hub.payments.paytech.constants import (
    PAYTECH_API_BASE_URL,
    PAYTECH_CHECK_STATUS_ENDPOINT,
    PAYTECH_DEFAULT_TIMEOUT_MS,
    PAYTECH_GATEWAY_NAME,
    PAYTECH_REFUND_ENDPOINT,
    PAYTECH_REQUEST_PAYMENT_ENDPOINT,
)
from payment_hub.payments.paytech.mappers import (
    map_from_paytech_refund_response,
    map_from_paytech_response,
    map_paytech_status,
    map_to_paytech_request,
)
from payment_hub.payments.paytech.schemas import (
    PaytechPaymentResponse,
    PaytechRefundRequest,
    PaytechRefundResponse,
    PaytechStatusResponse,
)
from payment_hub.payments.paytech.utils import is_valid_amount, is_valid_currency
from payment_hub.payments.paytech.webhooks import process_paytech_webhook, validate_paytech_webhook
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
    WebhookValidationResult,
)

logger = get_logger(__name__)

_BASE_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


@dataclass(frozen=True)
class PaytechConfig:
    api_key: str
    api_secret: str
    environment: Environment
    webhook_secret: str | None = None
    timeout_ms: int = PAYTECH_DEFAULT_TIMEOUT_MS
    merchant_id: str | None = None
    default_ipn_url: str | None = None
    default_success_url: str | None = None
    default_cancel_url: str | None = None

    @classmethod
    def from_gateway_config(cls, config: GatewayConfig) -> "PaytechConfig":
        try:
            environment = Environment(config.environment)
        except ValueError as err:
            raise AppException(
                status_code=status.HTTP_400_BAD_REQUEST,
                code=ErrorCode.CONFIGURATION_INVALID,
                message=f"Invalid environment: {config.environment}",
                details={"allowed": [item.value for item in Environment]},
            ) from err

        extra = config.additional_config or {}
        raw_timeout = extra.get("timeout") or PAYTECH_DEFAULT_TIMEOUT_MS
        try:
            timeout_ms = int(raw_timeout)
        except (TypeError, ValueError):
            timeout_ms = 0
        if timeout_ms <= 0:
            raise AppException(
                status_code=status.HTTP_400_BAD_REQUEST,
                code=ErrorCode.CONFIGURATION_INVALID,
                message=f"Invalid timeout: {raw_timeout}",
                details={"timeout": "must be a positive integer (milliseconds)"},
            )

        return cls(
            api_key=config.api_key,
            api_secret=config.api_secret,
            environment=environment,
            webhook_secret=config.webhook_secret,
            timeout_ms=timeout_ms,
            merchant_id=extra.get("merchantId"),
            default_ipn_url=extra.get("defaultIpnUrl"),
            default_success_url=extra.get("defaultSuccessUrl"),
            default_cancel_url=extra.get("defaultCancelUrl"),
        )


def _provider_error(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return None


class PaytechGateway:
    provider_name = PAYTECH_GATEWAY_NAME

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport
        self._config: PaytechConfig | None = None
        self._client: httpx.AsyncClient | None = None

    @property
    def is_initialized(self) -> bool:
        return self._config is not None and self._client is not None

    @property
    def config(self) -> PaytechConfig | None:
        return self._config

    async def initialize(self, config: GatewayConfig) -> bool:
        paytech_config = PaytechConfig.from_gateway_config(config)
        if self._client is not None:
            await self._client.aclose()

        self._client = httpx.AsyncClient(
            base_url=PAYTECH_API_BASE_URL,
            timeout=paytech_config.timeout_ms / 1000,
            headers=_BASE_HEADERS,
            transport=self._transport,
        )
        self._config = paytech_config
        logger.info(
            "paytech_gateway_initialized",
            environment=paytech_config.environment.value,
            timeout_ms=paytech_config.timeout_ms,
            webhook_signature_check=bool(paytech_config.webhook_secret),
        )
        return True

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PaytechGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _require_initialized(self) -> tuple[PaytechConfig, httpx.AsyncClient]:
        if self._config is None or self._client is None:
            raise gateway_not_initialized()
        return self._config, self._client

    def _auth_headers(self, config: PaytechConfig) -> dict[str, str]:
        return {
            **_BASE_HEADERS,
            "API_KEY": config.api_key,
            "API_SECRET": config.api_secret,
        }

    async def create_payment(self, request: PaymentRequest) -> PaymentResponse:
        config, client = self._require_initialized()

        if not request.reference or not request.description:
            raise invalid_payment_request(
                "Invalid payment request: missing required fields",
                details={"required": ["reference", "description"]},
            )
        if not is_valid_amount(request.amount):
            raise invalid_payment_request("Invalid amount", details={"amount": request.amount})
        if not is_valid_currency(request.currency):
            raise invalid_payment_request(
                f"Unsupported currency: {request.currency}",
                details={"currency": request.currency},
            )

        paytech_request = map_to_paytech_request(request, config.environment.value)
        defaults = {
            "ipn_url": config.default_ipn_url,
            "success_url": config.default_success_url,
            "cancel_url": config.default_cancel_url,
        }
        overrides = {
            name: value for name, value in defaults.items() if value and not getattr(paytech_request, name)
        }
        if overrides:
            paytech_request = paytech_request.model_copy(update=overrides)

        try:
            response = await client.post(
                PAYTECH_REQUEST_PAYMENT_ENDPOINT,
                json=paytech_request.to_payload(),
                headers=self._auth_headers(config),
            )
            response.raise_for_status()
            paytech_response = PaytechPaymentResponse.model_validate(response.json())
        except httpx.HTTPStatusError as err:
            message = _provider_error(err.response) or str(err) or "Payment request failed"
            logger.warning(
                "paytech_payment_request_rejected",
                reference=request.reference,
                status_code=err.response.status_code,
                error=message,
            )
            return PaymentResponse(success=False, message=message, status=TransactionStatus.FAILED)
        except (httpx.HTTPError, ValueError, RuntimeError) as err:
            logger.error("paytech_payment_request_failed", reference=request.reference, error=str(err))
            return PaymentResponse(
                success=False,
                message=f"Payment request failed: {err}",
                status=TransactionStatus.FAILED,
            )

        result = map_from_paytech_response(paytech_response)
        if result.success:
            logger.info("paytech_payment_created", reference=request.reference, token=result.token)
        else:
            logger.warning("paytech_payment_declined", reference=request.reference, error=result.message)
        return result

    async def verify_payment(self, payment_id: str) -> TransactionStatus:
        config, client = self._require_initialized()

        if not payment_id:
            raise invalid_payment_request("Payment ID is required")

        try:
            response = await client.get(
                f"{PAYTECH_CHECK_STATUS_ENDPOINT}/{quote(payment_id, safe='')}",
                headers=self._auth_headers(config),
            )
            response.raise_for_status()
            status_response = PaytechStatusResponse.model_validate(response.json())
        except httpx.HTTPStatusError as err:
            if err.response.status_code == status.HTTP_404_NOT_FOUND:
                logger.info("paytech_payment_not_found", token=payment_id)
                return TransactionStatus.FAILED
            raise self._verify_failed(payment_id, err) from err
        except (httpx.HTTPError, ValueError, RuntimeError) as err:
            raise self._verify_failed(payment_id, err) from err

        return map_paytech_status(status_response)

    def _verify_failed(self, payment_id: str, err: Exception) -> AppException:
        logger.error("paytech_verify_failed", token=payment_id, error=str(err))
        return AppException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            code=ErrorCode.PAYMENT_PROVIDER_ERROR,
            message=f"Failed to verify payment: {err}",
            details={"payment_id": payment_id},
        )

    async def refund_payment(self, payment_id: str, amount: float | None = None) -> RefundResponse:
        config, client = self._require_initialized()

        if not payment_id:
            raise invalid_payment_request("Payment ID is required")

        refund_request = PaytechRefundRequest(
            token=payment_id,
            amount=amount if amount and amount > 0 else None,
        )

        try:
            response = await client.post(
                PAYTECH_REFUND_ENDPOINT,
                json=refund_request.to_payload(),
                headers=self._auth_headers(config),
            )
            response.raise_for_status()
            refund_response = PaytechRefundResponse.model_validate(response.json())
        except httpx.HTTPStatusError as err:
            message = _provider_error(err.response) or str(err) or "Refund request failed"
            logger.warning(
                "paytech_refund_rejected",
                token=payment_id,
                status_code=err.response.status_code,
                error=message,
            )
            return RefundResponse(success=False, message=message, status=TransactionStatus.FAILED)
        except (httpx.HTTPError, ValueError, RuntimeError) as err:
            logger.error("paytech_refund_failed", token=payment_id, error=str(err))
            return RefundResponse(
                success=False,
                message=f"Refund request failed: {err}",
                status=TransactionStatus.FAILED,
            )

        result = map_from_paytech_refund_response(refund_response, amount)
        logger.info("paytech_refund_processed", token=payment_id, success=result.success)
        return result

    async def validate_webhook(
        self,
        payload: Mapping[str, Any] | None,
        headers: Mapping[str, str],
    ) -> WebhookValidationResult:
        webhook_secret = self._config.webhook_secret if self._config else None
        return validate_paytech_webhook(payload, headers, webhook_secret)

    async def process_webhook(self, payload: Mapping[str, Any] | None) -> WebhookEvent:
        if not payload:
            raise AppException(
                status_code=status.HTTP_400_BAD_REQUEST,
                code=ErrorCode.PAYMENT_WEBHOOK_INVALID,
                message="Invalid webhook payload",
            )

        try:
            event = process_paytech_webhook(payload)
        except ValidationError as err:
            raise AppException(
                status_code=status.HTTP_400_BAD_REQUEST,
                code=ErrorCode.PAYMENT_WEBHOOK_INVALID,
                message="Invalid webhook payload",
                details=err.errors(include_url=False),
            ) from err

        logger.info(
            "paytech_webhook_processed",
            event_type=event.type.value,
            reference=event.data.reference,
            status=event.data.status.value,
        )
        return event

    async def create_subscription(self, request: SubscriptionRequest) -> SubscriptionResponse:
        raise operation_not_supported(PAYTECH_GATEWAY_NAME, "subscriptions")

    async def cancel_subscription(self, subscription_id: str) -> bool:
        raise operation_not_supported(PAYTECH_GATEWAY_NAME, "subscriptions")
