from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from payment_hub.payments.types import GatewayConfig

load_dotenv()

SUPPORTED_PAYMENT_PROVIDERS = {"paytech", "cinetpay", "moneyfusion"}
SUPPORTED_ENVIRONMENTS = {"test", "production"}


def _env(name: str) -> str | None:
    raw_value = os.getenv(name)
    if raw_value is None:
        return None
    normalized = raw_value.strip()
    return normalized or None


def collect_missing_required_env_vars() -> list[str]:
    missing: list[str] = []

    payment_provider = (_env("PAYMENT_PROVIDER") or "paytech").lower()
    if payment_provider == "paytech":
        for var_name in ("PAYTECH_API_KEY", "PAYTECH_API_SECRET"):
            if _env(var_name) is None:
                missing.append(var_name)

    environment = (_env("PAYMENT_ENVIRONMENT") or "test").lower()
    if environment == "production" and _env("PAYTECH_WEBHOOK_SECRET") is None:
        missing.append("PAYTECH_WEBHOOK_SECRET")

    return sorted(set(missing))


def collect_invalid_env_values() -> list[str]:
    invalid_values: list[str] = []

    payment_provider = (_env("PAYMENT_PROVIDER") or "paytech").lower()
    if payment_provider not in SUPPORTED_PAYMENT_PROVIDERS:
        invalid_values.append("PAYMENT_PROVIDER must be one of: cinetpay, moneyfusion, paytech")

    environment = (_env("PAYMENT_ENVIRONMENT") or "test").lower()
    if environment not in SUPPORTED_ENVIRONMENTS:
        invalid_values.append("PAYMENT_ENVIRONMENT must be one of: production, test")

    timeout_ms = _env("PAYTECH_TIMEOUT_MS")
    if timeout_ms is not None:
        try:
            parsed_timeout = int(timeout_ms)
            if parsed_timeout <= 0:
                raise ValueError("must be positive")
        except ValueError:
            invalid_values.append("PAYTECH_TIMEOUT_MS must be a positive integer")

    return invalid_values


def validate_required_environment() -> None:
    missing_vars = collect_missing_required_env_vars()
    invalid_values = collect_invalid_env_values()
    if not missing_vars and not invalid_values:
        return

    message_lines = ["Payment gateway configuration is invalid."]
    if missing_vars:
        message_lines.append("")
        message_lines.append("Missing required environment variables:")
        message_lines.extend(f"- {name}" for name in missing_vars)
    if invalid_values:
        message_lines.append("")
        message_lines.append("Invalid environment values:")
        message_lines.extend(f"- {message}" for message in invalid_values)
    raise RuntimeError("\n".join(message_lines))


@dataclass(frozen=True)
class Settings:
    payment_provider: str
    payment_environment: str
    paytech_api_key: str
    paytech_api_secret: str
    paytech_webhook_secret: str | None
    paytech_timeout_ms: int | None
    paytech_merchant_id: str | None
    paytech_default_ipn_url: str | None
    paytech_default_success_url: str | None
    paytech_default_cancel_url: str | None

    @property
    def is_production(self) -> bool:
        return self.payment_environment == "production"

    def gateway_config(self) -> GatewayConfig:
        additional_config = {
            "timeout": self.paytech_timeout_ms,
            "merchantId": self.paytech_merchant_id,
            "defaultIpnUrl": self.paytech_default_ipn_url,
            "defaultSuccessUrl": self.paytech_default_success_url,
            "defaultCancelUrl": self.paytech_default_cancel_url,
        }
        return GatewayConfig(
            api_key=self.paytech_api_key,
            api_secret=self.paytech_api_secret,
            environment="production" if self.is_production else "test",
            webhook_secret=self.paytech_webhook_secret,
            additional_config={key: value for key, value in additional_config.items() if value is not None},
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    validate_required_environment()

    timeout_ms = _env("PAYTECH_TIMEOUT_MS")
    return Settings(
        payment_provider=(_env("PAYMENT_PROVIDER") or "paytech").lower(),
        payment_environment=(_env("PAYMENT_ENVIRONMENT") or "test").lower(),
        paytech_api_key=_env("PAYTECH_API_KEY") or "",
        paytech_api_secret=_env("PAYTECH_API_SECRET") or "",
        paytech_webhook_secret=_env("PAYTECH_WEBHOOK_SECRET"),
        paytech_timeout_ms=int(timeout_ms) if timeout_ms else None,
        paytech_merchant_id=_env("PAYTECH_MERCHANT_ID"),
        paytech_default_ipn_url=_env("PAYTECH_DEFAULT_IPN_URL"),
        paytech_default_success_url=_env("PAYTECH_DEFAULT_SUCCESS_URL"),
        paytech_default_cancel_url=_env("PAYTECH_DEFAULT_CANCEL_URL"),
    )
