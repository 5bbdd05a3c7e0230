from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from payment_hub.payments.paytech.constants import PaytechEnvironment


class _PaytechResponseModel(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class PaytechPaymentRequest(BaseModel):
    item_name: str
    item_price: str
    currency: str
    ref_command: str
    command_name: str
    env: PaytechEnvironment
    ipn_url: str | None = None
    success_url: str | None = None
    cancel_url: str | None = None
    custom_field: str | None = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class PaytechPaymentResponse(_PaytechResponseModel):
    success: int = 0
    redirect_url: str | None = None
    token: str | None = None
    error: str | None = None


class PaytechCustomerInfo(_PaytechResponseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class PaytechStatusResponse(_PaytechResponseModel):
    success: int = 0
    status: str | None = None
    error: str | None = None
    ref_command: str | None = None
    amount: str | None = None
    currency: str | None = None
    date: str | None = None
    transaction_id: str | None = None
    customer_info: PaytechCustomerInfo | None = None


class PaytechRefundRequest(BaseModel):
    token: str = Field(min_length=1)
    amount: float | None = Field(default=None, gt=0)
    reason: str | None = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class PaytechRefundResponse(_PaytechResponseModel):
    success: int = 0
    refund_id: str | None = None
    amount: str | None = None
    error: str | None = None
    status: str | None = None
    date: str | None = None


class PaytechWebhookPayload(_PaytechResponseModel):
    type: str = ""
    token: str | None = None
    ref_command: str = ""
    amount: str | None = None
    currency: str | None = None
    status: str = ""
    date: str | None = None
    transaction_id: str | None = None
    custom_field: Any = None
    customer_info: PaytechCustomerInfo | None = None

    @field_validator("customer_info", mode="before")
    @classmethod
    def _drop_malformed_customer_info(cls, value: Any) -> Any:
        if isinstance(value, (dict, PaytechCustomerInfo)):
            return value
        return None
