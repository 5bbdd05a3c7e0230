from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    GATEWAY_NOT_INITIALIZED = "GATEWAY_NOT_INITIALIZED"
    PAYMENT_REQUEST_INVALID = "PAYMENT_REQUEST_INVALID"
    PAYMENT_PROVIDER_ERROR = "PAYMENT_PROVIDER_ERROR"
    PAYMENT_PROVIDER_UNSUPPORTED = "PAYMENT_PROVIDER_UNSUPPORTED"
    PAYMENT_OPERATION_UNSUPPORTED = "PAYMENT_OPERATION_UNSUPPORTED"
    PAYMENT_WEBHOOK_INVALID = "PAYMENT_WEBHOOK_INVALID"
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"


class AppException(HTTPException):
    def __init__(
        self,
        *,
        status_code: int,
        code: ErrorCode,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        detail = {
            "message": message,
            "code": code.value,
            "details": details,
        }
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message


def gateway_not_initialized(message: str = "Gateway not initialized. Call initialize() first.") -> AppException:
    return AppException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        code=ErrorCode.GATEWAY_NOT_INITIALIZED,
        message=message,
    )


def invalid_payment_request(message: str, details: Any | None = None) -> AppException:
    return AppException(
        status_code=status.HTTP_400_BAD_REQUEST,
        code=ErrorCode.PAYMENT_REQUEST_INVALID,
        message=message,
        details=details,
    )


def provider_not_supported(message: str, provider: str) -> AppException:
    return AppException(
        status_code=status.HTTP_400_BAD_REQUEST,
        code=ErrorCode.PAYMENT_PROVIDER_UNSUPPORTED,
        message=message,
        details={"provider": provider},
    )


def operation_not_supported(provider: str, operation: str) -> AppException:
    return AppException(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        code=ErrorCode.PAYMENT_OPERATION_UNSUPPORTED,
        message=f"{provider} does not support {operation}",
        details={"provider": provider, "operation": operation},
    )
