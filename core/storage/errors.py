"""Failure kinds raised by the storage gateway and the notification decoder.

Every error is returned to the immediate caller. None of them is retried
here; ``retryable`` only tells the caller whether trying again can help.
"""

from __future__ import annotations

from typing import Any

from fastapi import status

from core.errors import AppException, ErrorCode


class GatewayError(Exception):
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    retryable: bool = False
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ExpiryConfigurationError(GatewayError):
    code = ErrorCode.STORAGE_EXPIRY_INVALID


class SigningError(GatewayError):
    code = ErrorCode.STORAGE_SIGNING_FAILED
    retryable = True
    http_status = status.HTTP_502_BAD_GATEWAY


class TransferError(GatewayError):
    code = ErrorCode.STORAGE_TRANSFER_FAILED
    retryable = True
    http_status = status.HTTP_502_BAD_GATEWAY


class MalformedNotificationError(GatewayError):
    code = ErrorCode.STORAGE_NOTIFICATION_MALFORMED
    http_status = 422


def gateway_error_to_app_exception(err: GatewayError, *, include_reason: bool = True) -> AppException:
    """Render ``err`` for HTTP clients.

    With ``include_reason=False`` the raw SDK message under ``details["reason"]``
    is left out; the gateway's warning log still records it.
    """
    details = err.details
    if not include_reason and isinstance(details, dict):
        details = {name: value for name, value in details.items() if name != "reason"}

    return AppException(
        status_code=err.http_status,
        code=err.code,
        message=err.message,
        details={"retryable": err.retryable, "details": details},
    )
