from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, status


class ErrorCode(str, Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_EXPIRY_INVALID = "STORAGE_EXPIRY_INVALID"
    STORAGE_SIGNING_FAILED = "STORAGE_SIGNING_FAILED"
    STORAGE_TRANSFER_FAILED = "STORAGE_TRANSFER_FAILED"
    STORAGE_NOTIFICATION_MALFORMED = "STORAGE_NOTIFICATION_MALFORMED"
    STORAGE_NOT_CONFIGURED = "STORAGE_NOT_CONFIGURED"
    STORAGE_OBJECT_TOO_LARGE = "STORAGE_OBJECT_TOO_LARGE"


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


def storage_not_configured(reason: str) -> AppException:
    return AppException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        code=ErrorCode.STORAGE_NOT_CONFIGURED,
        message="Object storage is not configured",
        details={"reason": reason},
    )


def object_too_large(max_size_bytes: int) -> AppException:
    return AppException(
        status_code=413,
        code=ErrorCode.STORAGE_OBJECT_TOO_LARGE,
        message="Object too large for a direct upload",
        details={"max_size_bytes": max_size_bytes},
    )
