"""API error handling and response helpers."""

from typing import Any, Dict

from fastapi import HTTPException, status


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        """Initialize error."""
        self.message = message
        self.code = code
        self.http_status = http_status
        super().__init__(message)


class ReceiptTenantMismatchAppError(AppError):
    """Request mixes receipts of another tenant into a single-tenant ledger."""

    def __init__(self, message: str = "Receipt belongs to a different tenant"):
        super().__init__(message, "receipt_tenant_mismatch", status.HTTP_422_UNPROCESSABLE_CONTENT)


def error_response(error: AppError) -> Dict[str, Any]:
    """Create a standardized error response."""
    return {
        "error": {
            "code": error.code,
            "message": error.message,
        }
    }


def raise_app_error(error: AppError) -> None:
    """Raise an HTTPException from an AppError."""
    raise HTTPException(
        status_code=error.http_status,
        detail=error_response(error),
    )


__all__ = ["AppError", "ReceiptTenantMismatchAppError", "error_response", "raise_app_error"]
