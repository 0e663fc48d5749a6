"""Custom exception hierarchy for the tax-period service.

All application errors inherit from SelfEmployException so the API layer can
render them uniformly.

Error codes follow pattern: [CATEGORY][NUMBER]
- PER: Tax year / period errors (001-099)
- SUB: Submission record errors (100-199)
- LED: Ledger errors (200-299)
- NTF: Notification errors (300-399)
- SYS: System errors (400-499)
"""

from __future__ import annotations

from datetime import date
from typing import Any


class SelfEmployException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with user-facing message and metadata.

        Args:
            message: User-friendly error message
            code: Unique error code (e.g., "PER001")
            status_code: HTTP status code (default: 400 Bad Request)
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


# ============================================================================
# TAX YEAR / PERIOD ERRORS (PER001-099)
# ============================================================================

class PeriodError(SelfEmployException):
    """Base class for tax year and period errors."""
    pass


class InvalidTaxYearError(PeriodError):
    """Tax year dates are malformed (end on or before start, or out of range)."""

    def __init__(self, reason: str, start_date: date | None = None, end_date: date | None = None):
        super().__init__(
            message=f"Invalid tax year: {reason}",
            code="PER001",
            status_code=400,
            details={
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
            },
        )


class UnknownPeriodError(PeriodError):
    """Period key is not one of Q1-Q4 or ANNUAL."""

    def __init__(self, period_key: str):
        super().__init__(
            message=f"Unknown period '{period_key}'. Expected Q1, Q2, Q3, Q4 or ANNUAL",
            code="PER002",
            status_code=400,
            details={"period_key": period_key},
        )


# ============================================================================
# SUBMISSION ERRORS (SUB100-199)
# ============================================================================

class SubmissionError(SelfEmployException):
    """Base class for submission record errors."""
    pass


class SubmissionAlreadyRecordedError(SubmissionError):
    """A submission already exists for this business, tax year and period."""

    def __init__(self, business_id: str, tax_year_label: str, period_key: str):
        super().__init__(
            message=f"{period_key} for {tax_year_label} has already been submitted",
            code="SUB100",
            status_code=409,
            details={
                "business_id": business_id,
                "tax_year": tax_year_label,
                "period_key": period_key,
            },
        )


# ============================================================================
# LEDGER ERRORS (LED200-299)
# ============================================================================

class LedgerError(SelfEmployException):
    """Base class for ledger entry errors."""
    pass


class InvalidLedgerEntryError(LedgerError):
    """Ledger entry failed validation."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Invalid ledger entry: {reason}",
            code="LED200",
            status_code=400,
            details={"reason": reason},
        )


# ============================================================================
# NOTIFICATION ERRORS (NTF300-399)
# ============================================================================

class NotificationError(SelfEmployException):
    """Base class for deadline notification errors."""
    pass


class NotificationNotFoundError(NotificationError):
    """Notification does not exist."""

    def __init__(self, notification_id: str):
        super().__init__(
            message=f"Notification {notification_id} not found",
            code="NTF300",
            status_code=404,
            details={"notification_id": notification_id},
        )


# ============================================================================
# SYSTEM ERRORS (SYS400-499)
# ============================================================================

class SystemError(SelfEmployException):
    """Base class for system/infrastructure errors."""
    pass


class ServiceUnavailableError(SystemError):
    """External service or dependency is unavailable."""

    def __init__(self, service_name: str, reason: str | None = None):
        message = f"{service_name} is currently unavailable"
        if reason:
            message = f"{message}: {reason}"

        super().__init__(
            message=message,
            code="SYS400",
            status_code=503,
            details={"service": service_name, "reason": reason},
        )
