"""
Base exception class for the NanoStore publisher SDK.

All SDK exceptions inherit from NanoStoreError, which provides structured
error information: a machine-readable code, a human message, additional
context details and, when the error wraps a lower-level failure, the
original cause.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class NanoStoreError(Exception):
    """
    Base exception for all NanoStore publisher errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "ERR_INVALID_AMOUNT").
        details: Optional dictionary with additional error context.
        cause: Optional underlying exception this error wraps.

    Example:
        >>> raise NanoStoreError(
        ...     "Invoice request failed",
        ...     code="ERR_INVOICE_REQUEST",
        ...     details={"url": "https://nanostore.babbage.systems/invoice"},
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "ERR_NANOSTORE",
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        """
        Initialize NanoStoreError.

        Args:
            message: Human-readable error description.
            code: Machine-readable error code.
            details: Optional dictionary with additional error context.
            cause: Optional underlying exception being wrapped.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r}, "
            f"cause={self.cause!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause is not None else None,
        }


def describe(error: BaseException) -> str:
    """
    Return the bare message of an exception.

    NanoStoreError instances yield their message without the code prefix so
    that wrapping errors do not accumulate ``[CODE]`` markers.
    """
    if isinstance(error, NanoStoreError):
        return error.message
    return str(error) or error.__class__.__name__
