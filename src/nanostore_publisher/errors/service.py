"""
Exceptions raised while talking to the storage service or a wallet.

Two families:

- TransportError: the HTTP exchange itself failed (connection error,
  non-2xx status, undecodable body). The underlying cause is wrapped.
- RemoteServiceError: the exchange succeeded but the service answered with
  ``{"status": "error", "description": ..., "code": ...}``. The service's
  description and code are passed through.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from nanostore_publisher.errors.base import NanoStoreError, describe


class TransportError(NanoStoreError):
    """
    Raised when an HTTP request fails below the application layer.

    Example:
        >>> raise TransportError("Connection refused", url="https://nanostore.babbage.systems/pay")
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "ERR_TRANSPORT",
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code

        super().__init__(message, code=code, details=details, cause=cause)
        self.url = url
        self.status_code = status_code


class RemoteServiceError(NanoStoreError):
    """
    Raised when a remote service explicitly reports an error status.

    Attributes:
        service_code: The code reported by the service, if any.
        description: The description reported by the service, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "ERR_REMOTE_SERVICE",
        service_code: Optional[str] = None,
        description: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        details = details or {}
        if service_code:
            details["service_code"] = service_code
        if description:
            details["description"] = description

        super().__init__(message, code=code, details=details, cause=cause)
        self.service_code = service_code
        self.description = description

    @classmethod
    def from_response(
        cls,
        response: Dict[str, Any],
        default_message: str,
        default_code: str,
    ) -> "RemoteServiceError":
        """Build an error from a ``{"status": "error"}`` response body."""
        description = response.get("description")
        service_code = response.get("code")
        return cls(
            description or default_message,
            code=service_code or default_code,
            service_code=service_code,
            description=description,
        )


# ============================================================================
# Invoice Errors
# ============================================================================


class InvoiceRequestError(TransportError):
    """Raised when the invoice request could not be completed."""

    def __init__(self, cause: BaseException, *, url: Optional[str] = None) -> None:
        super().__init__(
            f"Failed to retrieve invoice: {describe(cause)}",
            code="ERR_INVOICE_REQUEST",
            url=url,
            cause=cause,
        )


class InvoiceResponseFormatError(TransportError):
    """Raised when the invoice endpoint returns something other than an object."""

    def __init__(self, *, url: Optional[str] = None) -> None:
        super().__init__(
            "Invalid invoice response format",
            code="ERR_INVOICE_RESPONSE_FORMAT",
            url=url,
        )


class InvoiceServiceError(RemoteServiceError):
    """
    Raised when the storage service rejects an invoice request.

    Example:
        >>> InvoiceServiceError.from_response(
        ...     {"status": "error", "description": "File too large"},
        ...     "Unknown error in invoice response",
        ...     "ERR_INVOICE_ERROR",
        ... )
    """


# ============================================================================
# Payment Errors
# ============================================================================


class CryptoFailureError(NanoStoreError):
    """Raised when the system randomness source is unavailable."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        message = "Secure random number generation failed"
        if cause is not None:
            message += f": {describe(cause)}"
        super().__init__(message, code="ERR_CRYPTO_FAILURE", cause=cause)


class DerivePublicKeyError(NanoStoreError):
    """Raised when the one-time payment public key cannot be derived."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Failed to derive public key: {describe(cause)}",
            code="ERR_DERIVE_PUBLIC_KEY",
            cause=cause,
        )


class CreateScriptError(NanoStoreError):
    """Raised when a locking script cannot be built from the derived key."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Failed to create output script: {describe(cause)}",
            code="ERR_CREATE_SCRIPT",
            cause=cause,
        )


class DerivePaymentInfoError(NanoStoreError):
    """Raised by pay() when payment info derivation fails."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Failed to derive payment info: {describe(cause)}",
            code="ERR_DERIVE_PAYMENT_INFO",
            cause=cause,
        )


class CreatePaymentError(NanoStoreError):
    """Raised when the wallet cannot build a transaction paying the output."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Failed to create payment: {describe(cause)}",
            code="ERR_CREATE_PAYMENT",
            cause=cause,
        )


class PaymentRequestError(TransportError):
    """Raised when the ``/pay`` request could not be completed."""

    def __init__(self, cause: BaseException, *, url: Optional[str] = None) -> None:
        super().__init__(
            f"Failed to submit payment: {describe(cause)}",
            code="ERR_PAY_REQUEST",
            url=url,
            cause=cause,
        )


class SubmitPaymentError(RemoteServiceError):
    """
    Raised when the storage service rejects a submitted payment.

    The service's own description is kept in the message and its code in
    ``service_code``; ``code`` is always ``ERR_SUBMIT_PAYMENT``.
    """

    def __init__(
        self,
        description: Optional[str] = None,
        *,
        service_code: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Failed to submit payment: {description or 'Payment failed due to an unknown error.'}",
            code="ERR_SUBMIT_PAYMENT",
            service_code=service_code or "ERR_PAYMENT_FAILED",
            description=description,
        )


class WalletError(RemoteServiceError):
    """Raised when a wallet call fails or reports an error status."""

    def __init__(
        self,
        message: str,
        *,
        call: Optional[str] = None,
        service_code: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if call:
            details["call"] = call
        super().__init__(
            message,
            code="ERR_WALLET",
            service_code=service_code,
            details=details,
            cause=cause,
        )
        self.call = call
