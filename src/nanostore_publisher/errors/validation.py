"""
Input validation exceptions.

These are raised before any network call is attempted, so a caller can be
sure that no invoice was requested and no payment was made when one of them
surfaces.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from nanostore_publisher.errors.base import NanoStoreError


class ValidationError(NanoStoreError):
    """
    Base exception for invalid caller input.

    Example:
        >>> raise ValidationError("order_id is required", details={"field": "order_id"})
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "ERR_INVALID_INPUT",
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)

        super().__init__(message, code=code, details=details)
        self.field = field
        self.value = value


class InvalidConfigError(ValidationError):
    """Raised when a publisher configuration cannot be used."""

    def __init__(self, message: str = "Invalid NanoStore URL", **kwargs: Any) -> None:
        super().__init__(message, code="ERR_INVALID_CONFIG", **kwargs)


class InvalidFileSizeError(ValidationError):
    """
    Raised when a file size is not a positive finite number.

    Example:
        >>> raise InvalidFileSizeError(0)
    """

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Invalid file size",
            code="ERR_INVALID_FILE_SIZE",
            field="file_size",
            value=value,
        )


class InvalidRetentionPeriodError(ValidationError):
    """Raised when a retention period is not a positive finite number."""

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Invalid retention period",
            code="ERR_INVALID_RETENTION_PERIOD",
            field="retention_period",
            value=value,
        )


class InvalidRecipientKeyError(ValidationError):
    """Raised when the recipient public key is missing or not a string."""

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Invalid recipient public key",
            code="ERR_INVALID_PUBLIC_KEY",
            field="recipient_public_key",
            value=value,
        )


class InvalidAmountError(ValidationError):
    """
    Raised when a satoshi amount is invalid.

    Example:
        >>> raise InvalidAmountError(-1, reason="Must be a positive integer.")
    """

    def __init__(self, value: Any = None, *, reason: Optional[str] = None) -> None:
        message = "Invalid amount"
        if reason:
            message += f". {reason}"
        super().__init__(
            message,
            code="ERR_INVALID_AMOUNT",
            field="amount",
            value=value,
        )
        self.reason = reason


class InvalidOrderIdError(ValidationError):
    """Raised when an order ID is missing or blank."""

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Invalid order ID. Must be a non-empty string.",
            code="ERR_INVALID_ORDER_ID",
            field="order_id",
            value=value,
        )


class InvalidVoutError(ValidationError):
    """Raised when a transaction output index is not a non-negative integer."""

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Invalid vout. Must be a non-negative number.",
            code="ERR_INVALID_VOUT",
            field="vout",
            value=value,
        )


class InvalidPaymentError(ValidationError):
    """Raised when a payment envelope is missing or is not an object."""

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Invalid payment object. Must be an object.",
            code="ERR_INVALID_PAYMENT",
            field="payment",
            value=value,
        )


class InvalidDerivationPrefixError(ValidationError):
    """Raised when a derivation prefix is missing or blank."""

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Invalid derivation prefix. Must be a non-empty string.",
            code="ERR_INVALID_DERIVATION_PREFIX",
            field="derivation_prefix",
            value=value,
        )


class InvalidDerivationSuffixError(ValidationError):
    """Raised when a derivation suffix is missing or blank."""

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Invalid derivation suffix. Must be a non-empty string.",
            code="ERR_INVALID_DERIVATION_SUFFIX",
            field="derivation_suffix",
            value=value,
        )


class MissingRequiredParametersError(ValidationError):
    """
    Raised when upload credentials are missing.

    Example:
        >>> raise MissingRequiredParametersError(["upload_url"])
    """

    def __init__(self, missing: list) -> None:
        super().__init__(
            f"Missing required parameters: {', '.join(missing)}",
            code="ERR_MISSING_PARAMETERS",
            details={"missing": list(missing)},
        )
        self.missing = list(missing)


class FileRequiredError(ValidationError):
    """Raised by publish_file when no (non-empty) file was supplied."""

    def __init__(self) -> None:
        super().__init__(
            "File is required for upload.",
            code="ERR_UI_FILE_MISSING",
            field="file",
        )


class RetentionPeriodRequiredError(ValidationError):
    """Raised by publish_file when no retention period was supplied."""

    def __init__(self, value: Any = None) -> None:
        super().__init__(
            "Retention period must be specified.",
            code="ERR_UI_HOST_DURATION_MISSING",
            field="retention_period",
            value=value,
        )
