"""
Exception hierarchy for the NanoStore publisher SDK.

Every error carries a machine-readable ``code`` and a human ``message``.
"""

from nanostore_publisher.errors.base import NanoStoreError
from nanostore_publisher.errors.service import (
    CreatePaymentError,
    CreateScriptError,
    CryptoFailureError,
    DerivePaymentInfoError,
    DerivePublicKeyError,
    InvoiceRequestError,
    InvoiceResponseFormatError,
    InvoiceServiceError,
    PaymentRequestError,
    RemoteServiceError,
    SubmitPaymentError,
    TransportError,
    WalletError,
)
from nanostore_publisher.errors.storage import (
    PublishFileError,
    StorageError,
    UnsupportedFileTypeError,
    UploadFailedError,
)
from nanostore_publisher.errors.validation import (
    FileRequiredError,
    InvalidAmountError,
    InvalidConfigError,
    InvalidDerivationPrefixError,
    InvalidDerivationSuffixError,
    InvalidFileSizeError,
    InvalidOrderIdError,
    InvalidPaymentError,
    InvalidRecipientKeyError,
    InvalidRetentionPeriodError,
    InvalidVoutError,
    MissingRequiredParametersError,
    RetentionPeriodRequiredError,
    ValidationError,
)

__all__ = [
    # Base
    "NanoStoreError",
    # Categories
    "ValidationError",
    "TransportError",
    "RemoteServiceError",
    "StorageError",
    # Validation
    "InvalidConfigError",
    "InvalidFileSizeError",
    "InvalidRetentionPeriodError",
    "InvalidRecipientKeyError",
    "InvalidAmountError",
    "InvalidOrderIdError",
    "InvalidVoutError",
    "InvalidPaymentError",
    "InvalidDerivationPrefixError",
    "InvalidDerivationSuffixError",
    "MissingRequiredParametersError",
    "FileRequiredError",
    "RetentionPeriodRequiredError",
    # Invoice
    "InvoiceRequestError",
    "InvoiceResponseFormatError",
    "InvoiceServiceError",
    # Payment
    "CryptoFailureError",
    "DerivePublicKeyError",
    "CreateScriptError",
    "DerivePaymentInfoError",
    "CreatePaymentError",
    "PaymentRequestError",
    "SubmitPaymentError",
    "WalletError",
    # Storage
    "UnsupportedFileTypeError",
    "UploadFailedError",
    "PublishFileError",
]
