"""
NanoStore Publisher - pay for and publish files to NanoStore.

Quick Start:
    >>> from nanostore_publisher import FileBuffer, publish_file
    >>> import asyncio
    >>>
    >>> async def main():
    ...     result = await publish_file(
    ...         FileBuffer(b"hello world", name="hello.txt", type="text/plain"),
    ...         retention_period=60 * 24,
    ...     )
    ...     print(result.public_url, result.hash)
    ...
    >>> asyncio.run(main())

The SDK exposes each stage of a publish on its own:
- `invoice()`: price a hosting contract
- `derive_payment_info()` / `pay()` / `submit_payment()`: pay for it
- `upload()`: push the bytes and compute the UHRP locator
- `publish_file()`: all of the above in one call

Modules:
- `config`: PublisherConfig and DEFAULT_CONFIG
- `errors`: Exception hierarchy, every error carrying a code
- `wallet` / `transport`: wallet and signed-request collaborators
- `hashing`: UHRP content locators
- `utils`: Logging and validation helpers
"""

from nanostore_publisher.version import __version__, __version_info__

# Configuration
from nanostore_publisher.config import DEFAULT_CONFIG, PublisherConfig, resolve_config

# Operations
from nanostore_publisher.invoice import invoice
from nanostore_publisher.payment_info import derive_payment_info, generate_derivation_nonce
from nanostore_publisher.pay import pay, submit_payment
from nanostore_publisher.upload import upload
from nanostore_publisher.publish import publish_file

# Types
from nanostore_publisher.types import (
    InvoiceResult,
    PaymentInfo,
    PaymentOutput,
    PaymentResult,
    SignedPayment,
    UploadProgress,
    UploadResult,
)

# Files
from nanostore_publisher.files import (
    BufferReader,
    ByteReader,
    FileBuffer,
    LocalFile,
    StreamReader,
    has_buffer_access,
    has_stream_access,
    select_reader,
)

# Collaborators
from nanostore_publisher.hashing import ContentHasher, UHRPHasher, get_url_for_file, is_valid_url
from nanostore_publisher.transport import KeySigner, RequestSigner, SignedRequestClient, WalletSigner
from nanostore_publisher.wallet import KeyWallet, RemoteWallet, Wallet

# Errors
from nanostore_publisher.errors import (
    CreatePaymentError,
    CreateScriptError,
    CryptoFailureError,
    DerivePaymentInfoError,
    DerivePublicKeyError,
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
    InvoiceRequestError,
    InvoiceResponseFormatError,
    InvoiceServiceError,
    MissingRequiredParametersError,
    NanoStoreError,
    PaymentRequestError,
    PublishFileError,
    RemoteServiceError,
    RetentionPeriodRequiredError,
    StorageError,
    SubmitPaymentError,
    TransportError,
    UnsupportedFileTypeError,
    UploadFailedError,
    ValidationError,
    WalletError,
)

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Config
    "PublisherConfig",
    "DEFAULT_CONFIG",
    "resolve_config",
    # Operations
    "invoice",
    "derive_payment_info",
    "generate_derivation_nonce",
    "pay",
    "submit_payment",
    "upload",
    "publish_file",
    # Types
    "InvoiceResult",
    "PaymentInfo",
    "PaymentOutput",
    "PaymentResult",
    "SignedPayment",
    "UploadProgress",
    "UploadResult",
    # Files
    "FileBuffer",
    "LocalFile",
    "ByteReader",
    "BufferReader",
    "StreamReader",
    "has_buffer_access",
    "has_stream_access",
    "select_reader",
    # Collaborators
    "ContentHasher",
    "UHRPHasher",
    "get_url_for_file",
    "is_valid_url",
    "RequestSigner",
    "KeySigner",
    "WalletSigner",
    "SignedRequestClient",
    "Wallet",
    "RemoteWallet",
    "KeyWallet",
    # Errors
    "NanoStoreError",
    "ValidationError",
    "TransportError",
    "RemoteServiceError",
    "StorageError",
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
    "InvoiceRequestError",
    "InvoiceResponseFormatError",
    "InvoiceServiceError",
    "CryptoFailureError",
    "DerivePublicKeyError",
    "CreateScriptError",
    "DerivePaymentInfoError",
    "CreatePaymentError",
    "PaymentRequestError",
    "SubmitPaymentError",
    "WalletError",
    "UploadFailedError",
    "UnsupportedFileTypeError",
    "PublishFileError",
]
