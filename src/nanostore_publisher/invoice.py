"""
Invoice requests: what it costs to host a file, and who to pay.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from nanostore_publisher.clients import storage_client
from nanostore_publisher.config import PublisherConfig, resolve_config
from nanostore_publisher.errors import (
    InvalidFileSizeError,
    InvalidRetentionPeriodError,
    InvoiceRequestError,
    InvoiceResponseFormatError,
    InvoiceServiceError,
    TransportError,
    WalletError,
)
from nanostore_publisher.transport import SignedRequestClient
from nanostore_publisher.types import STATUS_ERROR, InvoiceResult
from nanostore_publisher.utils.logging import get_logger
from nanostore_publisher.utils.validation import is_positive_number, require

_logger = get_logger(__name__)

INVOICE_PATH = "/invoice"


async def invoice(
    file_size: Union[int, float],
    retention_period: Union[int, float],
    *,
    config: Optional[PublisherConfig] = None,
    client: Optional[SignedRequestClient] = None,
) -> InvoiceResult:
    """
    Create an invoice for a NanoStore file hosting contract.

    Args:
        file_size: Size of the file to host, in bytes
        retention_period: Whole number of minutes to host the file for
        config: Publisher configuration (defaults to DEFAULT_CONFIG)
        client: Pre-built signed client for the storage service

    Returns:
        InvoiceResult with the order ID, recipient key, amount and public URL

    Raises:
        InvalidFileSizeError: If file_size is not a positive finite number
        InvalidRetentionPeriodError: If retention_period is not a positive finite number
        InvoiceRequestError: If the request could not be completed
        InvoiceResponseFormatError: If the response is not a JSON object
        InvoiceServiceError: If the service rejected the request

    Example:
        ```python
        result = await invoice(1024, 60)
        print(result.order_id, result.amount)
        ```
    """
    require(is_positive_number, file_size, InvalidFileSizeError)
    require(is_positive_number, retention_period, InvalidRetentionPeriodError)

    config = resolve_config(config)
    client = client or storage_client(config)
    url = client.url_for(INVOICE_PATH)

    _logger.info(
        "Requesting invoice",
        extra={"file_size": file_size, "retention_period": retention_period},
    )

    try:
        response = await client.create_signed_request(
            INVOICE_PATH,
            {"fileSize": file_size, "retentionPeriod": retention_period},
        )
    except (TransportError, WalletError) as exc:
        _logger.error("Invoice request failed", extra={"error": exc.message})
        raise InvoiceRequestError(exc, url=url) from exc

    if not isinstance(response, dict):
        raise InvoiceResponseFormatError(url=url)

    if response.get("status") == STATUS_ERROR:
        raise InvoiceServiceError.from_response(
            response,
            "Unknown error in invoice response",
            "ERR_INVOICE_ERROR",
        )

    try:
        result = InvoiceResult.model_validate(response)
    except PydanticValidationError as exc:
        _logger.error("Malformed invoice response", extra={"error": str(exc)})
        raise InvoiceResponseFormatError(url=url) from exc

    _logger.info(
        "Invoice received",
        extra={"order_id": result.order_id, "amount": result.amount},
    )
    return result
