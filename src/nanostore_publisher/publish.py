"""
One-call publishing: invoice, pay, upload.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from nanostore_publisher.clients import default_wallet, storage_client
from nanostore_publisher.config import PublisherConfig, resolve_config
from nanostore_publisher.errors import (
    FileRequiredError,
    PublishFileError,
    RetentionPeriodRequiredError,
)
from nanostore_publisher.files import file_name, file_size
from nanostore_publisher.hashing import ContentHasher
from nanostore_publisher.invoice import invoice
from nanostore_publisher.pay import pay
from nanostore_publisher.types import STATUS_SUCCESS, UploadResult
from nanostore_publisher.upload import ProgressCallback, upload
from nanostore_publisher.utils.logging import get_logger
from nanostore_publisher.utils.validation import is_positive_number
from nanostore_publisher.wallet import Wallet

_logger = get_logger(__name__)

PUBLISH_DESCRIPTION = "Upload with NanoStore UI"


async def publish_file(
    file: Any,
    retention_period: Union[int, float],
    *,
    progress_tracker: Optional[ProgressCallback] = None,
    config: Optional[PublisherConfig] = None,
    wallet: Optional[Wallet] = None,
    hasher: Optional[ContentHasher] = None,
) -> UploadResult:
    """
    Pay for hosting and upload a file in one call.

    Payment goes through ``config.client_private_key`` when set, otherwise
    through the remote wallet's ``createAction``.

    Args:
        file: Bytes, a FileBuffer, a LocalFile or any object with ``size`` and
            ``async read()``
        retention_period: Minutes to host the file for
        progress_tracker: Receives UploadProgress updates during the transfer
        config: Publisher configuration (defaults to DEFAULT_CONFIG)
        wallet: Wallet override (defaults from config)
        hasher: Content hasher override (defaults to UHRPHasher)

    Returns:
        UploadResult with the public URL and the UHRP locator

    Raises:
        FileRequiredError: If no file, or an empty one, is given
        RetentionPeriodRequiredError: If retention_period is missing or not positive
        PublishFileError: If any stage fails; the stage's error is the cause

    Example:
        ```python
        result = await publish_file(LocalFile("photo.jpg"), retention_period=60 * 24 * 7)
        print(result.public_url, result.hash)
        ```
    """
    size = file_size(file) if file is not None else None
    if not size or size <= 0:
        raise FileRequiredError()
    if not retention_period or not is_positive_number(retention_period):
        raise RetentionPeriodRequiredError(retention_period)

    config = resolve_config(config)
    name = file_name(file)

    _logger.info(
        "Publishing file",
        extra={"file_name": name, "size": size, "retention_period": retention_period},
    )

    try:
        wallet = wallet or default_wallet(config)
        client = storage_client(config, wallet)

        invoice_result = await invoice(size, retention_period, config=config, client=client)
        payment = await pay(
            invoice_result.order_id,
            invoice_result.recipient_public_key,
            invoice_result.amount,
            description=PUBLISH_DESCRIPTION,
            config=config,
            wallet=wallet,
            client=client,
        )
        result = await upload(
            payment.upload_url,
            invoice_result.public_url,
            file,
            server_url=config.storage_service_url,
            on_upload_progress=progress_tracker,
            config=config,
            hasher=hasher,
        )
    except Exception as exc:
        _logger.error("Publish failed", extra={"file_name": name, "error": str(exc)})
        raise PublishFileError(name, exc) from exc

    _logger.info("File published", extra={"file_name": name, "public_url": result.public_url})
    return result.model_copy(update={"status": STATUS_SUCCESS})
