"""
File upload to paid storage.

In production the file bytes are PUT to the upload URL returned by ``/pay``
while the content locator is computed from the same bytes. Against a local
development server (``http://localhost``/``http://127.0.0.1``) the file is
posted as multipart form data and the server answers with the locator.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, AsyncIterator, Callable, Optional

import httpx

from nanostore_publisher.config import PublisherConfig, resolve_config
from nanostore_publisher.errors import (
    MissingRequiredParametersError,
    TransportError,
    UnsupportedFileTypeError,
    UploadFailedError,
)
from nanostore_publisher.files import content_type, file_name, select_reader
from nanostore_publisher.hashing import ContentHasher, UHRPHasher
from nanostore_publisher.types import UploadProgress, UploadResult
from nanostore_publisher.utils.logging import get_logger
from nanostore_publisher.utils.validation import is_loopback_url, is_non_empty_string, sanitize_for_logging

_logger = get_logger(__name__)

UPLOAD_CHUNK_SIZE = 64 * 1024
LOCAL_UPLOAD_PATH = "/pay"
LOCAL_DATA_PATH = "/data"

ProgressCallback = Callable[[UploadProgress], Any]


async def _chunks(
    data: bytes,
    on_upload_progress: Optional[ProgressCallback],
) -> AsyncIterator[bytes]:
    total = len(data)
    loaded = 0
    for start in range(0, total, UPLOAD_CHUNK_SIZE):
        chunk = data[start:start + UPLOAD_CHUNK_SIZE]
        yield chunk
        loaded += len(chunk)
        if on_upload_progress is not None:
            update = on_upload_progress(UploadProgress(loaded=loaded, total=total))
            if inspect.isawaitable(update):
                await update


async def _put_bytes(
    upload_url: str,
    pending_data: "asyncio.Future[bytes]",
    mime_type: str,
    on_upload_progress: Optional[ProgressCallback],
) -> None:
    data = await pending_data
    headers = {"Content-Type": mime_type, "Content-Length": str(len(data))}

    async with httpx.AsyncClient() as client:
        response = await client.put(
            upload_url,
            content=_chunks(data, on_upload_progress),
            headers=headers,
        )

    if response.status_code >= 400:
        raise TransportError(
            f"Upload rejected: HTTP {response.status_code}",
            url=sanitize_for_logging(upload_url),
            status_code=response.status_code,
        )


async def _hash_bytes(pending_data: "asyncio.Future[bytes]", hasher: ContentHasher) -> str:
    data = await pending_data
    return await asyncio.to_thread(hasher.hash, data)


async def _upload_local(server_url: str, file: Any) -> UploadResult:
    data = await select_reader(file).read_all(file)
    url = f"{server_url}{LOCAL_UPLOAD_PATH}"

    _logger.info("Uploading to local server", extra={"url": url, "size": len(data)})

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                url,
                files={"file": (file_name(file), data, content_type(file))},
            )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise UploadFailedError(exc, upload_url=url) from exc

    locator = response.text.strip()
    return UploadResult(
        public_url=f"{server_url}{LOCAL_DATA_PATH}/{locator}",
        hash=locator,
    )


async def upload(
    upload_url: Optional[str],
    public_url: Optional[str],
    file: Any,
    *,
    server_url: Optional[str] = None,
    on_upload_progress: Optional[ProgressCallback] = None,
    config: Optional[PublisherConfig] = None,
    hasher: Optional[ContentHasher] = None,
) -> UploadResult:
    """
    Upload a paid-for file and compute its content locator.

    The transfer and the hashing run concurrently over a single read of the
    file. If either fails the other is cancelled and nothing is returned.

    Args:
        upload_url: Upload URL returned by ``pay``/``submit_payment``
        public_url: Public URL returned by ``invoice``
        file: Bytes, a buffer-carrying object, or an object with ``async read()``
        server_url: Storage service URL (defaults to config.storage_service_url)
        on_upload_progress: Called (or awaited) with an UploadProgress after each chunk sent
        config: Publisher configuration (defaults to DEFAULT_CONFIG)
        hasher: Content hasher (defaults to UHRPHasher)

    Returns:
        UploadResult with the public URL and the UHRP locator

    Raises:
        MissingRequiredParametersError: If upload_url or public_url is missing
        UnsupportedFileTypeError: If the file cannot be read
        UploadFailedError: If the transfer or the hashing failed

    Example:
        ```python
        result = await upload(payment.upload_url, invoice.public_url, LocalFile("a.png"))
        print(result.hash)
        ```
    """
    config = resolve_config(config)
    server_url = (server_url or config.storage_service_url).rstrip("/")

    if is_loopback_url(server_url):
        return await _upload_local(server_url, file)

    missing = [
        name
        for name, value in (("upload_url", upload_url), ("public_url", public_url))
        if not is_non_empty_string(value)
    ]
    if missing:
        raise MissingRequiredParametersError(missing)

    reader = select_reader(file)
    hasher = hasher or UHRPHasher()

    _logger.info(
        "Uploading file",
        extra={"upload_url": sanitize_for_logging(upload_url), "file_name": file_name(file)},
    )

    pending_data = asyncio.ensure_future(reader.read_all(file))
    tasks = [
        asyncio.ensure_future(_put_bytes(upload_url, pending_data, content_type(file), on_upload_progress)),
        asyncio.ensure_future(_hash_bytes(pending_data, hasher)),
    ]
    put_task, hash_task = tasks

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks + [pending_data]:
            task.cancel()
        raise

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)

    failures = [
        task.exception()
        for task in (put_task, hash_task)
        if task in done and not task.cancelled() and task.exception() is not None
    ]
    if failures:
        cause = failures[0]
        _logger.error(
            "Upload failed",
            extra={"upload_url": sanitize_for_logging(upload_url), "error": str(cause)},
        )
        if isinstance(cause, UnsupportedFileTypeError):
            raise cause
        raise UploadFailedError(cause, upload_url=sanitize_for_logging(upload_url)) from cause

    locator = hash_task.result()
    _logger.info("Upload complete", extra={"public_url": public_url, "hash": locator})
    return UploadResult(public_url=public_url, hash=locator)
