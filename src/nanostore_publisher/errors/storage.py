"""
Upload and publish exceptions.

These are raised during the final stage of a publish: pushing file bytes to
the storage endpoint and computing the content locator.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from nanostore_publisher.errors.base import NanoStoreError, describe


class StorageError(NanoStoreError):
    """
    Base exception for upload operations.

    Example:
        >>> raise StorageError("Upload endpoint unreachable", upload_url="https://...")
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "ERR_STORAGE",
        upload_url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        details = details or {}
        if upload_url:
            details["upload_url"] = upload_url

        super().__init__(message, code=code, details=details, cause=cause)
        self.upload_url = upload_url


class UnsupportedFileTypeError(StorageError):
    """
    Raised when a file representation cannot be read.

    Supported representations are raw bytes, objects carrying a
    ``data_as_buffer`` attribute, and objects exposing an awaitable ``read()``.

    Example:
        >>> raise UnsupportedFileTypeError(42)
    """

    def __init__(self, file: Any = None, *, reason: Optional[str] = None) -> None:
        type_name = type(file).__name__
        message = f"Unsupported file type: {type_name}"
        if reason:
            message += f" ({reason})"
        super().__init__(
            message,
            code="ERR_INVALID_FILE_TYPE",
            details={"file_type": type_name},
        )
        self.file_type = type_name


class UploadFailedError(StorageError):
    """Raised when the byte transfer or the content hashing fails."""

    def __init__(
        self,
        cause: BaseException,
        *,
        upload_url: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"File upload failed: {describe(cause)}",
            code="ERR_UPLOAD_FAILED",
            upload_url=upload_url,
            cause=cause,
        )


class PublishFileError(NanoStoreError):
    """
    Single failure shape surfaced by publish_file.

    Wraps whichever stage broke (invoice, payment or upload). The message
    embeds the file name and the original message; the original error is
    kept in ``cause`` and ``original_code``.
    """

    def __init__(self, file_name: str, cause: BaseException) -> None:
        original_code = getattr(cause, "code", None)
        details: Dict[str, Any] = {"file_name": file_name}
        if original_code:
            details["original_code"] = original_code

        super().__init__(
            f"Failed to publish file {file_name}: {describe(cause)}",
            code="ERR_PUBLISH_FILE_FAILED",
            details=details,
            cause=cause,
        )
        self.file_name = file_name
        self.original_code = original_code
