"""
File representations accepted by the uploader.

The uploader never checks concrete types. It asks what a file can do:

- buffer access: raw ``bytes``/``bytearray``/``memoryview``, or any object
  with a non-empty ``data_as_buffer`` attribute (e.g. :class:`FileBuffer`);
- stream access: any object with an ``async def read()`` returning the whole
  content (e.g. :class:`LocalFile`).

Optional metadata is read from ``name``, ``type`` (MIME) and ``size``
attributes when present.
"""

from __future__ import annotations

import asyncio
import inspect
import mimetypes
from dataclasses import dataclass
from numbers import Real
from pathlib import Path
from typing import Any, Optional, Protocol, Union, runtime_checkable

from nanostore_publisher.errors import UnsupportedFileTypeError

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_FILE_NAME = "file"

_BUFFER_TYPES = (bytes, bytearray, memoryview)


@dataclass(frozen=True)
class FileBuffer:
    """
    In-memory file with metadata.

    Example:
        >>> FileBuffer(b"hello", name="hello.txt", type="text/plain").size
        5
    """

    data_as_buffer: bytes
    name: str = DEFAULT_FILE_NAME
    type: str = DEFAULT_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.data_as_buffer)


class LocalFile:
    """
    File on disk, read lazily through an awaitable ``read()``.

    Example:
        ```python
        file = LocalFile("report.pdf")
        result = await publish_file(file, retention_period=60 * 24)
        ```
    """

    def __init__(self, path: Union[str, Path], type: Optional[str] = None) -> None:
        self.path = Path(path)
        self.name = self.path.name
        self.type = type or mimetypes.guess_type(self.path.name)[0] or DEFAULT_CONTENT_TYPE

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r}, type={self.type!r})"


# ============================================================================
# Capability checks
# ============================================================================

def has_buffer_access(file: Any) -> bool:
    """Whether the file's bytes are available without reading."""
    if isinstance(file, _BUFFER_TYPES):
        return True
    buffer = getattr(file, "data_as_buffer", None)
    return isinstance(buffer, _BUFFER_TYPES) and len(buffer) > 0


def has_stream_access(file: Any) -> bool:
    """Whether the file exposes an awaitable whole-content ``read()``."""
    read = getattr(file, "read", None)
    return callable(read) and inspect.iscoroutinefunction(read)


def is_readable(file: Any) -> bool:
    return has_buffer_access(file) or has_stream_access(file)


# ============================================================================
# Readers
# ============================================================================

@runtime_checkable
class ByteReader(Protocol):
    """Reads a file's full content."""

    async def read_all(self, file: Any) -> bytes:
        ...


class BufferReader:
    """Reader for files with buffer access."""

    async def read_all(self, file: Any) -> bytes:
        if isinstance(file, _BUFFER_TYPES):
            return bytes(file)
        return bytes(file.data_as_buffer)


class StreamReader:
    """Reader for files with stream access."""

    async def read_all(self, file: Any) -> bytes:
        data = await file.read()
        if not isinstance(data, _BUFFER_TYPES):
            raise UnsupportedFileTypeError(file, reason="read() did not return bytes")
        return bytes(data)


_BUFFER_READER = BufferReader()
_STREAM_READER = StreamReader()


def select_reader(file: Any) -> ByteReader:
    """
    Pick the reader matching a file's capabilities.

    Buffer access wins when a file offers both, so pre-read content is
    never read twice.

    Raises:
        UnsupportedFileTypeError: If the file offers neither capability
    """
    if has_buffer_access(file):
        return _BUFFER_READER
    if has_stream_access(file):
        return _STREAM_READER
    raise UnsupportedFileTypeError(file)


# ============================================================================
# Metadata
# ============================================================================

def file_size(file: Any) -> Optional[int]:
    """Declared size in bytes, or None if unknown or unreadable."""
    if isinstance(file, _BUFFER_TYPES):
        return len(file)
    try:
        size = getattr(file, "size", None)
    except OSError:
        return None
    if isinstance(size, Real) and not isinstance(size, bool):
        return size
    buffer = getattr(file, "data_as_buffer", None)
    if isinstance(buffer, _BUFFER_TYPES):
        return len(buffer)
    return None


def file_name(file: Any) -> str:
    name = getattr(file, "name", None)
    return name if isinstance(name, str) and name else DEFAULT_FILE_NAME


def content_type(file: Any) -> str:
    mime = getattr(file, "type", None)
    return mime if isinstance(mime, str) and mime else DEFAULT_CONTENT_TYPE
