"""
Tests for file representations and capability-based readers.
"""

from typing import Any

import pytest

from nanostore_publisher.errors import UnsupportedFileTypeError
from nanostore_publisher.files import (
    DEFAULT_CONTENT_TYPE,
    BufferReader,
    FileBuffer,
    LocalFile,
    StreamReader,
    content_type,
    file_name,
    file_size,
    has_buffer_access,
    has_stream_access,
    is_readable,
    select_reader,
)


class AsyncReadable:
    """Stream-like file exposing an awaitable read()."""

    def __init__(self, data: Any, name: str = "stream.bin", type: str = "image/png") -> None:
        self._data = data
        self.name = name
        self.type = type
        self.size = len(data) if isinstance(data, bytes) else 0
        self.reads = 0

    async def read(self) -> Any:
        self.reads += 1
        return self._data


class SyncReadable:
    """File with a synchronous read(), which is not supported."""

    size = 3

    def read(self) -> bytes:
        return b"abc"


# =============================================================================
# Capability Tests
# =============================================================================


class TestCapabilities:
    """Tests for capability checks."""

    @pytest.mark.parametrize(
        "file",
        [b"abc", bytearray(b"abc"), memoryview(b"abc"), FileBuffer(b"abc")],
    )
    def test_buffer_access(self, file: Any) -> None:
        """Test bytes-like values and data_as_buffer carriers."""
        assert has_buffer_access(file) is True
        assert is_readable(file) is True

    def test_empty_data_as_buffer_has_no_buffer_access(self) -> None:
        """Test an empty data_as_buffer does not count as buffer access."""
        assert has_buffer_access(FileBuffer(b"")) is False

    def test_stream_access(self) -> None:
        """Test objects with an async read()."""
        assert has_stream_access(AsyncReadable(b"abc")) is True
        assert has_stream_access(b"abc") is False

    def test_sync_read_not_supported(self) -> None:
        """Test a synchronous read() is not stream access."""
        assert has_stream_access(SyncReadable()) is False
        assert is_readable(SyncReadable()) is False


# =============================================================================
# Reader Tests
# =============================================================================


class TestReaders:
    """Tests for ByteReader selection and reading."""

    def test_select_buffer_reader(self) -> None:
        """Test buffer access selects BufferReader."""
        assert isinstance(select_reader(FileBuffer(b"abc")), BufferReader)

    def test_select_stream_reader(self) -> None:
        """Test stream access selects StreamReader."""
        assert isinstance(select_reader(AsyncReadable(b"abc")), StreamReader)

    @pytest.mark.parametrize("file", [None, 42, "path.txt", SyncReadable()])
    def test_select_unsupported(self, file: Any) -> None:
        """Test unreadable files raise UnsupportedFileTypeError."""
        with pytest.raises(UnsupportedFileTypeError):
            select_reader(file)

    @pytest.mark.asyncio
    async def test_buffer_reader_reads_bytes(self) -> None:
        """Test buffer reads return bytes."""
        assert await BufferReader().read_all(bytearray(b"abc")) == b"abc"
        assert await BufferReader().read_all(FileBuffer(b"xyz")) == b"xyz"

    @pytest.mark.asyncio
    async def test_stream_reader_reads_once(self) -> None:
        """Test stream reads await read() once."""
        file = AsyncReadable(b"data")
        assert await StreamReader().read_all(file) == b"data"
        assert file.reads == 1

    @pytest.mark.asyncio
    async def test_stream_reader_rejects_non_bytes(self) -> None:
        """Test read() returning text is rejected."""
        with pytest.raises(UnsupportedFileTypeError):
            await StreamReader().read_all(AsyncReadable("text"))


# =============================================================================
# LocalFile and Metadata Tests
# =============================================================================


class TestLocalFile:
    """Tests for LocalFile."""

    @pytest.mark.asyncio
    async def test_read(self, tmp_path) -> None:
        """Test reading a file from disk."""
        path = tmp_path / "notes.txt"
        path.write_bytes(b"some notes")

        file = LocalFile(path)

        assert file.name == "notes.txt"
        assert file.type == "text/plain"
        assert file.size == 10
        assert has_stream_access(file) is True
        assert await select_reader(file).read_all(file) == b"some notes"

    def test_unknown_type(self, tmp_path) -> None:
        """Test unknown extensions fall back to octet-stream."""
        path = tmp_path / "blob.unknownext"
        path.write_bytes(b"x")
        assert LocalFile(path).type == DEFAULT_CONTENT_TYPE

    def test_explicit_type(self, tmp_path) -> None:
        """Test an explicit MIME type wins."""
        path = tmp_path / "data.txt"
        path.write_bytes(b"x")
        assert LocalFile(path, type="application/json").type == "application/json"


class TestMetadata:
    """Tests for metadata helpers."""

    def test_raw_bytes(self) -> None:
        """Test defaults for raw bytes."""
        assert file_size(b"abcd") == 4
        assert file_name(b"abcd") == "file"
        assert content_type(b"abcd") == DEFAULT_CONTENT_TYPE

    def test_file_buffer(self) -> None:
        """Test FileBuffer metadata."""
        file = FileBuffer(b"abcd", name="a.txt", type="text/plain")
        assert file_size(file) == 4
        assert file_name(file) == "a.txt"
        assert content_type(file) == "text/plain"

    def test_unknown_size(self) -> None:
        """Test objects without size metadata."""
        assert file_size(object()) is None

    def test_missing_local_file_has_no_size(self, tmp_path) -> None:
        """Test a path that does not exist reports no size."""
        assert file_size(LocalFile(tmp_path / "nope.bin")) is None

    def test_non_numeric_size_ignored(self) -> None:
        """Test a non-numeric size attribute counts as unknown."""

        class OddFile:
            size = "large"

        assert file_size(OddFile()) is None
