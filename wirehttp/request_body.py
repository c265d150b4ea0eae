"""Request bodies: fixed ``Content-Length`` and chunked transfer encoding."""

from __future__ import annotations

import io
import threading
from typing import Optional, Protocol, Union

_READ_BUFFER_SIZE = 0x1_00_00
_MAX_SIZE_DIGITS = 17
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


class Readable(Protocol):
    """Anything with a binary ``read(size)``."""

    def read(self, size: int, /) -> bytes: ...


class ChunkedEncodingError(ValueError):
    """Raised when a chunked request body is malformed."""


def _read_exact(reader: Readable, size: int) -> bytes:
    buffer = bytearray()
    while len(buffer) < size:
        data = reader.read(size - len(buffer))
        if not data:
            raise EOFError("unexpected end of stream")
        buffer += data
    return bytes(buffer)


class _ContentLengthBody:
    """A body limited to a known number of bytes."""

    def __init__(self, reader: Readable, length: int) -> None:
        self._reader = reader
        self.remaining = length
        self._failed = False

    def read(self, size: int) -> bytes:
        if self._failed:
            raise BrokenPipeError("Transfer stream has failed due to previous error")
        to_read = min(size, self.remaining)
        if to_read == 0:
            return b""
        try:
            data = self._reader.read(to_read) or b""
        except Exception:
            self._failed = True
            raise
        self.remaining -= len(data)
        return data

    def __repr__(self) -> str:
        return f"RequestBodyWithContentLength(remaining={self.remaining})"


class _ChunkedBody:
    """A body sent with chunked transfer encoding."""

    def __init__(self, reader: Readable) -> None:
        self._reader = reader
        self._eof = False
        self._failed = False
        self._remaining_chunk_length = 0

    def read(self, size: int) -> bytes:
        if self._failed:
            raise BrokenPipeError(
                "Chunked transfer stream has failed due to previous error"
            )
        try:
            return self._read_internal(size)
        except Exception:
            self._failed = True
            raise

    def _read_internal(self, size: int) -> bytes:
        if size == 0 or self._eof:
            return b""

        if self._remaining_chunk_length == 0:
            chunk_length = self._read_chunk_size()
            if chunk_length == 0:
                self._expect_crlf()
                self._eof = True
                return b""
            self._remaining_chunk_length = chunk_length

        data = self._reader.read(min(size, self._remaining_chunk_length))
        if not data:
            raise EOFError("chunked transfer encoding suggest more data")
        self._remaining_chunk_length -= len(data)
        if self._remaining_chunk_length == 0:
            self._expect_crlf()
        return data

    def _expect_crlf(self) -> None:
        if _read_exact(self._reader, 1) != b"\r":
            raise ChunkedEncodingError("Chunk trailer is malformed")
        if _read_exact(self._reader, 1) != b"\n":
            raise ChunkedEncodingError("Chunk trailer is malformed")

    def _read_chunk_size(self) -> int:
        digits = bytearray()
        while True:
            if len(digits) >= _MAX_SIZE_DIGITS:
                # Sizes padded with leading zeros are not supported.
                raise ChunkedEncodingError("Chunk size is larger than 2^64 or malformed")
            byte = _read_exact(self._reader, 1)
            if byte == b"\r":
                if _read_exact(self._reader, 1) != b"\n":
                    raise ChunkedEncodingError("Chunk size is malformed")
                break
            digits += byte

        hex_part = bytes(digits[1:] if digits.startswith(b"+") else digits)
        if not hex_part or any(byte not in _HEX_DIGITS for byte in hex_part):
            raise ChunkedEncodingError("Chunk size is malformed")
        value = int(hex_part, 16)
        if value >= 1 << 64:
            raise ChunkedEncodingError("Chunk size is malformed")
        return value

    def __repr__(self) -> str:
        return (
            f"RequestBodyChunked(eof={self._eof} "
            f"remaining_chunk_length={self._remaining_chunk_length})"
        )


class RequestBody:
    """The body of a request, safe to read from several threads."""

    def __init__(self, inner: Union[_ContentLengthBody, _ChunkedBody]) -> None:
        self._inner = inner
        self._lock = threading.Lock()

    @classmethod
    def new_with_data(cls, data: bytes) -> "RequestBody":
        """A body holding the given bytes."""
        data = bytes(data)
        return cls.new_with_content_length(io.BytesIO(data), len(data))

    @classmethod
    def new_with_content_length(cls, reader: Readable, length: int) -> "RequestBody":
        """A body reading at most ``length`` bytes from ``reader``."""
        if length < 0:
            raise ValueError(f"content length must not be negative: {length!r}")
        return cls(_ContentLengthBody(reader, length))

    @classmethod
    def new_chunked(cls, reader: Readable) -> "RequestBody":
        """A body decoding chunked transfer encoding from ``reader``."""
        return cls(_ChunkedBody(reader))

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; an empty result means the body is finished."""
        if size < 0:
            raise ValueError(f"size must not be negative: {size!r}")
        with self._lock:
            return self._inner.read(size)

    def read_to_end(self) -> bytes:
        """Read everything that is left of the body."""
        parts = []
        with self._lock:
            while chunk := self._inner.read(_READ_BUFFER_SIZE):
                parts.append(chunk)
        return b"".join(parts)

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes; raises EOFError if the body ends first."""
        if size < 0:
            raise ValueError(f"size must not be negative: {size!r}")
        buffer = bytearray()
        with self._lock:
            while len(buffer) < size:
                chunk = self._inner.read(size - len(buffer))
                if not chunk:
                    raise EOFError("failed to fill whole buffer")
                buffer += chunk
        return bytes(buffer)

    def remaining(self) -> Optional[int]:
        """Bytes left for a fixed-length body; None for a chunked one."""
        with self._lock:
            if isinstance(self._inner, _ContentLengthBody):
                return self._inner.remaining
            return None

    def __repr__(self) -> str:
        return f"RequestBody({self._inner!r})"