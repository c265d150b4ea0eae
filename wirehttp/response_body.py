"""Response bodies: fixed data, files and streamed output."""

from __future__ import annotations

import enum
import io
from typing import Any, BinaryIO, Callable, Optional

_WRITE_BUFFER_SIZE = 0x1_00_00


def _write_all(stream: Any, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = stream.write(view)
        if written is None:
            written = len(view)
        if written == 0:
            raise OSError("failed to write whole buffer")
        view = view[written:]


class ResponseBodySink(io.RawIOBase):
    """The writable handed to a streaming response handler.

    Flushing it does not flush the connection; the response is flushed as a whole.
    """

    def __init__(self, stream: Any) -> None:
        super().__init__()
        self._stream = stream

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:
        """Write some of ``data`` and return how many bytes were taken."""
        written = self._stream.write(data)
        return len(data) if written is None else written

    def write_all(self, data: bytes) -> None:
        """Write all of ``data``."""
        _write_all(self._stream, data)


class _ChunkedSink(ResponseBodySink):
    """Frames every write as one chunk of chunked transfer encoding."""

    def write(self, data: bytes) -> int:
        self.write_all(data)
        return len(data)

    def write_all(self, data: bytes) -> None:
        if not data:
            return
        _write_all(self._stream, f"{len(data):X}\r\n".encode("ascii"))
        _write_all(self._stream, data)
        _write_all(self._stream, b"\r\n")

    def finish(self) -> None:
        _write_all(self._stream, b"0\r\n\r\n")


ResponseBodyHandler = Callable[[ResponseBodySink], None]


class ResponseBodyKind(enum.Enum):
    """The ways a response body can be sent."""

    BINARY = "binary"
    TEXT = "text"
    FILE = "file"
    STREAM = "stream"
    CHUNKED_STREAM = "chunked_stream"


class ResponseBody:
    """The body of a response.

    Fixed data and files get a ``Content-Length``; a stream has none and
    forces the connection to close; a chunked stream is sent with chunked
    transfer encoding. Streams can be written only once.
    """

    def __init__(self, kind: ResponseBodyKind, payload: Any, size: Optional[int] = None) -> None:
        self._kind = kind
        self._payload = payload
        self._size = size

    @property
    def kind(self) -> ResponseBodyKind:
        """How this body is sent."""
        return self._kind

    @classmethod
    def from_data(cls, data: bytes) -> "ResponseBody":
        """A fixed body of bytes."""
        return cls(ResponseBodyKind.BINARY, bytes(data))

    @classmethod
    def from_text(cls, text: str) -> "ResponseBody":
        """A fixed body of text, sent as UTF-8."""
        return cls(ResponseBodyKind.TEXT, text)

    @classmethod
    def from_file(cls, file: BinaryIO) -> "ResponseBody":
        """A body streaming the whole of a seekable file; its size must not change."""
        file.seek(0, io.SEEK_END)
        size = file.tell()
        return cls(ResponseBodyKind.FILE, file, size)

    @classmethod
    def chunked(cls, streamer: ResponseBodyHandler) -> "ResponseBody":
        """A body produced by ``streamer`` and sent with chunked transfer encoding."""
        return cls(ResponseBodyKind.CHUNKED_STREAM, streamer)

    @classmethod
    def streamed(cls, streamer: ResponseBodyHandler) -> "ResponseBody":
        """A body produced by ``streamer`` and sent as is, without a length."""
        return cls(ResponseBodyKind.STREAM, streamer)

    def _take_handler(self) -> ResponseBodyHandler:
        handler = self._payload
        if handler is None:
            raise RuntimeError("stream can only be written once")
        self._payload = None
        return handler

    def write_to(self, stream: Any) -> None:
        """Write the body to a binary writable stream."""
        kind = self._kind
        if kind is ResponseBodyKind.BINARY:
            _write_all(stream, self._payload)
        elif kind is ResponseBodyKind.TEXT:
            _write_all(stream, self._payload.encode("utf-8"))
        elif kind is ResponseBodyKind.FILE:
            self._write_file(stream)
        elif kind is ResponseBodyKind.STREAM:
            self._take_handler()(ResponseBodySink(stream))
        else:
            handler = self._take_handler()
            sink = _ChunkedSink(stream)
            handler(sink)
            sink.finish()

    def _write_file(self, stream: Any) -> None:
        file = self._payload
        file.seek(0)
        written = 0
        while chunk := file.read(_WRITE_BUFFER_SIZE):
            _write_all(stream, chunk)
            written += len(chunk)
        if written != self._size:
            raise ValueError("size of the file changed while writing it to network")

    def is_chunked(self) -> bool:
        """True if this body is sent with chunked transfer encoding."""
        return self._kind is ResponseBodyKind.CHUNKED_STREAM

    def content_length(self) -> Optional[int]:
        """The length in bytes, or None for streams."""
        if self._kind is ResponseBodyKind.BINARY:
            return len(self._payload)
        if self._kind is ResponseBodyKind.TEXT:
            return len(self._payload.encode("utf-8"))
        if self._kind is ResponseBodyKind.FILE:
            return self._size
        return None

    def __repr__(self) -> str:
        if self._kind is ResponseBodyKind.BINARY:
            return f"ResponseBody.FixedSizeBinaryData({self._payload!r})"
        if self._kind is ResponseBodyKind.TEXT:
            return f"ResponseBody.FixedSizeTextData({self._payload!r})"
        if self._kind is ResponseBodyKind.FILE:
            return f"ResponseBody.FixedSizeFile(file, {self._size})"
        if self._kind is ResponseBodyKind.STREAM:
            return "ResponseBody.Stream(handler)"
        return "ResponseBody.ChunkedStream(handler)"