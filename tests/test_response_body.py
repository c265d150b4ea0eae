import io

import pytest

from wirehttp.response_body import ResponseBody, ResponseBodyKind


class _PartialWriter:
    """Accepts at most two bytes per write."""

    def __init__(self):
        self.data = bytearray()

    def write(self, data):
        taken = bytes(data[:2])
        self.data += taken
        return len(taken)


def test_binary_body():
    body = ResponseBody.from_data(b"Success")
    out = io.BytesIO()
    body.write_to(out)
    assert out.getvalue() == b"Success"
    assert body.content_length() == len(b"Success")
    assert body.is_chunked() is False
    assert body.kind is ResponseBodyKind.BINARY


def test_binary_body_can_be_written_twice():
    body = ResponseBody.from_data(b"abc")
    first, second = io.BytesIO(), io.BytesIO()
    body.write_to(first)
    body.write_to(second)
    assert first.getvalue() == second.getvalue() == b"abc"


def test_text_body_length_is_utf8_bytes():
    text = "grüße"
    body = ResponseBody.from_text(text)
    out = io.BytesIO()
    body.write_to(out)
    assert out.getvalue() == text.encode("utf-8")
    assert body.content_length() == len(text.encode("utf-8"))


def test_partial_writer_receives_everything():
    body = ResponseBody.from_data(b"hello world")
    out = _PartialWriter()
    body.write_to(out)
    assert bytes(out.data) == b"hello world"


def test_file_body_ignores_prior_seek():
    file = io.BytesIO(b"file contents")
    file.seek(5)
    body = ResponseBody.from_file(file)
    assert body.content_length() == len(b"file contents")
    out = io.BytesIO()
    body.write_to(out)
    assert out.getvalue() == b"file contents"


def test_file_size_change_is_an_error():
    file = io.BytesIO(b"abcdef")
    body = ResponseBody.from_file(file)
    file.truncate(2)
    with pytest.raises(ValueError):
        body.write_to(io.BytesIO())


def test_chunked_stream_wire_format():
    def handler(sink):
        sink.write_all(b"hello")
        sink.write_all(b"")
        assert sink.write(b" world") == len(b" world")

    body = ResponseBody.chunked(handler)
    assert body.is_chunked() is True
    assert body.content_length() is None
    out = io.BytesIO()
    body.write_to(out)
    assert out.getvalue() == b"5\r\nhello\r\n6\r\n world\r\n0\r\n\r\n"


def test_chunked_size_is_upper_hex():
    payload = b"x" * 26

    body = ResponseBody.chunked(lambda sink: sink.write_all(payload))
    out = io.BytesIO()
    body.write_to(out)
    assert out.getvalue() == b"1A\r\n" + payload + b"\r\n0\r\n\r\n"


def test_chunked_empty_stream():
    body = ResponseBody.chunked(lambda sink: None)
    out = io.BytesIO()
    body.write_to(out)
    assert out.getvalue() == b"0\r\n\r\n"


def test_streamed_body_raw_output():
    def handler(sink):
        sink.write_all(b"raw ")
        sink.write(b"bytes")

    body = ResponseBody.streamed(handler)
    assert body.is_chunked() is False
    assert body.content_length() is None
    out = io.BytesIO()
    body.write_to(out)
    assert out.getvalue() == b"raw bytes"


@pytest.mark.parametrize("factory", [ResponseBody.streamed, ResponseBody.chunked])
def test_stream_written_only_once(factory):
    body = factory(lambda sink: sink.write_all(b"x"))
    body.write_to(io.BytesIO())
    with pytest.raises(RuntimeError):
        body.write_to(io.BytesIO())


def test_handler_error_propagates():
    def handler(sink):
        raise OSError("handler failed")

    body = ResponseBody.streamed(handler)
    with pytest.raises(OSError, match="handler failed"):
        body.write_to(io.BytesIO())


def test_repr_hides_handlers():
    assert repr(ResponseBody.chunked(lambda sink: None)) == "ResponseBody.ChunkedStream(handler)"
    assert repr(ResponseBody.streamed(lambda sink: None)) == "ResponseBody.Stream(handler)"