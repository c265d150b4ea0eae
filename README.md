# wirehttp

Small, dependency-free building blocks for HTTP/1.x servers.

## What is inside

- `wirehttp.mime_group`: `MimeGroup`, the part of a MIME type before the `/`
  (`font`, `application`, `image`, `video`, `audio`, `text`, or a custom
  group), and `check_header_byte`, which tells whether a byte may appear in
  a MIME group or subtype.
- `wirehttp.mime_type`: `MimeType`, the well-known MIME types (available as
  constants such as `MimeType.TEXT_HTML`) plus custom ones. It maps file
  extensions to types and back (`from_extension`, `extension`), and parses
  type strings (`parse`) and `Content-Type` header values
  (`parse_from_content_type_header`), returning `None` for invalid input.
- `wirehttp.accept`: `QValue` (quality values stored as 0 to 1000),
  `AcceptMimeType` (`*/*`, `group/*` or a specific type, with `permits`,
  `permits_group` and `permits_specific`) and `AcceptQualityMimeType` for
  parsing and serialising `Accept` header values.
- `wirehttp.http_version`: `HttpVersion` (HTTP/0.9, 1.0 and 1.1), plus
  `parse_status_line`, which validates the raw bytes of a request line, and
  `parse_raw_query`, which splits a query string into decoded
  `(key, value)` pairs. Both raise `RequestLineError` on malformed input;
  `HttpVersion.try_from_net_str` and `try_from_str` raise `ValueError` for
  unsupported versions.
- `wirehttp.request_body`: `RequestBody`, which reads a request body from
  any object with a binary `read(size)`, either limited to a fixed
  `Content-Length` or decoded from chunked transfer encoding (malformed
  chunks raise `ChunkedEncodingError`). Reads are guarded by a lock.
- `wirehttp.response_body`: `ResponseBody`, holding fixed bytes, text, a
  seekable file, or a handler that writes a streamed or chunked body into a
  `ResponseBodySink`; `write_to` sends it to a binary writable stream.

## Install

```
pip install .
```

## Examples

```python
from wirehttp.mime_type import MimeType
from wirehttp.accept import AcceptQualityMimeType

MimeType.from_extension("png").as_str()        # "image/png"
MimeType.parse("text/html").extension()        # "html"

accept = AcceptQualityMimeType.parse("text/*;q=0.5, application/json")
# sorted by descending quality: application/json first
AcceptQualityMimeType.elements_to_header_value(accept)
# "application/json,text/*;q=0.5"
```

Parsing a query string:

```python
from wirehttp.http_version import parse_raw_query

parse_raw_query("a=1&b=hello%20world")   # [("a", "1"), ("b", "hello world")]
```

Reading a chunked request body:

```python
import io
from wirehttp.request_body import RequestBody

body = RequestBody.new_chunked(io.BytesIO(b"5\r\nhello\r\n0\r\n\r\n"))
body.read_to_end()   # b"hello"
```

Writing a chunked response body:

```python
import io
from wirehttp.response_body import ResponseBody

out = io.BytesIO()
body = ResponseBody.chunked(lambda sink: sink.write(b"hi"))
body.write_to(out)
out.getvalue()       # b"2\r\nhi\r\n0\r\n\r\n"
```

## What it does not do

wirehttp is a set of parts, not a server. It does not listen on sockets,
accept connections, route requests, or read a full request head with its
headers; it has no request or response object that writes a status line and
headers. Those are left to the code that uses these parts.

## Tests

```
pip install .[test]
pytest
```