"""HTTP versions and parsing of the request status line and query string."""

from __future__ import annotations

import enum
import string
from functools import total_ordering
from urllib.parse import unquote_to_bytes


class RequestLineError(ValueError):
    """Raised when a status line or query string is malformed."""


@total_ordering
class HttpVersion(enum.Enum):
    """The HTTP versions that are supported."""

    HTTP09 = "HTTP/0.9"
    HTTP10 = "HTTP/1.0"
    HTTP11 = "HTTP/1.1"

    def as_str(self) -> str:
        """The printable name of the version."""
        return self.value

    def as_net_str(self) -> str:
        """The version as it appears on the status line; empty for HTTP/0.9."""
        return "" if self is HttpVersion.HTTP09 else self.value

    @classmethod
    def try_from_net_str(cls, value: str) -> "HttpVersion":
        """Parse the version part of a status line; an empty string means HTTP/0.9.

        Raises ValueError for an unsupported version.
        """
        if value == "":
            return cls.HTTP09
        if value in ("HTTP/1.0", "HTTP/1.1"):
            return cls(value)
        raise ValueError(f"unsupported http version: {value!r}")

    @classmethod
    def try_from_str(cls, value: str) -> "HttpVersion":
        """Parse a printable version name as returned by ``as_str``.

        Raises ValueError for an unknown name.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unsupported http version: {value!r}") from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HttpVersion):
            return NotImplemented
        return _ORDER.index(self) < _ORDER.index(other)

    def __str__(self) -> str:
        return self.value


_ORDER = (HttpVersion.HTTP09, HttpVersion.HTTP10, HttpVersion.HTTP11)

_ALNUM = frozenset((string.ascii_letters + string.digits).encode("ascii"))
_STATUS_LINE_BYTES = _ALNUM | frozenset(b"!#$&'()*+,/:;=?@[]-._~% \r\n")
_QUERY_BYTES = _ALNUM | frozenset(b"!$'()*+,-./:;@_~")


def parse_status_line(data: bytes) -> str:
    """Validate the raw bytes of a status line and return them as text.

    Raises RequestLineError if any byte is not permitted.
    """
    if any(byte not in _STATUS_LINE_BYTES for byte in data):
        raise RequestLineError("status line contains invalid bytes")
    return data.decode("ascii")


def _decode_component(component: bytes, raw_query: str) -> str:
    try:
        return unquote_to_bytes(component).decode("utf-8")
    except UnicodeDecodeError:
        raise RequestLineError(f"invalid query string: {raw_query!r}") from None


def parse_raw_query(raw_query: str) -> list[tuple[str, str]]:
    """Split a query string into ``(key, value)`` pairs in order of appearance.

    Every pair must hold exactly one ``=``. Raises RequestLineError otherwise,
    or when the query holds a byte that is not permitted.
    """
    if not raw_query:
        return []

    def invalid() -> RequestLineError:
        return RequestLineError(f"invalid query string: {raw_query!r}")

    query: list[tuple[str, str]] = []
    key = bytearray()
    value = bytearray()
    matching_value = False
    for byte in raw_query.encode("utf-8"):
        if byte == ord("="):
            if matching_value:
                raise invalid()
            matching_value = True
        elif byte == ord("&"):
            if not matching_value:
                raise invalid()
            query.append((_decode_component(bytes(key), raw_query),
                          _decode_component(bytes(value), raw_query)))
            key.clear()
            value.clear()
            matching_value = False
        elif byte in _QUERY_BYTES:
            (value if matching_value else key).append(byte)
        else:
            raise invalid()

    if not matching_value:
        raise invalid()
    query.append((_decode_component(bytes(key), raw_query),
                  _decode_component(bytes(value), raw_query)))
    return query