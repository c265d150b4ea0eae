"""HTTP/1.x building blocks: MIME types, Accept parsing, request lines and bodies."""

__version__ = "0.1.0"

__all__ = [
    "accept",
    "http_version",
    "mime_group",
    "mime_type",
    "request_body",
    "response_body",
]