"""MIME types as used in the ``Content-Type`` header."""

from __future__ import annotations

import string
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional

from wirehttp.mime_group import MimeGroup, check_header_byte

# (constant name, mime string, most likely extension). The order of this
# table defines how well-known types sort.
_DECLARED: tuple[tuple[str, str, str], ...] = (
    ("FONT_TTF", "font/ttf", "ttf"),
    ("FONT_OTF", "font/otf", "otf"),
    ("FONT_WOFF", "font/woff", "woff"),
    ("FONT_WOFF2", "font/woff2", "woff2"),
    ("APPLICATION_ABIWORD", "application/x-abiword", "abw"),
    ("APPLICATION_FREEARC", "application/x-freearc", "arc"),
    ("APPLICATION_AMAZON_EBOOK", "application/vnd.amazon.ebook", "azw"),
    ("APPLICATION_BZIP", "application/x-bzip", "bz"),
    ("APPLICATION_BZIP2", "application/x-bzip2", "bz2"),
    ("APPLICATION_CD_AUDIO", "application/x-cdf", "cda"),
    ("APPLICATION_C_SHELL", "application/x-csh", "csh"),
    ("APPLICATION_MICROSOFT_WORD", "application/msword", "doc"),
    (
        "APPLICATION_MICROSOFT_WORD_XML",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "docx",
    ),
    ("APPLICATION_MICROSOFT_FONT", "application/vnd.ms-fontobject", "eot"),
    ("APPLICATION_EPUB", "application/epub+zip", "epub"),
    ("APPLICATION_GZIP", "application/gzip", "gz"),
    ("APPLICATION_JAR", "application/java-archive", "jar"),
    ("APPLICATION_JAVA_CLASS", "application/x-java-class", "class"),
    ("APPLICATION_OCTET_STREAM", "application/octet-stream", "bin"),
    ("APPLICATION_JSON", "application/json", "json"),
    ("APPLICATION_JSON_LD", "application/ld+json", "jsonld"),
    ("APPLICATION_YAML", "application/yaml", "yaml"),
    ("TEXT_LUA", "text/x-lua", "lua"),
    ("APPLICATION_LUA_BYTECODE", "application/x-lua-bytecode", "luac"),
    ("APPLICATION_PDF", "application/pdf", "pdf"),
    ("APPLICATION_ZIP", "application/zip", "zip"),
    ("APPLICATION_APPLE_INSTALLER_PACKAGE", "application/vnd.apple.installer+xml", "mpkg"),
    (
        "APPLICATION_OPEN_DOCUMENT_PRESENTATION",
        "application/vnd.oasis.opendocument.presentation",
        "odp",
    ),
    (
        "APPLICATION_OPEN_DOCUMENT_SPREADSHEET",
        "application/vnd.oasis.opendocument.spreadsheet",
        "ods",
    ),
    ("APPLICATION_OPEN_DOCUMENT_TEXT", "application/vnd.oasis.opendocument.text", "odt"),
    ("APPLICATION_OGG", "application/ogg", "ogx"),
    ("APPLICATION_PHP", "application/x-httpd-php", "php"),
    ("APPLICATION_MICROSOFT_POWERPOINT", "application/vnd.ms-powerpoint", "ppt"),
    (
        "APPLICATION_MICROSOFT_POWERPOINT_XML",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "pptx",
    ),
    ("APPLICATION_RAR", "application/vnd.rar", "rar"),
    ("APPLICATION_RICH_TEXT", "application/rtf", "rtf"),
    ("APPLICATION_BOURNE_SHELL", "application/x-sh", "sh"),
    ("APPLICATION_TAPE_ARCHIVE", "application/x-tar", "tar"),
    ("APPLICATION_MICROSOFT_VISIO", "application/vnd.visio", "vsd"),
    ("APPLICATION_XHTML", "application/xhtml+xml", "xhtml"),
    ("APPLICATION_MICROSOFT_EXCEL", "application/vnd.ms-excel", "xls"),
    (
        "APPLICATION_MICROSOFT_EXCEL_XML",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "xlsx",
    ),
    ("APPLICATION_XML", "application/xml", "xml"),
    ("APPLICATION_XUL", "application/vnd.mozilla.xul+xml", "xul"),
    ("APPLICATION_DICOM", "application/dicom", "dcm"),
    ("APPLICATION_7ZIP", "application/x-7z-compressed", "7z"),
    ("APPLICATION_XZ", "application/x-xz", "xz"),
    ("APPLICATION_WASM", "application/wasm", "wasm"),
    ("VIDEO_MP4", "video/mp4", "mp4"),
    ("VIDEO_OGG", "video/ogg", "ogv"),
    ("VIDEO_WEBM", "video/webm", "webm"),
    ("VIDEO_AVI", "video/x-msvideo", "avi"),
    ("VIDEO_MPEG", "video/mpeg", "mpeg"),
    ("VIDEO_MPEG_TRANSPORT_STREAM", "video/mp2t", "ts"),
    ("VIDEO_3GPP", "video/3gpp", "3gp"),
    ("VIDEO_3GPP2", "video/3gpp2", "3g2"),
    ("IMAGE_BMP", "image/bmp", "bmp"),
    ("IMAGE_GIF", "image/gif", "gif"),
    ("IMAGE_JPEG", "image/jpeg", "jpg"),
    ("IMAGE_AVIF", "image/avif", "avif"),
    ("IMAGE_PNG", "image/png", "png"),
    ("IMAGE_APNG", "image/apng", "apng"),
    ("IMAGE_WEBP", "image/webp", "webp"),
    ("IMAGE_SVG", "image/svg+xml", "svg"),
    ("IMAGE_ICON", "image/vnd.microsoft.icon", "ico"),
    ("IMAGE_TIFF", "image/tiff", "tif"),
    ("AUDIO_AAC", "audio/aac", "aac"),
    ("AUDIO_MIDI", "audio/midi", "mid"),
    ("AUDIO_MPEG", "audio/mpeg", "mp3"),
    ("AUDIO_OGG", "audio/ogg", "oga"),
    ("AUDIO_WAVEFORM", "audio/wav", "wav"),
    ("AUDIO_WEBM", "audio/webm", "weba"),
    ("AUDIO_3GPP", "audio/3gpp", "3gp"),
    ("AUDIO_3GPP2", "audio/3gpp2", "3g2"),
    ("TEXT_CSS", "text/css", "css"),
    ("TEXT_HTML", "text/html", "html"),
    ("TEXT_JAVASCRIPT", "text/javascript", "js"),
    ("TEXT_PLAIN", "text/plain", "txt"),
    ("TEXT_CSV", "text/csv", "csv"),
    ("TEXT_CALENDAR", "text/calendar", "cal"),
)

_DECLARATION_INDEX = {mime: index for index, (_, mime, _) in enumerate(_DECLARED)}
_EXTENSIONS = {mime: extension for _, mime, extension in _DECLARED}

# Types that ``MimeType.well_known`` lists after all the others.
_LISTED_LAST = ("application/yaml", "text/x-lua", "application/x-lua-bytecode", "application/x-xz")

_WELL_KNOWN_ORDER: tuple[str, ...] = (
    tuple(mime for _, mime, _ in _DECLARED if mime not in _LISTED_LAST) + _LISTED_LAST
)

# Where an extension is shared, the type declared first wins.
_FROM_EXTENSION = {extension: mime for _, mime, extension in reversed(_DECLARED)}
_FROM_EXTENSION.update(
    {"htm": "text/html", "mjs": "text/javascript", "jpeg": "image/jpeg", "yml": "application/yaml"}
)

_SHARED_EXTENSION_TYPES = frozenset({"video/3gpp", "video/3gpp2", "audio/3gpp", "audio/3gpp2"})

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _is_valid_custom(value: str) -> bool:
    if value.startswith("/") or value.endswith("/"):
        return False
    if value.count("/") != 1:
        return False
    return all(check_header_byte(byte) for byte in value.encode("utf-8") if byte != ord("/"))


@total_ordering
@dataclass(frozen=True, eq=True)
class MimeType:
    """A MIME type such as ``text/html``, well known or custom.

    Constructing one from an invalid string raises ValueError; ``parse``
    returns None instead.
    """

    value: str

    def __post_init__(self) -> None:
        if self.value not in _DECLARATION_INDEX and not _is_valid_custom(self.value):
            raise ValueError(f"invalid mime type: {self.value!r}")

    @classmethod
    def from_extension(cls, extension: str) -> "MimeType":
        """Map a file extension (without the dot) to a type; unknown ones give octet-stream."""
        mime = _FROM_EXTENSION.get(extension.translate(_ASCII_LOWER), "application/octet-stream")
        return cls(mime)

    def extension(self) -> str:
        """The most likely file extension, or ``bin`` where it is unclear."""
        return _EXTENSIONS.get(self.value, "bin")

    def mime_group(self) -> MimeGroup:
        """The group of this type."""
        group, _, _ = self.value.partition("/")
        return MimeGroup(group)

    def has_unique_known_extension(self) -> bool:
        """True if ``extension()`` is not shared with another well-known type."""
        if self.is_custom():
            return False
        return self.value not in _SHARED_EXTENSION_TYPES

    @classmethod
    def well_known(cls) -> tuple["MimeType", ...]:
        """All well-known MIME types."""
        return _WELL_KNOWN

    def is_well_known(self) -> bool:
        """True if this is a well-known type."""
        return self.value in _DECLARATION_INDEX

    def is_custom(self) -> bool:
        """True if this is a custom type."""
        return self.value not in _DECLARATION_INDEX

    def well_known_str(self) -> Optional[str]:
        """The type string if well known, else None."""
        return self.value if self.is_well_known() else None

    def as_str(self) -> str:
        """The type string."""
        return self.value

    @classmethod
    def parse_from_content_type_header(cls, value: str) -> Optional["MimeType"]:
        """Parse a Content-Type header value, ignoring parameters after ``;``."""
        return cls.parse(value.split(";", 1)[0])

    @classmethod
    def parse(cls, value: str) -> Optional["MimeType"]:
        """Parse a MIME type string; returns None if it is invalid."""
        if value in _DECLARATION_INDEX or _is_valid_custom(value):
            return cls(value)
        return None

    def _sort_key(self) -> tuple:
        index = _DECLARATION_INDEX.get(self.value)
        if index is not None:
            return (0, index)
        return (1, self.mime_group()._sort_key(), self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MimeType):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return self.value


for _name, _mime, _ in _DECLARED:
    setattr(MimeType, _name, MimeType(_mime))

_WELL_KNOWN: tuple[MimeType, ...] = tuple(MimeType(mime) for mime in _WELL_KNOWN_ORDER)