"""Quality values and ``Accept`` header parsing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Optional, Union

from wirehttp.mime_group import MimeGroup
from wirehttp.mime_type import MimeType


def _parse_digits(text: str) -> Optional[int]:
    """Parse an unsigned decimal, allowing one leading ``+``."""
    if text.startswith("+"):
        text = text[1:]
    if not text or not (text.isascii() and text.isdigit()):
        return None
    return int(text)


@dataclass(frozen=True, order=True)
class QValue:
    """A quality value from 0 to 1 with up to three decimals, stored as 0..1000."""

    value: int = 1000

    MAX: ClassVar["QValue"]
    MIN: ClassVar["QValue"]

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or not 0 <= self.value <= 1000:
            raise ValueError(f"qvalue out of range: {self.value!r}")

    @classmethod
    def parse(cls, qvalue: str) -> Optional["QValue"]:
        """Parse the header form (without ``q=``); None if invalid or out of range."""
        length = len(qvalue.encode("utf-8"))
        if length == 1:
            if qvalue == "1":
                return cls(1000)
            if qvalue == "0":
                return cls(0)
            return None
        scales = {3: ("1.0", 100), 4: ("1.00", 10), 5: ("1.000", 1)}
        if length not in scales:
            return None
        one, scale = scales[length]
        if not qvalue.startswith("0."):
            return cls(1000) if qvalue == one else None
        digits = _parse_digits(qvalue[2:])
        if digits is None:
            return None
        return cls(digits * scale)

    def as_str(self) -> str:
        """The header form, without the ``q=`` prefix."""
        if self.value == 1000:
            return "1.0"
        fraction = f"{self.value:03d}".rstrip("0") or "0"
        return f"0.{fraction}"

    def as_u16(self) -> int:
        """The value as an integer from 0 to 1000."""
        return self.value

    @classmethod
    def from_clamped(cls, qvalue: int) -> "QValue":
        """Build a QValue, clamping anything above 1000 to 1000."""
        if qvalue < 0:
            raise ValueError(f"qvalue must not be negative: {qvalue!r}")
        return cls(min(qvalue, 1000))

    def __str__(self) -> str:
        return self.as_str()


QValue.MAX = QValue(1000)
QValue.MIN = QValue(0)


class AcceptKind(enum.Enum):
    """The three shapes an accepted MIME type can take."""

    WILDCARD = "wildcard"
    GROUP_WILDCARD = "group_wildcard"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class AcceptMimeType:
    """A MIME type that may contain ``*``: ``*/*``, ``group/*`` or a specific type."""

    kind: AcceptKind = AcceptKind.WILDCARD
    target: Union[MimeGroup, MimeType, None] = None

    @classmethod
    def wildcard(cls) -> "AcceptMimeType":
        """``*/*``."""
        return cls(AcceptKind.WILDCARD, None)

    @classmethod
    def group_wildcard(cls, group: MimeGroup) -> "AcceptMimeType":
        """``group/*``."""
        return cls(AcceptKind.GROUP_WILDCARD, group)

    @classmethod
    def specific(cls, mime: MimeType) -> "AcceptMimeType":
        """A specific type such as ``text/html``."""
        return cls(AcceptKind.SPECIFIC, mime)

    @classmethod
    def parse(cls, value: str) -> Optional["AcceptMimeType"]:
        """Parse an accepted type, ignoring anything after ``;``."""
        return _parse_accept_type(value.split(";", 1)[0])

    def permits_specific(self, mime_type: MimeType) -> bool:
        """True if this permits the given MIME type."""
        if self.kind is AcceptKind.GROUP_WILDCARD:
            return self.target == mime_type.mime_group()
        if self.kind is AcceptKind.SPECIFIC:
            return self.target == mime_type
        return True

    def permits_group(self, mime_group: MimeGroup) -> bool:
        """True if this permits every type of the given group."""
        if self.kind is AcceptKind.GROUP_WILDCARD:
            return self.target == mime_group
        return self.kind is AcceptKind.WILDCARD

    def permits(self, mime_type: "AcceptMimeType") -> bool:
        """True if this permits every type the other accepted type permits."""
        if mime_type.kind is AcceptKind.GROUP_WILDCARD:
            return self.permits_group(mime_type.target)
        if mime_type.kind is AcceptKind.SPECIFIC:
            return self.permits_specific(mime_type.target)
        return self.kind is AcceptKind.WILDCARD

    def __str__(self) -> str:
        if self.kind is AcceptKind.GROUP_WILDCARD:
            return f"{self.target.as_str()}/*"
        if self.kind is AcceptKind.SPECIFIC:
            return self.target.as_str()
        return "*/*"


def _parse_accept_type(mime: str) -> Optional[AcceptMimeType]:
    if mime == "*/*":
        return AcceptMimeType.wildcard()
    parsed = MimeType.parse(mime)
    if parsed is not None:
        return AcceptMimeType.specific(parsed)
    group = MimeGroup.parse(mime)
    if group is None or mime[len(group.as_str()):] != "/*":
        return None
    return AcceptMimeType.group_wildcard(group)


@dataclass(frozen=True)
class AcceptQualityMimeType:
    """One element of an ``Accept`` header: an accepted type with its quality.

    Elements order by quality, highest first.
    """

    value: AcceptMimeType = field(default_factory=AcceptMimeType.wildcard)
    q: QValue = field(default_factory=QValue)

    @classmethod
    def parse(cls, value: str) -> Optional[list["AcceptQualityMimeType"]]:
        """Parse an Accept header value, sorted by descending quality.

        Returns None if any element is invalid.
        """
        elements = []
        for raw in value.split(","):
            part = raw.strip()
            mime, sep, rawq = part.partition(";")
            q = QValue()
            if sep:
                if not rawq.startswith("q="):
                    return None
                parsed_q = QValue.parse(rawq[2:])
                if parsed_q is None:
                    return None
                q = parsed_q
            accept = _parse_accept_type(mime)
            if accept is None:
                return None
            elements.append(cls(accept, q))
        elements.sort(key=lambda element: -element.q.value)
        return elements

    @classmethod
    def elements_to_header_value(cls, elements: Iterable["AcceptQualityMimeType"]) -> str:
        """Serialize elements into a header value that ``parse`` accepts."""
        return ",".join(str(element) for element in elements)

    def is_wildcard(self) -> bool:
        """True for ``*/*``."""
        return self.value.kind is AcceptKind.WILDCARD

    def is_group_wildcard(self) -> bool:
        """True for ``group/*``."""
        return self.value.kind is AcceptKind.GROUP_WILDCARD

    def is_specific(self) -> bool:
        """True for a non-wildcard type."""
        return self.value.kind is AcceptKind.SPECIFIC

    def mime(self) -> Optional[MimeType]:
        """The specific type, or None for any wildcard."""
        return self.value.target if self.is_specific() else None

    def group(self) -> Optional[MimeGroup]:
        """The group, or None for ``*/*``."""
        if self.is_specific():
            return self.value.target.mime_group()
        if self.is_group_wildcard():
            return self.value.target
        return None

    @classmethod
    def wildcard(cls, q: QValue) -> "AcceptQualityMimeType":
        """Equivalent to parsing ``*/*`` with quality ``q``."""
        return cls(AcceptMimeType.wildcard(), q)

    @classmethod
    def from_group(cls, group: MimeGroup, q: QValue) -> "AcceptQualityMimeType":
        """Equivalent to parsing ``group/*`` with quality ``q``."""
        return cls(AcceptMimeType.group_wildcard(group), q)

    @classmethod
    def from_mime(cls, mime: MimeType, q: QValue) -> "AcceptQualityMimeType":
        """Equivalent to parsing ``group/type`` with quality ``q``."""
        return cls(AcceptMimeType.specific(mime), q)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AcceptQualityMimeType):
            return NotImplemented
        return self.q > other.q

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, AcceptQualityMimeType):
            return NotImplemented
        return self.q < other.q

    def __le__(self, other: object) -> bool:
        if not isinstance(other, AcceptQualityMimeType):
            return NotImplemented
        return self.q >= other.q

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, AcceptQualityMimeType):
            return NotImplemented
        return self.q <= other.q

    def __str__(self) -> str:
        if self.q.as_u16() != 1000:
            return f"{self.value};q={self.q.as_str()}"
        return str(self.value)