"""MIME groups: the part of a MIME type before the ``/``."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar, Optional

_FORBIDDEN_BYTES = frozenset(b"*():<>?@[]\\{}\x7f")

_WELL_KNOWN_NAMES = ("font", "application", "image", "video", "audio", "text")
_ORDER = {name: index for index, name in enumerate(_WELL_KNOWN_NAMES)}


def check_header_byte(char: int) -> bool:
    """Return True if ``char`` is a byte allowed in a MIME group or subtype."""
    if char <= 31:
        return False
    if char & 0x80:
        return False
    if ord("A") <= char <= ord("Z"):
        return False
    return char not in _FORBIDDEN_BYTES


@total_ordering
@dataclass(frozen=True, eq=True)
class MimeGroup:
    """A MIME group such as ``text`` or ``video``, well known or custom."""

    name: str

    FONT: ClassVar["MimeGroup"]
    APPLICATION: ClassVar["MimeGroup"]
    IMAGE: ClassVar["MimeGroup"]
    VIDEO: ClassVar["MimeGroup"]
    AUDIO: ClassVar["MimeGroup"]
    TEXT: ClassVar["MimeGroup"]

    @classmethod
    def parse(cls, value: str) -> Optional["MimeGroup"]:
        """Parse a group from ``video``, ``video/mp4`` or ``video/*``.

        Returns None if the group part holds a ``*`` or other invalid bytes.
        """
        group, _, _ = value.partition("/")
        if not all(check_header_byte(byte) for byte in group.encode("utf-8")):
            return None
        return cls(group)

    @classmethod
    def well_known(cls) -> tuple["MimeGroup", ...]:
        """All well-known MIME groups."""
        return _WELL_KNOWN

    def is_well_known(self) -> bool:
        """True if this is one of the well-known groups."""
        return self.name in _ORDER

    def is_custom(self) -> bool:
        """True if this is a custom group."""
        return self.name not in _ORDER

    def well_known_str(self) -> Optional[str]:
        """The group name if well known, else None."""
        return self.name if self.is_well_known() else None

    def as_str(self) -> str:
        """The group name; feeding it back to ``parse`` yields an equal group."""
        return self.name

    def _sort_key(self) -> tuple[int, str]:
        return (_ORDER.get(self.name, len(_ORDER)), self.name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MimeGroup):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return self.name


MimeGroup.FONT = MimeGroup("font")
MimeGroup.APPLICATION = MimeGroup("application")
MimeGroup.IMAGE = MimeGroup("image")
MimeGroup.VIDEO = MimeGroup("video")
MimeGroup.AUDIO = MimeGroup("audio")
MimeGroup.TEXT = MimeGroup("text")

_WELL_KNOWN = (
    MimeGroup.FONT,
    MimeGroup.APPLICATION,
    MimeGroup.IMAGE,
    MimeGroup.VIDEO,
    MimeGroup.AUDIO,
    MimeGroup.TEXT,
)