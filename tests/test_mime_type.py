import pytest

from wirehttp.mime_group import MimeGroup
from wirehttp.mime_type import MimeType


def test_parse_well_known():
    assert MimeType.parse("text/html") == MimeType.TEXT_HTML
    assert MimeType.parse("image/svg+xml") == MimeType.IMAGE_SVG
    assert MimeType.parse("text/x-lua") == MimeType.TEXT_LUA


def test_well_known_round_trip_through_parse():
    for mime in MimeType.well_known():
        assert MimeType.parse(mime.as_str()) == mime
        assert mime.well_known_str() == mime.as_str()
        assert mime.is_well_known()
        assert not mime.is_custom()


def test_well_known_is_unique_and_complete():
    known = MimeType.well_known()
    assert len(set(known)) == len(known)
    assert MimeType.APPLICATION_XZ in known
    assert known[0] == MimeType.FONT_TTF
    assert known[-1] == MimeType.APPLICATION_XZ


def test_unique_extension_round_trip():
    for mime in MimeType.well_known():
        if mime.has_unique_known_extension():
            assert MimeType.from_extension(mime.extension()) == mime


def test_shared_extensions():
    assert not MimeType.AUDIO_3GPP.has_unique_known_extension()
    assert not MimeType.VIDEO_3GPP2.has_unique_known_extension()
    assert MimeType.AUDIO_3GPP.extension() == MimeType.VIDEO_3GPP.extension()
    assert MimeType.from_extension("3gp") == MimeType.VIDEO_3GPP
    assert MimeType.from_extension("3g2") == MimeType.VIDEO_3GPP2


@pytest.mark.parametrize(
    "extension, expected",
    [
        ("htm", "text/html"),
        ("HTML", "text/html"),
        ("mjs", "text/javascript"),
        ("JPEG", "image/jpeg"),
        ("yml", "application/yaml"),
        ("luac", "application/x-lua-bytecode"),
        ("unknownext", "application/octet-stream"),
        ("", "application/octet-stream"),
    ],
)
def test_from_extension(extension, expected):
    assert MimeType.from_extension(extension).as_str() == expected


def test_from_extension_only_lowercases_ascii():
    # U+212A KELVIN SIGN lowercases to "k" under full Unicode rules.
    assert MimeType.from_extension("mp\u212ag") == MimeType.APPLICATION_OCTET_STREAM
    assert MimeType.from_extension("MPKG") == MimeType.APPLICATION_APPLE_INSTALLER_PACKAGE


def test_extension_values():
    assert MimeType.IMAGE_JPEG.extension() == "jpg"
    assert MimeType.APPLICATION_OCTET_STREAM.extension() == "bin"
    assert MimeType.IMAGE_TIFF.extension() == "tif"


def test_mime_group():
    assert MimeType.TEXT_LUA.mime_group() == MimeGroup.TEXT
    assert MimeType.VIDEO_MP4.mime_group() == MimeGroup.VIDEO
    assert MimeType.FONT_WOFF2.mime_group() == MimeGroup.FONT
    for mime in MimeType.well_known():
        assert mime.mime_group().is_well_known()
        assert mime.as_str().startswith(mime.mime_group().as_str() + "/")


def test_parse_custom():
    mime = MimeType.parse("text/x-foo")
    assert mime is not None and mime.as_str() == "text/x-foo"
    assert mime.is_custom()
    assert mime.well_known_str() is None
    assert mime.extension() == "bin"
    assert not mime.has_unique_known_extension()
    assert mime.mime_group() == MimeGroup.TEXT


def test_parse_custom_group():
    mime = MimeType.parse("chemical/x-pdb")
    assert mime is not None
    assert mime.mime_group() == MimeGroup("chemical")
    assert mime.mime_group().is_custom()


@pytest.mark.parametrize(
    "value",
    ["", "noslash", "/html", "text/", "a/b/c", "Text/html", "text/*", "*/*", "text/ht<ml", "text/h\u00e9", "te\x01t/a"],
)
def test_parse_invalid(value):
    assert MimeType.parse(value) is None
    with pytest.raises(ValueError):
        MimeType(value)


def test_parse_from_content_type_header():
    assert MimeType.parse_from_content_type_header("text/html; charset=utf-8") == MimeType.TEXT_HTML
    assert MimeType.parse_from_content_type_header("application/json") == MimeType.APPLICATION_JSON
    assert MimeType.parse_from_content_type_header("bad;charset=utf-8") is None


def test_str():
    assert str(MimeType.parse("application/json")) == "application/json"
    assert str(MimeType.from_extension("css")) == "text/css"


def test_ordering_well_known_before_custom():
    custom = MimeType("aaa/bbb")
    assert MimeType.TEXT_CALENDAR < custom
    assert MimeType.FONT_TTF < MimeType.TEXT_HTML
    assert sorted([MimeType.TEXT_HTML, MimeType.FONT_TTF]) == [MimeType.FONT_TTF, MimeType.TEXT_HTML]


def test_ordering_custom_by_group_then_value():
    text_custom = MimeType("text/x-foo")
    font_custom = MimeType("font/x-foo")
    other_custom = MimeType("aaa/x-foo")
    assert sorted([other_custom, text_custom, font_custom]) == [font_custom, text_custom, other_custom]


def test_hashable():
    assert {MimeType("text/html"), MimeType.TEXT_HTML} == {MimeType.TEXT_HTML}