import pytest

from wirehttp.http_version import (
    HttpVersion,
    RequestLineError,
    parse_raw_query,
    parse_status_line,
)


def test_as_str_names():
    assert HttpVersion.HTTP09.as_str() == "HTTP/0.9"
    assert HttpVersion.HTTP10.as_str() == "HTTP/1.0"
    assert HttpVersion.HTTP11.as_str() == "HTTP/1.1"


def test_net_str_of_http09_is_empty():
    assert HttpVersion.HTTP09.as_net_str() == ""
    assert HttpVersion.HTTP11.as_net_str() == "HTTP/1.1"


@pytest.mark.parametrize("version", list(HttpVersion))
def test_net_str_round_trip(version):
    assert HttpVersion.try_from_net_str(version.as_net_str()) is version


@pytest.mark.parametrize("version", list(HttpVersion))
def test_str_round_trip(version):
    assert HttpVersion.try_from_str(version.as_str()) is version
    assert str(version) == version.as_str()


def test_net_str_rejects_printable_http09():
    with pytest.raises(ValueError):
        HttpVersion.try_from_net_str("HTTP/0.9")


@pytest.mark.parametrize("value", ["HTTP/2.0", "http/1.1", ""])
def test_try_from_str_rejects_unknown(value):
    with pytest.raises(ValueError):
        HttpVersion.try_from_str(value)


def test_ordering():
    http09 = HttpVersion.try_from_str("HTTP/0.9")
    http10 = HttpVersion.try_from_net_str("HTTP/1.0")
    http11 = HttpVersion.try_from_net_str("HTTP/1.1")
    assert http09 < http10 < http11
    assert sorted([http11, http09]) == [HttpVersion.HTTP09, HttpVersion.HTTP11]


def test_status_line_valid():
    line = b"GET /index.html?a=b HTTP/1.1\r\n"
    assert parse_status_line(line) == "GET /index.html?a=b HTTP/1.1\r\n"


@pytest.mark.parametrize(
    "line",
    [b"GET /<x> HTTP/1.1\r\n", b"GET /\xc3\xa4 HTTP/1.1\r\n", b"GET /\t HTTP/1.1\r\n"],
)
def test_status_line_invalid(line):
    with pytest.raises(RequestLineError):
        parse_status_line(line)


def test_query_empty():
    assert parse_raw_query("") == []


def test_query_pairs_in_order():
    assert parse_raw_query("a=1&b=2&a=3") == [("a", "1"), ("b", "2"), ("a", "3")]


def test_query_empty_key_and_value():
    assert parse_raw_query("=v&k=") == [("", "v"), ("k", "")]


def test_query_special_chars_kept():
    assert parse_raw_query("path=/x/y.z&n=a+b") == [("path", "/x/y.z"), ("n", "a+b")]


@pytest.mark.parametrize("raw", ["a", "a=b=c", "a&b=c", "a=b&", "a=%20", "a=<", "a=\u00e4"])
def test_query_invalid(raw):
    with pytest.raises(RequestLineError):
        parse_raw_query(raw)


def test_request_line_error_is_value_error():
    with pytest.raises(ValueError):
        parse_raw_query("x")