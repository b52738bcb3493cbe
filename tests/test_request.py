import pytest

from tinywebserv.request import BadRequest, Request, parse_request


def test_parse_full_request():
    raw = "GET /index.html HTTP/1.1\r\nHost: localhost\r\nX-A:   b\r\n\r\n"
    request = parse_request(raw)
    assert request == Request(
        "GET", "/index.html", "HTTP/1.1", {"Host": "localhost", "X-A": "b"}
    )


def test_empty_request_rejected():
    with pytest.raises(BadRequest):
        parse_request("")


def test_incomplete_start_line_rejected():
    with pytest.raises(BadRequest):
        parse_request("GET /\r\n")


def test_headers_stop_at_blank_line():
    raw = "POST /upload HTTP/1.1\r\nHost: h\r\n\r\nkey: value\r\n"
    request = parse_request(raw)
    assert request.headers == {"Host": "h"}


def test_lines_without_colon_ignored():
    request = parse_request("GET / HTTP/1.1\r\nnocolon\r\nA: 1\r\n\r\n")
    assert request.headers == {"A": "1"}


def test_value_keeps_later_colons_and_last_duplicate_wins():
    raw = "GET / HTTP/1.1\r\nHost: example.com:80\r\nHost: other:81\r\n\r\n"
    assert parse_request(raw).headers == {"Host": "other:81"}


def test_start_line_only():
    request = parse_request("DELETE /x HTTP/1.0")
    assert (request.method, request.path, request.version) == ("DELETE", "/x", "HTTP/1.0")
    assert request.headers == {}