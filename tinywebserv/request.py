"""Parsing of the request line and headers of an HTTP request."""

from __future__ import annotations

from dataclasses import dataclass, field


class BadRequest(ValueError):
    """Raised when a request cannot be parsed."""


@dataclass
class Request:
    """The parsed start line and headers of a request."""

    method: str
    path: str
    version: str
    headers: dict[str, str] = field(default_factory=dict)


def _split_lines(raw: str) -> list[str]:
    lines = raw.split("\n")
    if raw.endswith("\n"):
        lines.pop()
    return lines if raw else []


def parse_request(raw: str) -> Request:
    """Parse ``raw`` into a Request, raising BadRequest if the start line is incomplete."""
    lines = _split_lines(raw)
    if not lines:
        raise BadRequest("empty request")

    parts = lines[0].split()
    if len(parts) < 3:
        raise BadRequest("malformed request line")
    method, path, version = parts[:3]

    headers: dict[str, str] = {}
    for line in lines[1:]:
        if line == "\r":
            break
        key, colon, value = line.partition(":")
        if not colon:
            continue
        value = value.lstrip(" ")
        if value.endswith("\r"):
            value = value[:-1]
        headers[key] = value

    return Request(method, path, version, headers)