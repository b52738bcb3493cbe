"""Building of HTTP responses."""

from __future__ import annotations

_REASONS = {
    200: "OK",
    404: "Not Found",
    500: "Internal Server Error",
}


def reason_phrase(status: int) -> str:
    """Return the reason phrase the server uses for ``status``."""
    return _REASONS.get(status, "Unknown")


def build_response(status: int, body: str | bytes) -> bytes:
    """Return the full response for ``status`` with ``body`` as its payload."""
    payload = body.encode("utf-8") if isinstance(body, str) else bytes(body)
    content_type = "text/html" if b"<html" in payload else "text/plain"
    head = (
        f"HTTP/1.1 {status} {reason_phrase(status)}\r\n"
        f"Content-Length: {len(payload)}\r\n"
        f"Content-Type: {content_type}\r\n\r\n"
    )
    return head.encode("ascii") + payload