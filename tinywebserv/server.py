"""A single-threaded HTTP server multiplexing clients with a selector."""

from __future__ import annotations

import logging
import os
import selectors
import socket
import threading
from pathlib import Path
from typing import Mapping

from .config import Config, Route
from .request import BadRequest, parse_request
from .response import build_response

logger = logging.getLogger(__name__)

_POLL_TIMEOUT = 1.0
_RECV_SIZE = 1023
_BACKLOG = 10
_UPLOAD_NAME = "uploaded_file.txt"


def match_route(routes: Mapping[str, Route], path: str, method: str) -> tuple[str, bool]:
    """Return the longest route prefix of ``path`` and whether ``method`` was allowed.

    A method counts as allowed if any matching prefix visited in sorted order
    allows it.
    """
    matched = "/"
    allowed = False
    for prefix in sorted(routes):
        if path.startswith(prefix) and len(prefix) >= len(matched):
            matched = prefix
            if method in routes[prefix].methods:
                allowed = True
    return matched, allowed


class Server:
    """Serve files below the configured root and accept uploads."""

    def __init__(self, config: Config, host: str = "0.0.0.0", upload_dir: str | Path = "uploads"):
        self.config = config
        self.upload_dir = Path(upload_dir)
        self._selector = selectors.DefaultSelector()
        self._stop = threading.Event()
        self._idle = threading.Event()
        self._idle.set()
        self._closed = False

        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.setblocking(False)
            listener.bind((host, config.port))
            listener.listen(_BACKLOG)
        except OSError:
            listener.close()
            self._selector.close()
            raise
        self._listener = listener
        self.address = listener.getsockname()[:2]
        self._selector.register(listener, selectors.EVENT_READ)

    def handle_request(self, raw: bytes) -> bytes:
        """Return the response to one raw request."""
        raw = raw.split(b"\0", 1)[0]
        text = raw.decode("latin-1")

        try:
            request = parse_request(text)
        except BadRequest:
            return build_response(400, "Bad Request")

        routes = self.config.routes
        matched, allowed = match_route(routes, request.path, request.method)
        logger.info("Requested method: %s, path: %s", request.method, request.path)
        logger.info("Matched route: %s", matched)
        route = routes.get(matched)
        logger.info("Allowed methods: %s", " ".join(route.methods) if route else "")

        if not allowed:
            return build_response(405, "Method Not Allowed")

        if request.method == "POST" and request.path == "/upload":
            return self._store_upload(raw)

        filepath = self.config.root + ("/index.html" if request.path == "/" else request.path)
        if os.path.isfile(filepath):
            try:
                content = Path(filepath).read_bytes()
            except OSError:
                content = b""
            return build_response(200, content)
        return build_response(404, "Not Found")

    def _store_upload(self, raw: bytes) -> bytes:
        header_end = raw.find(b"\r\n\r\n")
        if header_end < 0:
            return build_response(400, "Bad POST request format.")
        try:
            (self.upload_dir / _UPLOAD_NAME).write_bytes(raw[header_end + 4:])
        except OSError:
            return build_response(500, "Failed to save file.")
        return build_response(200, "File uploaded successfully.")

    def serve_forever(self) -> None:
        """Accept and answer clients until close() is called."""
        if self._closed:
            raise RuntimeError("server is closed")
        self._idle.clear()
        try:
            while not self._stop.is_set():
                for key, _ in self._selector.select(timeout=_POLL_TIMEOUT):
                    if key.fileobj is self._listener:
                        self._accept()
                    else:
                        self._serve_client(key.fileobj)
        finally:
            self._idle.set()

    def _accept(self) -> None:
        try:
            conn, _ = self._listener.accept()
        except OSError:
            return
        conn.setblocking(False)
        self._selector.register(conn, selectors.EVENT_READ)
        logger.info("New client connected: %d", conn.fileno())

    def _serve_client(self, conn: socket.socket) -> None:
        try:
            data = conn.recv(_RECV_SIZE)
        except BlockingIOError:
            return
        except OSError:
            data = b""
        if data:
            response = self.handle_request(data)
            try:
                conn.setblocking(True)
                conn.sendall(response)
            except OSError:
                pass
        self._close_client(conn)

    def _close_client(self, conn: socket.socket) -> None:
        fd = conn.fileno()
        self._selector.unregister(conn)
        conn.close()
        logger.info("Closed connection: %d", fd)

    def close(self) -> None:
        """Stop serving and release every socket."""
        if self._closed:
            return
        self._stop.set()
        self._idle.wait(timeout=_POLL_TIMEOUT * 3)
        self._closed = True
        for key in list(self._selector.get_map().values()):
            if key.fileobj is not self._listener:
                key.fileobj.close()
        self._selector.close()
        self._listener.close()

    def __enter__(self) -> "Server":
        return self

    def __exit__(self, *args) -> None:
        self.close()