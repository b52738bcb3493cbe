import socket
import threading

import pytest

from tinywebserv.config import Config, Route
from tinywebserv.response import build_response
from tinywebserv.server import Server, match_route

ROUTES = {"/": Route(["GET"]), "/upload": Route(["POST"])}


@pytest.fixture
def site(tmp_path):
    www = tmp_path / "www"
    www.mkdir()
    (www / "index.html").write_text("<html>home</html>")
    (www / "page.txt").write_text("plain page")
    uploads = tmp_path / "uploads"
    uploads.mkdir()
    return tmp_path


@pytest.fixture
def server(site):
    config = Config(port=0, root=str(site / "www"), routes=dict(ROUTES))
    with Server(config, host="127.0.0.1", upload_dir=site / "uploads") as srv:
        yield srv


def test_match_route_longest_prefix():
    assert match_route(ROUTES, "/upload", "POST") == ("/upload", True)
    assert match_route(ROUTES, "/page.txt", "GET") == ("/", True)


def test_match_route_disallowed():
    assert match_route(ROUTES, "/page.txt", "DELETE") == ("/", False)


def test_match_route_keeps_allowance_from_shorter_prefix():
    assert match_route(ROUTES, "/upload", "GET") == ("/upload", True)


def test_match_route_no_routes():
    assert match_route({}, "/x", "GET") == ("/", False)


def test_get_index(server):
    response = server.handle_request(b"GET / HTTP/1.1\r\nHost: h\r\n\r\n")
    assert response == build_response(200, "<html>home</html>")


def test_get_file(server):
    response = server.handle_request(b"GET /page.txt HTTP/1.1\r\n\r\n")
    assert response == build_response(200, "plain page")


def test_missing_file(server):
    response = server.handle_request(b"GET /nothing HTTP/1.1\r\n\r\n")
    assert response == build_response(404, "Not Found")


def test_method_not_allowed(server):
    response = server.handle_request(b"DELETE /page.txt HTTP/1.1\r\n\r\n")
    assert response == build_response(405, "Method Not Allowed")


def test_bad_request(server):
    assert server.handle_request(b"GARBAGE\r\n\r\n") == build_response(400, "Bad Request")


def test_upload_saves_body(server, site):
    response = server.handle_request(b"POST /upload HTTP/1.1\r\nHost: h\r\n\r\nfile body")
    assert response == build_response(200, "File uploaded successfully.")
    assert (site / "uploads" / "uploaded_file.txt").read_bytes() == b"file body"


def test_upload_without_blank_line(server):
    response = server.handle_request(b"POST /upload HTTP/1.1\nHost: h\n")
    assert response == build_response(400, "Bad POST request format.")


def test_upload_to_missing_dir(site):
    config = Config(port=0, root=str(site / "www"), routes=dict(ROUTES))
    with Server(config, host="127.0.0.1", upload_dir=site / "absent") as srv:
        response = srv.handle_request(b"POST /upload HTTP/1.1\r\n\r\ndata")
    assert response == build_response(500, "Failed to save file.")


def test_serve_forever_answers_client(server):
    thread = threading.Thread(target=server.serve_forever)
    thread.start()
    try:
        with socket.create_connection(server.address, timeout=5) as client:
            client.sendall(b"GET /page.txt HTTP/1.1\r\nHost: h\r\n\r\n")
            chunks = []
            while True:
                chunk = client.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
    finally:
        server.close()
        thread.join(timeout=5)
    assert b"".join(chunks) == build_response(200, "plain page")
    assert not thread.is_alive()


def test_serve_after_close_raises(site):
    config = Config(port=0, root=str(site / "www"), routes=dict(ROUTES))
    srv = Server(config, host="127.0.0.1")
    srv.close()
    with pytest.raises(RuntimeError):
        srv.serve_forever()