# tinywebserv

A small single-threaded HTTP/1.1 server. It serves files from a web root,
checks each request's method against the routes in a configuration file,
and accepts plain uploads at `/upload`.

## Installing

```
pip install .
```

## Running

```
tinywebserv [CONFIG]
```

`CONFIG` defaults to `default.conf` in the current directory. The server
prints a summary of the parsed settings. It then listens on all interfaces
at the configured port and serves requests until it is interrupted. Uploads
go to the `uploads` directory under the current directory. That directory
must already exist.

If the server cannot start, it prints `Fatal error: ...` and exits with
status 1. This happens, for example, when the configuration file cannot be
opened or the port cannot be bound.

## Configuration

```
server {
    listen 8080;
    root ./www;

    location / {
        methods GET;
    }

    location /upload {
        methods GET POST;
    }
}
```

- `listen` sets the port. The default is 8080.
- `root` sets the directory that files are served from. The default is `./www`.
- `location <prefix>` opens a route. A `methods` line inside it lists the
  methods that the route allows.
- `}` closes a location block.
- Any other directive is ignored.
- A line without a `;` that is not `server`, `location` or `}` is logged as
  a warning. The line is still parsed.

## Request handling

- Each connection is read once, up to 1023 bytes. It is answered and then
  closed. Anything after a NUL byte is ignored.
- If the request line does not have a method, a path and a version, the
  reply has status 400.
- Route prefixes are checked in sorted order. The longest prefix of the path
  becomes the matched route. The method is allowed if any matching prefix
  visited along the way lists it. If no route matches, the method is not
  allowed. A method that is not allowed gets status 405.
- `POST /upload` writes everything after the blank line that ends the
  headers to `uploaded_file.txt` in the upload directory. The reply is 200
  on success and 500 if the file cannot be written.
- Any other request serves `<root><path>`. A request for `/` serves
  `<root>/index.html`. If the file is missing, the reply is `404 Not Found`.
- Responses carry `Content-Length` and `Content-Type` headers.
  `Content-Type` is `text/html` if the body contains `<html` and
  `text/plain` otherwise. Only 200, 404 and 500 have proper reason phrases.
  Other statuses, such as 400 and 405, are sent with the phrase `Unknown`.

## Using it from Python

```python
from tinywebserv.config import load_config
from tinywebserv.server import Server

config = load_config("default.conf")
with Server(config, "127.0.0.1", "uploads") as server:
    reply = server.handle_request(b"GET / HTTP/1.1\r\nHost: localhost\r\n\r\n")
```

- Creating a `Server` binds and listens on `config.port` at once. Use port 0
  to let the system pick a port. `server.address` holds the bound host and
  port.
- `handle_request` returns the whole response as bytes.
- `serve_forever` runs the network loop until `close()` is called.

The modules below can also be used on their own:

- `tinywebserv.config`: `parse_config`, `load_config`, `Config` (with
  `describe()`), `Route` and `ConfigError`.
- `tinywebserv.request`: `parse_request`, `Request` and `BadRequest`.
- `tinywebserv.response`: `build_response` and `reason_phrase`.
- `tinywebserv.server`: `Server` and `match_route`.

## What it does not do

- There is no CGI support.
- There are no persistent connections.
- There is no request body handling beyond the single upload file.
- Only one server block is read. Its settings are the only ones used.
- Error pages and MIME types are not configurable.