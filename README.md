# squirrel

A small HTTP server. It handles `GET` requests with handlers that you register
for exact paths. It can also serve files from a static directory. Each
connection is handled on its own thread.

## Installing

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Running from the command line

```
squirrel
```

This serves the `public` directory on port 8080. A request for `/` serves
`index.html`. Press Ctrl+C to stop the server. The options are:

- `--port PORT`: the port to listen on. The default is 8080.
- `--static-dir DIR`: the directory to serve files from. The default is `public`.

Run `squirrel --help` to see these options. The server logs its progress to
standard output: when it starts listening, when it accepts a connection and
when it stops.

## Using it as a library

```python
from squirrel.server import Server

def hello(request, response):
    name = request.query_params.get("name", "world")
    response.set_header("Content-Type", "text/plain")
    response.send(f"hello, {name}")

with Server(8080) as server:
    server.get("/hello", hello)
    server.set_static_dir("public")
    input("press enter to stop\n")
```

`Server(port)` binds to all interfaces when `start()` is called. Using the
server in a `with` block calls `start()` and `stop()` for you. If you pass port
`0`, the system chooses a free port, and `server.port` holds that port once the
server has started. `start()` raises `OSError` if the socket cannot be bound. It
raises `RuntimeError` if the server is already running. `server.running` tells
you whether the server is accepting connections.

A handler is called with an `HttpRequest` and an `HttpResponse`:

- `HttpRequest` has `method`, `path`, `http_version`, `headers`, `body` and
  `query_params`. The path does not include the query string. Query parameters
  are URL-decoded: `%XX` escapes are decoded and `+` becomes a space.
  Parameters without an `=` are ignored.
- `HttpResponse` starts as `200 OK` with `Content-Type: text/html`. Use
  `set_status(code, message)`, `set_header(key, value)`, `send(content)` or
  `send_file(file_path)`:
  - `send` accepts `str`, which is encoded as UTF-8, or `bytes`, and sets
    `Content-Length`.
  - `send_file` sets the content type from the file extension and falls back to
    `application/octet-stream`. If the file cannot be opened, it gives
    `404 not found`.

The server looks up a request in this order:

1. A registered handler for the exact path.
2. A file in the static directory.
3. A `404 not found` response.

Methods other than `GET` get `405 method not allowed` with `Allow: GET`.

`Server.process_request(request)` returns the `HttpResponse` for a parsed
request without any network traffic. It is useful for testing your handlers.

The module `squirrel.http` provides these helpers, which you can also use on
their own:

- `parse_request(text)`
- `url_decode(text)`
- `trim(text)`
- `content_type_for(file_path)`
- `HttpResponse.to_bytes()`, which writes the response as it is sent. Headers
  are in sorted order.

## Limitations

- The server reads a single chunk of at most 4095 bytes from each connection.
  It answers one request and then closes the connection. Larger requests are
  truncated, and keep-alive is not supported.
- It handles only plain HTTP. TLS is not supported.
- Routes match exact paths only. There are no patterns and no route parameters.
- Only `GET` is routed.