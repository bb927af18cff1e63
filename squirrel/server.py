"""A small threaded HTTP server with GET routes and static files."""

from __future__ import annotations

import logging
import os
import socket
import threading
from contextlib import suppress
from pathlib import Path
from typing import Callable, Optional

from squirrel.http import HttpRequest, HttpResponse, parse_request

logger = logging.getLogger("squirrel")

Handler = Callable[[HttpRequest, HttpResponse], None]

_BUFFER_SIZE = 4096
_BACKLOG = 10
_ACCEPT_POLL = 0.5


class Server:
    """Serves registered GET routes, falling back to a static directory."""

    def __init__(self, port: int) -> None:
        self.port = port
        self._socket: Optional[socket.socket] = None
        self._running = False
        self._accept_thread: Optional[threading.Thread] = None
        self._routes: dict[str, Handler] = {}
        self._static_dir = ""
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def static_dir(self) -> str:
        return self._static_dir

    def start(self) -> None:
        """Bind, listen and start accepting connections in the background."""
        if self._running:
            raise RuntimeError("server is already running")
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        except OSError:
            logger.warning("setsockopt(SO_REUSEADDR) failed")
        try:
            sock.bind(("", self.port))
            sock.listen(_BACKLOG)
        except OSError:
            sock.close()
            raise
        self.port = sock.getsockname()[1]
        sock.settimeout(_ACCEPT_POLL)
        self._socket = sock
        self._running = True
        logger.info("squirrel server listening on port %d...", self.port)
        self._accept_thread = threading.Thread(
            target=self._accept_connections, args=(sock,), daemon=True
        )
        self._accept_thread.start()

    def stop(self) -> None:
        """Close the listening socket and wait for the accept loop to end."""
        if not self._running:
            return
        self._running = False
        if self._socket is not None:
            with suppress(OSError):
                self._socket.shutdown(socket.SHUT_RDWR)
            self._socket.close()
            self._socket = None
        if self._accept_thread is not None:
            self._accept_thread.join()
            self._accept_thread = None
        logger.info("squirrel server stopped")

    def get(self, path: str, handler: Handler) -> None:
        """Register a handler for GET requests to an exact path."""
        with self._lock:
            self._routes[path] = handler

    def set_static_dir(self, directory: str | os.PathLike[str]) -> None:
        """Serve files from a directory when no route matches."""
        directory = str(directory)
        if directory and not directory.endswith(("/", "\\")):
            directory += os.sep
        self._static_dir = directory

    def process_request(self, request: HttpRequest) -> HttpResponse:
        """Build the response for a parsed request."""
        response = HttpResponse()
        if request.method != "GET":
            response.set_status(405, "method not allowed")
            response.set_header("Allow", "GET")
            response.send(
                "<h1>405 method not allowed</h1>"
                "<p>only get requests are supported by this server</p>"
            )
            return response

        with self._lock:
            handler = self._routes.get(request.path)
        if handler is not None:
            handler(request, response)
            return response

        if self._static_dir:
            relative = "index.html" if request.path == "/" else request.path[1:]
            file_path = self._static_dir + relative
            if Path(file_path).is_file():
                response.send_file(file_path)
                return response

        response.set_status(404, "not found")
        response.send(
            "<h1>404 not found</h1><p>the requested URL "
            + request.path
            + " was not found on this server</p>"
        )
        return response

    def __enter__(self) -> "Server":
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()

    def _accept_connections(self, sock: socket.socket) -> None:
        while self._running:
            try:
                conn, address = sock.accept()
            except socket.timeout:
                continue
            except OSError:
                if self._running:
                    logger.error("error accepting connection")
                    continue
                break
            logger.info("accepted connection from %s:%d", address[0], address[1])
            threading.Thread(target=self._handle_client, args=(conn,), daemon=True).start()

    def _handle_client(self, conn: socket.socket) -> None:
        with conn:
            conn.settimeout(None)
            try:
                data = conn.recv(_BUFFER_SIZE - 1)
            except OSError:
                logger.error("error reading from socket")
                return
            if not data:
                logger.info("client disconnected")
                return
            request = parse_request(data.decode("utf-8", errors="replace"))
            response = self.process_request(request)
            with suppress(OSError):
                conn.sendall(response.to_bytes())