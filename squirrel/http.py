"""HTTP request parsing and response building."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Union

_WHITESPACE = " \t\n\r"

# A percent escape needs two characters after the '%'; a '%' without them is kept as is.
_URL_PIECE = re.compile(r"%(.{2})|(\+)|(%)|([^%+]+)", re.DOTALL)
# Leading hexadecimal number, with optional whitespace and sign, as strtol reads it.
_HEX_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9a-fA-F]+)")

CONTENT_TYPES = {
    "html": "text/html",
    "htm": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "pdf": "application/pdf",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

PathType = Union[str, "PathLike[str]"]


def trim(text: str) -> str:
    """Strip spaces, tabs, CR and LF from both ends.

    A string made only of such characters is returned unchanged.
    """
    stripped = text.strip(_WHITESPACE)
    return stripped if stripped else text


def _hex_byte(digits: str) -> int:
    match = _HEX_PREFIX.match(digits)
    if match is None:
        raise ValueError(f"invalid percent-encoding: %{digits}")
    return int(match.group(1), 16) & 0xFF


def url_decode(text: str) -> str:
    """Decode percent escapes and '+' signs in a URL component."""
    out = bytearray()
    for match in _URL_PIECE.finditer(text):
        escape, plus, lone, literal = match.groups()
        if escape is not None:
            out.append(_hex_byte(escape))
        elif plus is not None:
            out += b" "
        elif lone is not None:
            out += b"%"
        else:
            out += literal.encode("utf-8")
    return out.decode("utf-8", errors="replace")


@dataclass
class HttpRequest:
    """A parsed HTTP request."""

    method: str = ""
    path: str = ""
    http_version: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    query_params: dict[str, str] = field(default_factory=dict)


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_request(text: str) -> HttpRequest:
    """Parse the raw text of an HTTP request."""
    request = HttpRequest()
    lines = iter(_lines(text))

    tokens = next(lines, "").split()
    request.method, request.path, request.http_version = (tokens + ["", "", ""])[:3]

    path, has_query, query = request.path.partition("?")
    if has_query:
        request.path = path
        for param in query.split("&"):
            key, has_value, value = param.partition("=")
            if has_value:
                request.query_params[url_decode(key)] = url_decode(value)

    for line in lines:
        if line == "\r":
            break
        key, has_colon, value = line.partition(":")
        if has_colon:
            request.headers[trim(key)] = trim(value)

    request.body = trim("".join(line + "\n" for line in lines))
    return request


def content_type_for(file_path: PathType) -> str:
    """Return the content type for a file path, judged by its extension."""
    path = str(file_path)
    dot = path.rfind(".")
    if dot == -1:
        return DEFAULT_CONTENT_TYPE
    return CONTENT_TYPES.get(path[dot + 1 :], DEFAULT_CONTENT_TYPE)


def _default_headers() -> dict[str, str]:
    return {"Content-Type": "text/html"}


@dataclass
class HttpResponse:
    """An HTTP response under construction."""

    status_code: int = 200
    status_message: str = "OK"
    headers: dict[str, str] = field(default_factory=_default_headers)
    body: bytes = b""

    def set_status(self, code: int, message: str) -> None:
        self.status_code = code
        self.status_message = message

    def set_header(self, key: str, value: str) -> None:
        self.headers[key] = value

    def send(self, content: str | bytes) -> None:
        """Set the body and its Content-Length."""
        self.body = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        self.headers["Content-Length"] = str(len(self.body))

    def send_file(self, file_path: PathType) -> None:
        """Use a file's contents as the body, with a matching Content-Type."""
        try:
            handle = open(file_path, "rb")
        except OSError:
            self.set_status(404, "not found")
            self.send("<h1>404 not found</h1>")
            return
        with handle:
            try:
                data = handle.read()
            except OSError:
                self.set_status(500, "internal server error")
                self.send("<h1>500 internal server error</h1>")
                return
        self.body = data
        self.headers["Content-Length"] = str(len(data))
        self.headers["Content-Type"] = content_type_for(file_path)

    def to_bytes(self) -> bytes:
        """Serialise the response as it goes on the wire."""
        head = [f"HTTP/1.1 {self.status_code} {self.status_message}\r\n"]
        head.extend(f"{key}: {value}\r\n" for key, value in sorted(self.headers.items()))
        head.append("\r\n")
        return "".join(head).encode("utf-8") + self.body