import pytest

from squirrel.http import (
    HttpRequest,
    HttpResponse,
    content_type_for,
    parse_request,
    trim,
    url_decode,
)


def test_trim_strips_both_ends():
    assert trim("  hi there \r\n") == "hi there"


def test_trim_keeps_all_whitespace_string():
    assert trim(" \t \r") == " \t \r"
    assert trim("") == ""


def test_url_decode_escapes_and_plus():
    assert url_decode("hello%20world+again") == "hello world again"


def test_url_decode_incomplete_escape_kept():
    assert url_decode("100%") == "100%"
    assert url_decode("%4") == "%4"


def test_url_decode_multibyte():
    assert url_decode("caf%C3%A9") == "café"


def test_url_decode_invalid_escape_raises():
    with pytest.raises(ValueError):
        url_decode("%zz")


def test_parse_request_full():
    raw = (
        "GET /search?q=red+fox&page=2 HTTP/1.1\r\n"
        "Host: localhost\r\n"
        "Accept:  text/html \r\n"
        "\r\n"
    )
    request = parse_request(raw)
    assert request.method == "GET"
    assert request.path == "/search"
    assert request.http_version == "HTTP/1.1"
    assert request.query_params == {"q": "red fox", "page": "2"}
    assert request.headers == {"Host": "localhost", "Accept": "text/html"}
    assert request.body == ""


def test_parse_request_empty_text():
    assert parse_request("") == HttpRequest()


def test_parse_request_body_after_blank_line():
    raw = "POST /submit HTTP/1.1\r\nContent-Type: text/plain\r\n\r\n  line one\r\nline two\n"
    request = parse_request(raw)
    assert request.headers == {"Content-Type": "text/plain"}
    assert request.body == "line one\r\nline two"


def test_parse_request_query_params_without_value_ignored():
    request = parse_request("GET /a?flag&x=1&x=2&&y= HTTP/1.1\r\n\r\n")
    assert request.path == "/a"
    assert request.query_params == {"x": "2", "y": ""}


def test_parse_request_lines_without_colon_skipped():
    request = parse_request("GET / HTTP/1.1\r\nnot a header\r\nX-Key: v:w\r\n\r\n")
    assert request.headers == {"X-Key": "v:w"}


@pytest.mark.parametrize(
    "path, expected",
    [
        ("index.html", "text/html"),
        ("page.htm", "text/html"),
        ("style.css", "text/css"),
        ("app.js", "application/javascript"),
        ("data.json", "application/json"),
        ("photo.jpeg", "image/jpeg"),
        ("logo.png", "image/png"),
        ("icon.svg", "image/svg+xml"),
        ("favicon.ico", "image/x-icon"),
        ("doc.pdf", "application/pdf"),
        ("README", "application/octet-stream"),
        ("IMAGE.PNG", "application/octet-stream"),
    ],
)
def test_content_type_for(path, expected):
    assert content_type_for(path) == expected


def test_response_defaults():
    response = HttpResponse()
    assert response.status_code == 200
    assert response.status_message == "OK"
    assert response.headers == {"Content-Type": "text/html"}
    assert response.body == b""


def test_send_sets_content_length():
    response = HttpResponse()
    response.send("héllo")
    assert response.body == "héllo".encode("utf-8")
    assert response.headers["Content-Length"] == str(len(response.body))


def test_to_bytes_wire_format():
    response = HttpResponse()
    response.send("hi")
    assert response.to_bytes() == (
        b"HTTP/1.1 200 OK\r\nContent-Length: 2\r\nContent-Type: text/html\r\n\r\nhi"
    )


def test_to_bytes_headers_sorted_and_status():
    response = HttpResponse()
    response.set_status(405, "method not allowed")
    response.set_header("Zeta", "1")
    response.set_header("Allow", "GET")
    wire = response.to_bytes()
    assert wire.startswith(b"HTTP/1.1 405 method not allowed\r\n")
    assert wire.index(b"Allow: GET") < wire.index(b"Content-Type") < wire.index(b"Zeta: 1")


def test_send_file_reads_content(tmp_path):
    data = bytes(range(256))
    target = tmp_path / "image.png"
    target.write_bytes(data)
    response = HttpResponse()
    response.send_file(target)
    assert response.body == data
    assert response.headers["Content-Type"] == "image/png"
    assert response.headers["Content-Length"] == str(len(data))
    assert response.status_code == 200


def test_send_file_missing_is_404(tmp_path):
    response = HttpResponse()
    response.send_file(tmp_path / "missing.txt")
    assert response.status_code == 404
    assert response.status_message == "not found"
    assert response.body == b"<h1>404 not found</h1>"