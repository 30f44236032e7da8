"""
One request per connection.

A connection is read once, its request target classified, and a complete
response written before the socket is closed:

    /                -> 302 Found, Location: /intercept
    readable file    -> 200 OK with the file body
    anything else    -> 404 Not Found

Request method and headers are ignored. I/O failures on the connection are
logged and the connection dropped; nothing raised here reaches the accept loop.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .mime import guess_type
from .paths import resolve_path

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = b"404 Not Found"

# Unicode whitespace except the \x1c-\x1f information separators.
TOKEN_SEPARATOR = re.compile(r"[^\S\x1c-\x1f]+")

REASONS = {
    200: "OK",
    302: "Found",
    404: "Not Found",
}


@dataclass
class Response:
    status: int
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    @property
    def reason(self):
        return REASONS[self.status]

    def header(self, name) -> Optional[str]:
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None

    def to_bytes(self) -> bytes:
        lines = [f"HTTP/1.1 {self.status} {self.reason}"]
        lines += [f"{key}: {value}" for key, value in self.headers]
        head = "\r\n".join(lines) + "\r\n\r\n"
        return head.encode("latin-1") + self.body


def redirect(location):
    return Response(302, [
        ("Location", location),
        ("Content-Length", "0"),
        ("Connection", "close"),
    ])


def file_response(body, content_type):
    return Response(200, [
        ("Content-Length", str(len(body))),
        ("Content-Type", content_type),
        ("Connection", "close"),
    ], body)


def not_found():
    return Response(404, [
        ("Content-Length", str(len(NOT_FOUND_BODY))),
        ("Connection", "close"),
    ], NOT_FOUND_BODY)


def first_line(text) -> str:
    """Text before the first newline, minus any trailing carriage return."""
    return text.split("\n", 1)[0].rstrip("\r")


def parse_request_target(text) -> str:
    """Second token of the first line, or ``/`` when there is none."""
    parts = [part for part in TOKEN_SEPARATOR.split(first_line(text)) if part]
    if len(parts) < 2:
        return "/"
    return parts[1]


def build_response(target, config) -> Response:
    if target == "/":
        return redirect(config.fallback_route)

    path = resolve_path(config.root, target, config.fallback_name)
    try:
        body = path.read_bytes()
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return not_found()
    return file_response(body, guess_type(path))


def read_request(conn, size) -> Optional[bytes]:
    """Single read from ``conn``; None if it failed or the peer sent nothing."""
    try:
        data = conn.recv(size)
    except OSError as e:
        logger.debug("Read failed: %s", e)
        return None
    return data or None


def send_response(conn, response) -> bool:
    try:
        conn.sendall(response.to_bytes())
    except OSError as e:
        logger.debug("Write failed: %s", e)
        return False
    return True


def handle_connection(conn, config, peer=None) -> Optional[Response]:
    """
    Serve a single request on ``conn`` and close it.

    Returns the response that was sent (or attempted), or None when the
    connection was dropped without one.
    """
    with conn:
        if config.timeout is not None:
            conn.settimeout(config.timeout)

        data = read_request(conn, config.recv_size)
        if data is None:
            logger.debug("Dropped connection from %s", peer)
            return None

        text = data.decode("utf-8", errors="replace")
        request_line = first_line(text)
        target = parse_request_target(request_line)
        response = build_response(target, config)
        sent = send_response(conn, response)

        logger.info('%s "%s" %d %d%s', peer or "-", request_line,
                    response.status, len(response.body),
                    "" if sent else " (not delivered)")
        return response
