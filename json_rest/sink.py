"""Response sinks — where the writers put headers, status and body."""

from __future__ import annotations

import json
from http.server import BaseHTTPRequestHandler
from typing import Any, Protocol


class ResponseSink(Protocol):
    """Anything that can take a header, a status code and body bytes."""

    def set_header(self, key: str, value: str) -> None: ...

    def set_status(self, code: int) -> None: ...

    def write(self, data: bytes) -> int: ...


class ResponseRecorder:
    """In-memory sink that records what a writer produced.

    Usage::

        rec = ResponseRecorder()
        error(rec, NotFound(), 404)
        assert rec.status_code == 404
        assert rec.json()["error"]["code"] == 404

    The first status set wins, and writing a body before any status implies
    200. Headers set after the body has started are dropped.
    """

    def __init__(self):
        self.status_code = 200
        self.headers: dict[str, str] = {}
        self._body = bytearray()
        self._status_set = False
        self._wrote = False

    def set_header(self, key: str, value: str) -> None:
        if self._wrote:
            return
        self.headers[key] = value

    def set_status(self, code: int) -> None:
        if self._status_set:
            return
        self.status_code = code
        self._status_set = True

    def write(self, data: bytes) -> int:
        if not self._status_set:
            self.set_status(200)
        self._wrote = True
        self._body.extend(data)
        return len(data)

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name:
                return value
        return None

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    @property
    def text(self) -> str:
        return self._body.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self._body)


class HandlerSink:
    """Sink over a ``BaseHTTPRequestHandler``.

    http.server wants the status line before any header, so headers and
    status are buffered and sent together with ``Content-Length`` on
    ``write()``. The body must arrive in a single write.
    """

    def __init__(self, handler: BaseHTTPRequestHandler):
        self._handler = handler
        self._headers: dict[str, str] = {}
        self._status: int | None = None
        self.headers_sent = False

    def set_header(self, key: str, value: str) -> None:
        if self.headers_sent:
            return
        self._headers[key] = value

    def set_status(self, code: int) -> None:
        if self._status is None:
            self._status = code

    def write(self, data: bytes) -> int:
        if self.headers_sent:
            raise RuntimeError("response body already written")
        self._send_headers(len(data))
        self._handler.wfile.write(data)
        return len(data)

    def _send_headers(self, content_length: int) -> None:
        self._handler.send_response(self._status or 200)
        for key, value in self._headers.items():
            self._handler.send_header(key, value)
        self._handler.send_header("Content-Length", str(content_length))
        self._handler.end_headers()
        self.headers_sent = True
