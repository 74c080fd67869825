"""JSONRequestHandler — http.server handler that answers only in JSON.

Uses only the Python standard library (http.server + logging).
"""

from __future__ import annotations

import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import urlparse, unquote

from json_rest.errors import APIError, InternalServerError, NotFound
from json_rest.response import content, error, marshalled
from json_rest.sink import HandlerSink

logger = logging.getLogger(__name__)


class JSONRequestHandler(BaseHTTPRequestHandler):
    """Base handler: every verb goes through ``dispatch()``.

    Usage::

        class Handler(JSONRequestHandler):
            def dispatch(self):
                if self.route_path == "/ping":
                    return self.send_marshalled({"pong": True})
                raise NotFound()

        serve(Handler, port=8000)

    An APIError escaping ``dispatch()`` becomes its own JSON body and status.
    Anything else is logged and answered with a 500.
    """

    route_path: str
    query: str
    sink: HandlerSink

    def dispatch(self) -> Any:
        raise NotFound(f"No endpoint registered at '{self.route_path}'")

    # ── Writers bound to this request's sink ─────────────────────────

    def send_content(self, payload: bytes | None, status_code: int = 200) -> int:
        return content(self.sink, payload, status_code)

    def send_marshalled(self, value: Any, status_code: int = 200) -> int:
        return marshalled(self.sink, value, status_code)

    def send_error_json(self, err: object | None, status_code: int = 500) -> int:
        return error(self.sink, err, status_code)

    def read_body(self) -> bytes | None:
        content_length = int(self.headers.get("Content-Length", 0))
        return self.rfile.read(content_length) if content_length else None

    # --- HTTP verbs all go through _safe_dispatch ---
    def do_GET(self):       self._safe_dispatch()
    def do_POST(self):      self._safe_dispatch()
    def do_PUT(self):       self._safe_dispatch()
    def do_PATCH(self):     self._safe_dispatch()
    def do_DELETE(self):    self._safe_dispatch()

    def _safe_dispatch(self):
        parsed = urlparse(self.path)
        self.route_path = unquote(parsed.path).rstrip("/") or "/"
        self.query = parsed.query
        self.sink = HandlerSink(self)
        try:
            self.dispatch()
            if not self.sink.headers_sent:
                logger.error("%s %s returned without a response", self.command, self.route_path)
                error(self.sink, InternalServerError(), 500)
        except APIError as exc:
            if self.sink.headers_sent:
                raise
            if getattr(exc, "allowed", None):
                self.sink.set_header("Allow", ", ".join(exc.allowed))
            error(self.sink, exc, exc.status_code)
        except Exception:
            logger.exception("Unhandled error on %s %s", self.command, self.route_path)
            if self.sink.headers_sent:
                raise
            error(self.sink, InternalServerError(), 500)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(
    handler_cls: type[JSONRequestHandler],
    host: str = "127.0.0.1",
    port: int = 8000,
) -> ThreadingHTTPServer:
    """Bind a threading server for *handler_cls* without starting it."""
    return ThreadingHTTPServer((host, port), handler_cls)


def serve(
    handler_cls: type[JSONRequestHandler],
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the HTTP server (blocking)."""
    server = make_server(handler_cls, host, port)
    logger.info("Serving JSON on http://%s:%d", *server.server_address[:2])
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    finally:
        server.server_close()
