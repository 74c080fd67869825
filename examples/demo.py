#!/usr/bin/env python3
"""demo.py — runnable example for json_rest.

Start:
    python examples/demo.py

Test:
    curl -i http://127.0.0.1:8000/user
    curl -i http://127.0.0.1:8000/raw
    curl -i http://127.0.0.1:8000/missing
    curl -i http://127.0.0.1:8000/plain-error
    curl -i http://127.0.0.1:8000/no-error
    curl -i -X POST http://127.0.0.1:8000/echo -d '{"msg":"hello"}'
"""

import logging
import os
import sys
from dataclasses import dataclass

# Allow running from repo root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from json_rest import BadRequest, JSONRequestHandler, MethodNotAllowed, NotFound, is_valid_json, serve


@dataclass
class User:
    name: str
    admin: bool = False


class DemoHandler(JSONRequestHandler):

    def dispatch(self):
        path = self.route_path

        # ── Marshalled values ────────────────────────────────────────
        if path == "/user":
            return self.send_marshalled(User(name="Eder"))

        # ── Pre-encoded payload ──────────────────────────────────────
        if path == "/raw":
            return self.send_content(b'{"name": "cale"}')

        # ── Errors ───────────────────────────────────────────────────
        if path == "/plain-error":
            return self.send_error_json(LookupError("user 'eder' not found"), 404)
        if path == "/no-error":
            return self.send_error_json(None, 404)   # answered with 500

        if path == "/echo":
            if self.command != "POST":
                raise MethodNotAllowed(["POST"])
            body = self.read_body()
            if not body or not is_valid_json(body):
                raise BadRequest("Body must be a JSON document")
            return self.send_content(body)

        raise NotFound(f"No endpoint registered at '{path}'")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    serve(DemoHandler, host="127.0.0.1", port=8000)
