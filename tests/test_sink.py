import io

import pytest

from json_rest import HandlerSink, ResponseRecorder


def test_recorder_defaults_to_200_on_write():
    rec = ResponseRecorder()
    rec.write(b"{}")
    assert rec.status_code == 200


def test_recorder_first_status_wins():
    rec = ResponseRecorder()
    rec.set_status(404)
    rec.set_status(200)
    assert rec.status_code == 404


def test_recorder_ignores_headers_after_write():
    rec = ResponseRecorder()
    rec.set_header("Content-Type", "application/json")
    rec.write(b"{}")
    rec.set_header("X-Late", "1")
    assert rec.header("x-late") is None
    assert rec.header("CONTENT-TYPE") == "application/json"


def test_recorder_accumulates_body():
    rec = ResponseRecorder()
    assert rec.write(b'{"a":') == 5
    rec.write(b"1}")
    assert rec.json() == {"a": 1}


# --- HandlerSink over a stand-in handler ---

class FakeHandler:
    def __init__(self):
        self.wfile = io.BytesIO()
        self.sent = []

    def send_response(self, code):
        self.sent.append(("status", code))

    def send_header(self, key, value):
        self.sent.append((key, value))

    def end_headers(self):
        self.sent.append(("end",))


def test_handler_sink_sends_headers_with_content_length():
    handler = FakeHandler()
    sink = HandlerSink(handler)
    sink.set_header("Content-Type", "application/json")
    sink.set_status(404)
    assert sink.write(b'"not found"') == 11
    assert handler.sent == [
        ("status", 404),
        ("Content-Type", "application/json"),
        ("Content-Length", "11"),
        ("end",),
    ]
    assert handler.wfile.getvalue() == b'"not found"'
    assert sink.headers_sent


def test_handler_sink_rejects_second_write():
    handler = FakeHandler()
    sink = HandlerSink(handler)
    sink.write(b"{}")
    with pytest.raises(RuntimeError):
        sink.write(b"{}")
    assert handler.wfile.getvalue() == b"{}"
