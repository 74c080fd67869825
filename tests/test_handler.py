import threading

import pytest
import requests

from json_rest import (
    ERR_IS_NIL,
    BadRequest,
    JSONRequestHandler,
    MethodNotAllowed,
    is_valid_json,
    make_server,
)

# --- Setup handler for testing ---

class Handler(JSONRequestHandler):

    def dispatch(self):
        if self.route_path == "/raw":
            return self.send_content(b'{"name": "cale"}')
        if self.route_path == "/value":
            return self.send_marshalled({"name": "Eder", "count": 0}, 201)
        if self.route_path == "/plain":
            return self.send_error_json(Exception("not found"), 404)
        if self.route_path == "/nil":
            return self.send_error_json(None, 404)
        if self.route_path == "/echo":
            if self.command != "POST":
                raise MethodNotAllowed(["POST"])
            body = self.read_body()
            if not body or not is_valid_json(body):
                raise BadRequest("Body must be a JSON document")
            return self.send_content(body)
        if self.route_path == "/crash":
            raise RuntimeError("secret internals")
        if self.route_path == "/silent":
            return None
        return super().dispatch()

# Background thread server on an ephemeral port
@pytest.fixture(scope="session")
def base_url():
    server = make_server(Handler, port=0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()

# --- Tests ---

def test_raw_content(base_url):
    res = requests.get(f"{base_url}/raw")
    assert res.status_code == 200
    assert res.headers["Content-Type"] == "application/json"
    assert res.content == b'{"name": "cale"}'

def test_marshalled_value(base_url):
    res = requests.get(f"{base_url}/value")
    assert res.status_code == 201
    assert res.json() == {"name": "Eder", "count": 0}

def test_plain_error(base_url):
    res = requests.get(f"{base_url}/plain")
    assert res.status_code == 404
    assert res.headers["Content-Type"] == "application/json"
    assert is_valid_json(res.content)
    assert "not found" in res.text

def test_nil_error_forces_500(base_url):
    res = requests.get(f"{base_url}/nil")
    assert res.status_code == 500
    assert str(ERR_IS_NIL) in res.text

def test_unknown_path_is_json_404(base_url):
    res = requests.get(f"{base_url}/nowhere")
    assert res.status_code == 404
    assert res.json()["success"] is False
    assert res.json()["error"]["code"] == 404

def test_method_not_allowed_sets_allow_header(base_url):
    res = requests.get(f"{base_url}/echo")
    assert res.status_code == 405
    assert res.headers["Allow"] == "POST"
    assert res.json()["error"]["code"] == 405

def test_echo_valid_body(base_url):
    res = requests.post(f"{base_url}/echo", json={"msg": "hello"})
    assert res.status_code == 200
    assert res.json() == {"msg": "hello"}

def test_echo_invalid_body(base_url):
    res = requests.post(f"{base_url}/echo", data="hello")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Body must be a JSON document"

def test_unexpected_failure_hides_internals(base_url):
    res = requests.get(f"{base_url}/crash")
    assert res.status_code == 500
    assert res.headers["Content-Type"] == "application/json"
    assert "secret internals" not in res.text
    assert res.json()["error"]["message"] == "Internal Server Error"

def test_handler_that_writes_nothing_gets_500(base_url):
    res = requests.get(f"{base_url}/silent")
    assert res.status_code == 500
    assert res.headers["Content-Type"] == "application/json"
    assert res.json()["error"]["code"] == 500
