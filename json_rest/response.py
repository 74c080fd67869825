"""Response writers — raw JSON content, marshalled values and errors.

All three writers set ``Content-Type: application/json`` and the status code
on the sink before the body is written, and return the number of body bytes
written. Failures raised by the sink itself propagate to the caller.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from json_rest.errors import ERR_IS_NIL, SerializationError
from json_rest.sink import ResponseSink

CONTENT_TYPE = "application/json"

# Status sent when error() is called without an error.
NIL_ERROR_STATUS = 500


def content(sink: ResponseSink, payload: bytes | None, status_code: int) -> int:
    """Write *payload* verbatim as a JSON response.

    The payload is not validated. ``None`` or ``b""`` gives an empty body.
    """
    sink.set_header("Content-Type", CONTENT_TYPE)
    sink.set_status(status_code)
    return sink.write(payload or b"")


def marshalled(sink: ResponseSink, value: Any, status_code: int) -> int:
    """Encode *value* as JSON and write it.

    Raises SerializationError before touching the sink if *value* has no
    JSON representation.
    """
    payload = to_json_bytes(value)
    return content(sink, payload, status_code)


def error(sink: ResponseSink, err: object | None, status_code: int) -> int:
    """Write *err* as a JSON response body.

    If ``str(err)`` is already a JSON document it is sent as is; otherwise
    the message is sent as a JSON string. A missing error is replaced by
    ``ERR_IS_NIL`` and always answered with status 500.
    """
    if err is None:
        err = ERR_IS_NIL
        status_code = NIL_ERROR_STATUS

    message = str(err)
    try:
        raw = message.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates, e.g. from surrogateescape-decoded file names
        raw = None
    if raw is not None and is_valid_json(raw):
        payload = raw
    else:
        payload = quote(message)

    return content(sink, payload, status_code)


def is_valid_json(data: bytes | str) -> bool:
    """Return True if *data* holds exactly one well-formed JSON value."""
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            return False
    try:
        json.loads(data, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return False
    return True


def quote(message: str) -> bytes:
    """Encode *message* as a JSON string literal.

    Characters UTF-8 cannot carry are written as \\u escapes.
    """
    try:
        return json.dumps(message, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(message).encode("ascii")


def to_json_bytes(value: Any) -> bytes:
    """Encode *value* to compact UTF-8 JSON bytes."""
    try:
        body = json.dumps(
            value,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
            default=_default,
        ).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"cannot encode {type(value).__name__} as JSON: {exc}") from exc
    return body


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _default(obj: Any) -> Any:
    """Fallback encoder for records that json does not know about."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _reject_constant(name: str) -> Any:
    # NaN / Infinity / -Infinity are accepted by json.loads but are not JSON.
    raise ValueError(f"{name} is not valid JSON")
