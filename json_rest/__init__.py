"""json_rest — JSON-only HTTP response writers."""

from json_rest.errors import (
    ERR_IS_NIL,
    APIError,
    BadRequest,
    Forbidden,
    InternalServerError,
    MethodNotAllowed,
    NilError,
    NotFound,
    SerializationError,
    Unauthorized,
)
from json_rest.handler import JSONRequestHandler, make_server, serve
from json_rest.response import content, error, is_valid_json, marshalled, quote, to_json_bytes
from json_rest.sink import HandlerSink, ResponseRecorder, ResponseSink

__version__ = "1.0.0"

__all__ = [
    "ERR_IS_NIL",
    "APIError",
    "BadRequest",
    "Forbidden",
    "HandlerSink",
    "InternalServerError",
    "JSONRequestHandler",
    "MethodNotAllowed",
    "NilError",
    "NotFound",
    "ResponseRecorder",
    "ResponseSink",
    "SerializationError",
    "Unauthorized",
    "content",
    "error",
    "is_valid_json",
    "make_server",
    "marshalled",
    "quote",
    "serve",
    "to_json_bytes",
]
