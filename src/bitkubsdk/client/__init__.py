"""Client modules for REST and WebSocket communication."""

from .auth import sign
from .error_codes import ErrorCategory, ErrorCode, lookup_error
from .errors import (
    APIError,
    BitkubError,
    ErrorKind,
    HTTPStatusError,
    MalformedResponseError,
    ProtocolError,
    TransportError,
)
from .rest import RestClient
from .websocket import StreamManager, StreamMessage, StreamState, StreamSubscription

__all__ = [
    "RestClient",
    "StreamManager",
    "StreamMessage",
    "StreamState",
    "StreamSubscription",
    "sign",
    "ErrorCategory",
    "ErrorCode",
    "lookup_error",
    "APIError",
    "BitkubError",
    "ErrorKind",
    "HTTPStatusError",
    "MalformedResponseError",
    "ProtocolError",
    "TransportError",
]
