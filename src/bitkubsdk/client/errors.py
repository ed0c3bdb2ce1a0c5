"""Exception hierarchy for the Bitkub client.

Three failure axes are kept apart so callers can tell whether to retry
(transport), fix the request (protocol) or handle a business condition
(application).
"""

from enum import Enum
from typing import Any

from .error_codes import ErrorCategory, ErrorCodeInfo, lookup_error


class ErrorKind(str, Enum):
    """Which axis a failure belongs to."""

    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    APPLICATION = "application"


class BitkubError(Exception):
    """Base exception for all client errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(BitkubError):
    """Connection, DNS, timeout or socket failure."""

    kind = ErrorKind.TRANSPORT


class ProtocolError(BitkubError):
    """The exchange answered, but not with something usable."""

    kind = ErrorKind.PROTOCOL

    def __init__(self, message: str, body: str = "", status: int | None = None):
        super().__init__(message)
        self.body = body
        self.status = status


class HTTPStatusError(ProtocolError):
    """Non-2xx HTTP status. The raw body is kept for diagnostics."""

    def __init__(
        self,
        status: int,
        body: str,
        api_error: "APIError | None" = None,
    ):
        detail = f": {api_error.message}" if api_error else ""
        super().__init__(f"HTTP {status}{detail}", body=body, status=status)
        self.api_error = api_error


class MalformedResponseError(ProtocolError):
    """Body is not JSON or does not have the expected shape."""


class APIError(BitkubError):
    """Non-zero ``error`` code in a response envelope."""

    kind = ErrorKind.APPLICATION

    def __init__(self, code: int, result: Any = None):
        self.info: ErrorCodeInfo = lookup_error(code)
        super().__init__(self.info.message)
        self.code = code
        self.result = result

    @property
    def category(self) -> ErrorCategory:
        return self.info.category

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
