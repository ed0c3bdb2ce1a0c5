"""Response decoding for Bitkub REST bodies.

Most endpoints wrap their payload as ``{"error": <int>, "result": <T>}``,
some add a ``pagination`` object, and a few (status, depth, chart history,
server time) return a bare array, object or scalar.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import APIError, MalformedResponseError

T = TypeVar("T")


@dataclass
class Pagination:
    """Page cursor returned alongside list results."""

    page: int = 0
    last: int = 0
    next: int = 0
    prev: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "Pagination":
        return cls(
            page=int(data.get("page", 0)),
            last=int(data.get("last", 0)),
            next=int(data.get("next", 0)),
            prev=int(data.get("prev", 0)),
        )

    @property
    def has_next(self) -> bool:
        return self.next > self.page


@dataclass
class Envelope(Generic[T]):
    """Decoded ``{error, result}`` wrapper."""

    error: int
    result: T
    pagination: Pagination | None = None


def _load_json(body: str | bytes) -> Any:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}", body=body) from e


def _parse(parser: Callable[[Any], T] | None, value: Any, body: str | bytes) -> T:
    if parser is None:
        return value
    try:
        return parser(value)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(
            f"Unexpected response shape: {e!r}",
            body=body if isinstance(body, str) else body.decode("utf-8", errors="replace"),
        ) from e


def decode_envelope(
    body: str | bytes,
    parser: Callable[[Any], T] | None = None,
) -> Envelope[T]:
    """
    Decode an enveloped response.

    Args:
        body: Raw response body
        parser: Optional callable that maps ``result`` into a model

    Returns:
        Envelope with the parsed result

    Raises:
        MalformedResponseError: Body is not JSON or has no ``error`` field
        APIError: ``error`` is non-zero (the raw result is attached)
    """
    data = _load_json(body)
    text = body if isinstance(body, str) else body.decode("utf-8", errors="replace")

    if not isinstance(data, dict) or "error" not in data:
        raise MalformedResponseError("Response has no error field", body=text)

    try:
        code = int(data["error"])
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Non-integer error field: {data['error']!r}", body=text) from e

    if code != 0:
        raise APIError(code, result=data.get("result"))

    pagination = None
    if isinstance(data.get("pagination"), dict):
        pagination = Pagination.from_api(data["pagination"])

    return Envelope(
        error=code,
        result=_parse(parser, data.get("result"), text),
        pagination=pagination,
    )


def decode_bare(
    body: str | bytes,
    parser: Callable[[Any], T] | None = None,
) -> T:
    """Decode a response that carries no envelope."""
    data = _load_json(body)
    return _parse(parser, data, body)


def peek_error_code(body: str | bytes) -> int | None:
    """Return the envelope error code if the body has one, else None."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
        return None
    if isinstance(data, dict) and isinstance(data.get("error"), int):
        return data["error"]
    return None
