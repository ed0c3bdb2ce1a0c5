"""Authentication and signing utilities for the Bitkub API."""

import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import urlencode

from ..utils.config import Config

HttpMethod = Literal["GET", "POST"]


def sign(
    secret: str,
    timestamp: int | str,
    method: str,
    path: str,
    payload: str = "",
) -> str:
    """
    Sign a REST API request using HMAC-SHA256.

    Args:
        secret: API secret used as the HMAC key
        timestamp: Server time in milliseconds
        method: HTTP method (GET, POST)
        path: Request path with leading slash, no host, no query
        payload: "?" + encoded query for GET, exact JSON body for POST

    Returns:
        Lowercase hex digest (64 characters)
    """
    # Example: "1699381086593GET/api/v3/market/my-open-orders?sym=thb_btc"
    signature_data = str(timestamp) + method.upper() + path + payload

    return hmac.new(
        secret.encode("utf-8"),
        signature_data.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def encode_query(params: dict[str, Any] | None) -> str:
    """
    Encode query parameters with keys in sorted order.

    The returned string is used both for signing and on the wire, so it
    must never be rebuilt from the dict afterwards.
    """
    if not params:
        return ""
    items = sorted((k, v) for k, v in params.items() if v is not None)
    return urlencode(items)


def encode_body(payload: dict[str, Any] | None) -> str:
    """Serialize a POST body once, compactly, dropping None values."""
    if not payload:
        return ""
    return json.dumps(
        {k: v for k, v in payload.items() if v is not None},
        separators=(",", ":"),
    )


@dataclass(frozen=True)
class SignedRequest:
    """Everything that went into one signature."""

    timestamp: int
    method: HttpMethod
    path: str
    payload: str
    signature: str

    @classmethod
    def build(
        cls,
        secret: str,
        timestamp: int,
        method: HttpMethod,
        path: str,
        payload: str,
    ) -> "SignedRequest":
        return cls(
            timestamp=timestamp,
            method=method,
            path=path,
            payload=payload,
            signature=sign(secret, timestamp, method, path, payload),
        )

    def __repr__(self) -> str:
        return f"SignedRequest({self.method} {self.path}{self.payload if self.method == 'GET' else ''}, ts={self.timestamp})"


def get_auth_headers(api_key: str, signature: str, timestamp: int) -> dict[str, str]:
    """
    Get authentication headers for secured REST requests.

    Args:
        api_key: API key
        signature: HMAC-SHA256 signature
        timestamp: Server time in milliseconds

    Returns:
        Dictionary of headers
    """
    return {
        "X-BTK-APIKEY": api_key,
        "X-BTK-SIGN": signature,
        "X-BTK-TIMESTAMP": str(timestamp),
        "User-Agent": Config.USER_AGENT,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
