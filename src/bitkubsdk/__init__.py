"""
Async client for the Bitkub exchange REST and WebSocket APIs.
"""

from .client import (
    APIError,
    BitkubError,
    RestClient,
    StreamManager,
    TransportError,
)
from .utils.config import Config

__version__ = "0.1.0"

__all__ = [
    "RestClient",
    "StreamManager",
    "APIError",
    "BitkubError",
    "TransportError",
    "Config",
]
