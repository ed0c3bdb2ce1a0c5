"""Configuration management."""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration for the Bitkub client."""

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # REST API URL
    REST_URL: str = os.getenv("BITKUB_REST_URL", "https://api.bitkub.com")

    # WebSocket URL (stream names are appended to this path)
    WS_URL: str = os.getenv("BITKUB_WS_URL", "wss://api.bitkub.com/websocket-api/")

    # Connection settings
    REST_TIMEOUT = float(os.getenv("BITKUB_REST_TIMEOUT", "10"))  # seconds
    WS_HEARTBEAT_INTERVAL = float(os.getenv("BITKUB_WS_HEARTBEAT", "30"))  # seconds
    WS_CONNECT_TIMEOUT = float(os.getenv("BITKUB_WS_CONNECT_TIMEOUT", "10"))  # seconds
    WS_CLOSE_TIMEOUT = 5.0  # seconds
    WS_QUEUE_SIZE = int(os.getenv("BITKUB_WS_QUEUE_SIZE", "1000"))  # frames buffered per subscription

    USER_AGENT = "bitkubsdk/0.1.0"

    @classmethod
    def get_rest_url(cls) -> str:
        """Get REST API base URL without a trailing slash."""
        return cls.REST_URL.rstrip("/")

    @classmethod
    def get_ws_url(cls) -> str:
        """Get WebSocket base URL with a trailing slash."""
        return cls.WS_URL if cls.WS_URL.endswith("/") else cls.WS_URL + "/"
