"""Timestamp utilities."""

import time


def get_timestamp_ms() -> int:
    """Get current local timestamp in milliseconds."""
    return int(time.time() * 1000)


def format_timestamp_ms(ms: int) -> str:
    """Format millisecond timestamp as human-readable string."""
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(ms / 1000))
