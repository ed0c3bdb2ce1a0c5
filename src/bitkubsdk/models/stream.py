"""Stream names and caller-side decoding of stream frames."""

import json
from typing import Any

from .market import WsTicker, WsTrade

TICKER_STREAM = "market.ticker.{}"
TRADE_STREAM = "market.trade.{}"


def ticker_stream(symbol: str) -> str:
    """Stream name for the ticker of one symbol, e.g. "market.ticker.thb_btc"."""
    return TICKER_STREAM.format(symbol.lower())


def trade_stream(symbol: str) -> str:
    """Stream name for the trades of one symbol, e.g. "market.trade.thb_btc"."""
    return TRADE_STREAM.format(symbol.lower())


def join_streams(stream_names: list[str] | tuple[str, ...]) -> str:
    """Join stream names into one subscription line."""
    names = [name.strip() for name in stream_names if name and name.strip()]
    if not names:
        raise ValueError("at least one stream name is required")
    return ",".join(names)


def decode_stream_frame(raw: str) -> WsTicker | WsTrade | dict[str, Any]:
    """
    Decode a raw frame by its ``stream`` tag.

    Frames from streams this module does not know are returned as plain dicts.

    Raises:
        ValueError: frame is not a JSON object, or a ticker/trade frame is
            missing fields or carries values of the wrong type
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Stream frame is not an object: {raw[:100]}")

    stream = data.get("stream", "")
    if not isinstance(stream, str):
        raise ValueError(f"Stream tag is not a string: {stream!r}")

    try:
        if stream.startswith("market.ticker."):
            return WsTicker.from_api(data)
        if stream.startswith("market.trade."):
            return WsTrade.from_api(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed {stream} frame: {e!r}") from e
    return data
