"""Data models."""

from .account import Balance, TradingLimits
from .market import MarketSymbol, WsTicker, WsTrade
from .order import (
    OpenOrder,
    OrderHistoryEntry,
    OrderHistoryFill,
    OrderInfo,
    OrderLookup,
    OrderRequest,
    OrderSide,
    OrderType,
    PlacedOrder,
)
from .stream import decode_stream_frame, join_streams, ticker_stream, trade_stream

__all__ = [
    "Balance",
    "TradingLimits",
    "MarketSymbol",
    "WsTicker",
    "WsTrade",
    "OpenOrder",
    "OrderHistoryEntry",
    "OrderHistoryFill",
    "OrderInfo",
    "OrderLookup",
    "OrderRequest",
    "OrderSide",
    "OrderType",
    "PlacedOrder",
    "decode_stream_frame",
    "join_streams",
    "ticker_stream",
    "trade_stream",
]
