"""Market data models."""

from dataclasses import dataclass


@dataclass
class MarketSymbol:
    """A tradable symbol listed by the exchange."""

    id: int
    symbol: str  # e.g. "THB_BTC"
    info: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "MarketSymbol":
        """Create MarketSymbol from API response."""
        return cls(
            id=int(data["id"]),
            symbol=str(data["symbol"]),
            info=data.get("info", ""),
        )

    @property
    def stream_symbol(self) -> str:
        """Symbol in the form used by stream names ("thb_btc")."""
        return self.symbol.lower()


@dataclass
class WsTicker:
    """Ticker frame from a ``market.ticker.<sym>`` stream."""

    stream: str
    id: int
    last: float
    lowest_ask: float
    lowest_ask_size: float
    highest_bid: float
    highest_bid_size: float
    change: float
    percent_change: float
    base_volume: float
    quote_volume: float
    is_frozen: bool
    high_24hr: float
    low_24hr: float
    open: float
    close: float

    @classmethod
    def from_api(cls, data: dict) -> "WsTicker":
        """Create WsTicker from a decoded stream frame."""
        return cls(
            stream=data["stream"],
            id=int(data.get("id", 0)),
            last=float(data.get("last", 0)),
            lowest_ask=float(data.get("lowestAsk", 0)),
            lowest_ask_size=float(data.get("lowestAskSize", 0)),
            highest_bid=float(data.get("highestBid", 0)),
            highest_bid_size=float(data.get("highestBidSize", 0)),
            change=float(data.get("change", 0)),
            percent_change=float(data.get("percentChange", 0)),
            base_volume=float(data.get("baseVolume", 0)),
            quote_volume=float(data.get("quoteVolume", 0)),
            is_frozen=bool(data.get("isFrozen", 0)),
            high_24hr=float(data.get("high24hr", 0)),
            low_24hr=float(data.get("low24hr", 0)),
            open=float(data.get("open", 0)),
            close=float(data.get("close", 0)),
        )

    def __repr__(self) -> str:
        return f"WsTicker({self.stream}, last={self.last}, bid={self.highest_bid}, ask={self.lowest_ask})"


@dataclass
class WsTrade:
    """Trade frame from a ``market.trade.<sym>`` stream."""

    stream: str
    symbol: str
    txn: str
    rate: float
    amount: float
    bid_id: str
    ask_id: str
    timestamp: int  # Seconds

    @classmethod
    def from_api(cls, data: dict) -> "WsTrade":
        """Create WsTrade from a decoded stream frame."""
        return cls(
            stream=data["stream"],
            symbol=data.get("sym", ""),
            txn=data.get("txn", ""),
            rate=float(data["rat"]),
            amount=float(data["amt"]),
            bid_id=str(data.get("bid", "")),
            ask_id=str(data.get("sid", "")),
            timestamp=int(data.get("ts", 0)),
        )

    def __repr__(self) -> str:
        return f"WsTrade({self.symbol}, rate={self.rate}, amount={self.amount}, ts={self.timestamp})"
