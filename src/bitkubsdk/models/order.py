"""Order models."""

from dataclasses import dataclass, field
from typing import Any, Literal

OrderSide = Literal["buy", "sell"]
OrderType = Literal["limit", "market"]

ORDER_SIDES = ("buy", "sell")
ORDER_TYPES = ("limit", "market")


@dataclass
class OrderRequest:
    """Payload for place-bid / place-ask."""

    symbol: str  # e.g. "btc_thb"
    amount: float  # THB to spend for bids, coins to sell for asks
    rate: float  # 0 for market orders
    order_type: OrderType = "limit"
    client_id: str | None = None
    post_only: bool | None = None

    def validate(self) -> None:
        """Raise ValueError if the request cannot be valid."""
        if not self.symbol:
            raise ValueError("symbol is required")
        if self.order_type not in ORDER_TYPES:
            raise ValueError(f"order_type must be one of {ORDER_TYPES}, got {self.order_type!r}")
        if self.amount <= 0:
            raise ValueError(f"amount must be positive, got {self.amount}")
        if self.rate < 0:
            raise ValueError(f"rate must not be negative, got {self.rate}")
        if self.order_type == "limit" and self.rate == 0:
            raise ValueError("rate is required for limit orders")

    def to_api_payload(self) -> dict[str, Any]:
        """Convert to API payload. Key order is the order sent on the wire."""
        payload: dict[str, Any] = {
            "sym": self.symbol.lower(),
            "amt": self.amount,
            "rat": self.rate,
            "typ": self.order_type,
        }
        if self.client_id:
            payload["client_id"] = self.client_id
        if self.post_only is not None:
            payload["post_only"] = self.post_only
        return payload


@dataclass
class OrderLookup:
    """Identifies an order either by (symbol, id, side) or by hash."""

    symbol: str | None = None
    order_id: str | None = None
    side: OrderSide | None = None
    order_hash: str | None = None

    def validate(self) -> None:
        if self.order_hash:
            return
        if not (self.symbol and self.order_id and self.side):
            raise ValueError("either order_hash or symbol, order_id and side are required")
        if self.side not in ORDER_SIDES:
            raise ValueError(f"side must be one of {ORDER_SIDES}, got {self.side!r}")

    def to_api_payload(self) -> dict[str, Any]:
        if self.order_hash:
            return {"hash": self.order_hash}
        return {"sym": self.symbol.lower(), "id": self.order_id, "sd": self.side}


@dataclass
class PlacedOrder:
    """Result of place-bid / place-ask."""

    order_id: str
    order_hash: str
    order_type: str
    amount: float
    rate: float
    fee: float
    credit: float
    receive: float
    timestamp: int
    client_id: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "PlacedOrder":
        """Create PlacedOrder from API response."""
        return cls(
            order_id=str(data["id"]),
            order_hash=data.get("hash", ""),
            order_type=data.get("typ", ""),
            amount=float(data.get("amt", 0)),
            rate=float(data.get("rat", 0)),
            fee=float(data.get("fee", 0)),
            credit=float(data.get("cre", 0)),
            receive=float(data.get("rec", 0)),
            timestamp=int(data.get("ts", 0)),
            client_id=data.get("ci", ""),
        )


@dataclass
class OpenOrder:
    """An order still resting on the book."""

    order_id: str
    order_hash: str
    side: str
    order_type: str
    rate: float
    fee: float
    credit: float
    amount: float
    receive: float
    timestamp: int
    client_id: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "OpenOrder":
        return cls(
            order_id=str(data["id"]),
            order_hash=data.get("hash", ""),
            side=data.get("side", ""),
            order_type=data.get("type", ""),
            rate=float(data.get("rate", 0)),
            fee=float(data.get("fee", 0)),
            credit=float(data.get("credit", 0)),
            amount=float(data.get("amount", 0)),
            receive=float(data.get("receive", 0)),
            timestamp=int(data.get("ts", 0)),
            client_id=data.get("client_id", ""),
        )


@dataclass
class OrderHistoryEntry:
    """One fill from the order history."""

    txn_id: str
    order_id: str
    order_hash: str
    side: str
    order_type: str
    rate: float
    fee: float
    credit: float
    amount: float
    is_maker: bool
    timestamp: int

    @classmethod
    def from_api(cls, data: dict) -> "OrderHistoryEntry":
        return cls(
            txn_id=data.get("txn_id", ""),
            order_id=str(data["order_id"]),
            order_hash=data.get("hash", ""),
            side=data.get("side", ""),
            order_type=data.get("type", ""),
            rate=float(data.get("rate", 0)),
            fee=float(data.get("fee", 0)),
            credit=float(data.get("credit", 0)),
            amount=float(data.get("amount", 0)),
            is_maker=bool(data.get("is_maker", False)),
            timestamp=int(data.get("ts", 0)),
        )


@dataclass
class OrderHistoryFill:
    """A partial fill inside OrderInfo.history."""

    txn_id: str
    amount: float
    rate: float
    fee: float
    credit: float
    timestamp: int

    @classmethod
    def from_api(cls, data: dict) -> "OrderHistoryFill":
        return cls(
            txn_id=data.get("txn_id", ""),
            amount=float(data.get("amount", 0)),
            rate=float(data.get("rate", 0)),
            fee=float(data.get("fee", 0)),
            credit=float(data.get("credit", 0)),
            timestamp=int(data.get("timestamp", 0)),
        )


@dataclass
class OrderInfo:
    """Full state of a single order."""

    order_id: str
    status: str
    amount: float
    rate: float
    fee: float
    credit: float
    filled: float
    total: float
    remaining: float
    partial_filled: bool
    history: list[OrderHistoryFill] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "OrderInfo":
        return cls(
            order_id=str(data["id"]),
            status=data.get("status", ""),
            amount=float(data.get("amount", 0)),
            rate=float(data.get("rate", 0)),
            fee=float(data.get("fee", 0)),
            credit=float(data.get("credit", 0)),
            filled=float(data.get("filled", 0)),
            total=float(data.get("total", 0)),
            remaining=float(data.get("remaining", 0)),
            partial_filled=bool(data.get("partial_filled", False)),
            history=[OrderHistoryFill.from_api(h) for h in data.get("history") or []],
        )

    @property
    def is_open(self) -> bool:
        return self.status not in ("filled", "cancelled")
