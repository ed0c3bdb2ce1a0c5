"""REST API client for Bitkub."""

import asyncio
from typing import Any

import aiohttp
from yarl import URL

from ..models.account import Balance, TradingLimits, parse_balances, parse_wallet
from ..models.market import MarketSymbol
from ..models.order import (
    OpenOrder,
    OrderHistoryEntry,
    OrderInfo,
    OrderLookup,
    OrderRequest,
    OrderType,
    PlacedOrder,
)
from ..utils.config import Config
from ..utils.logger import logger, redact, release
from .auth import SignedRequest, encode_body, encode_query, get_auth_headers
from .clock import RawResponse, ServerClock
from .envelope import Pagination, decode_envelope, peek_error_code
from .errors import APIError, HTTPStatusError, TransportError

SERVER_TIME_PATH = "/api/v3/servertime"
SYMBOLS_PATH = "/api/market/symbols"
WALLET_PATH = "/api/v3/market/wallet"
BALANCES_PATH = "/api/v3/market/balances"
TRADING_CREDITS_PATH = "/api/v3/user/trading-credits"
LIMITS_PATH = "/api/v3/user/limits"
PLACE_BID_PATH = "/api/v3/market/place-bid"
PLACE_ASK_PATH = "/api/v3/market/place-ask"
CANCEL_ORDER_PATH = "/api/v3/market/cancel-order"
OPEN_ORDERS_PATH = "/api/v3/market/my-open-orders"
ORDER_HISTORY_PATH = "/api/v3/market/my-order-history"
ORDER_INFO_PATH = "/api/v3/market/order-info"
WS_TOKEN_PATH = "/api/v3/market/wstoken"


class RestClient:
    """Async REST client for the Bitkub API."""

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        base_url: str | None = None,
        timeout: float | None = None,
        clock: ServerClock | None = None,
    ):
        self.base_url = (base_url or Config.get_rest_url()).rstrip("/")
        self._api_key = api_key
        self._api_secret = api_secret
        self._redacted = False
        self._redact_credentials()
        self._timeout = timeout if timeout is not None else Config.REST_TIMEOUT
        self.session: aiohttp.ClientSession | None = None
        self.clock = clock or ServerClock(self._fetch_server_time)

    def __repr__(self) -> str:
        return f"RestClient(base_url={self.base_url!r}, authenticated={self.has_credentials})"

    async def __aenter__(self):
        """Context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        await self.close()

    @property
    def has_credentials(self) -> bool:
        return bool(self._api_key and self._api_secret)

    async def connect(self) -> None:
        """Create aiohttp session."""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            self.session = aiohttp.ClientSession(timeout=timeout)
            self._redact_credentials()
            logger.info(f"REST client connected to {self.base_url}")

    async def close(self) -> None:
        """Close aiohttp session and release the credentials from log masking."""
        if self.session and not self.session.closed:
            await self.session.close()
            logger.info("REST client closed")
        if self._redacted:
            release(self._api_key, self._api_secret)
            self._redacted = False

    def _redact_credentials(self) -> None:
        if not self._redacted:
            redact(self._api_key, self._api_secret)
            self._redacted = True

    async def _send(
        self,
        method: str,
        path: str,
        query: str = "",
        body: str = "",
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        """
        Send one HTTP request with an already-encoded query and body.

        The URL is passed to aiohttp pre-encoded so the bytes on the wire
        are the bytes that were signed.

        Raises:
            TransportError: connection, DNS or timeout failure
            HTTPStatusError: any non-2xx status (raw body preserved)
        """
        if self.session is None or self.session.closed:
            await self.connect()

        raw_url = f"{self.base_url}{path}"
        if query:
            raw_url += f"?{query}"
        url = URL(raw_url, encoded=True)

        try:
            async with self.session.request(
                method=method,
                url=url,
                data=body.encode("utf-8") if body else None,
                headers=headers,
            ) as response:
                status = response.status
                text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"REST request failed: {method} {path} - {e!r}")
            raise TransportError(f"{method} {path} failed: {e!r}") from e

        logger.debug(
            f"REST request ->\nmethod: {method}\nurl: {raw_url}\nbody: {body}\nstatus: {status}\nresponse: {text[:500]}\n{'=' * 60}"
        )

        if not 200 <= status < 300:
            code = peek_error_code(text)
            api_error = APIError(code) if code else None
            logger.error(f"REST API error: {status} {method} {path} - {text[:200]}")
            raise HTTPStatusError(status, text, api_error)

        return RawResponse(status=status, body=text)

    async def _fetch_server_time(self) -> RawResponse:
        return await self._send("GET", SERVER_TIME_PATH)

    async def _sign(self, method: str, path: str, payload: str) -> SignedRequest:
        if not self.has_credentials:
            raise ValueError("API key and secret are required for secured endpoints")

        timestamp = await self.clock.now_ms()
        return SignedRequest.build(self._api_secret, timestamp, method, path, payload)

    async def authenticated_get(
        self, path: str, params: dict[str, Any] | None = None
    ) -> RawResponse:
        """
        Signed GET. The query is signed as "?" + encoded query, even when empty.

        Args:
            path: API path
            params: Query parameters (None values are dropped)

        Returns:
            Raw response for envelope decoding
        """
        query = encode_query(params)
        signed = await self._sign("GET", path, "?" + query)
        logger.debug(f"Signed {signed!r}")
        return await self._send(
            "GET",
            path,
            query=query,
            headers=get_auth_headers(self._api_key, signed.signature, signed.timestamp),
        )

    async def authenticated_post(
        self, path: str, payload: dict[str, Any] | None = None
    ) -> RawResponse:
        """
        Signed POST. The body is serialized once and that exact string is
        both signed and sent.

        Args:
            path: API path
            payload: JSON body (None values are dropped)

        Returns:
            Raw response for envelope decoding
        """
        body = encode_body(payload)
        signed = await self._sign("POST", path, body)
        logger.debug(f"Signed {signed!r}")
        return await self._send(
            "POST",
            path,
            body=body,
            headers=get_auth_headers(self._api_key, signed.signature, signed.timestamp),
        )

    # Public endpoints

    async def get_server_time(self) -> int:
        """Exchange server time in milliseconds."""
        return await self.clock.now_ms()

    async def get_symbols(self) -> list[MarketSymbol]:
        """
        Get all listed symbols.

        Returns:
            List of MarketSymbol objects
        """
        response = await self._send("GET", SYMBOLS_PATH)
        envelope = decode_envelope(
            response.body, parser=lambda r: [MarketSymbol.from_api(s) for s in r]
        )
        logger.info(f"Fetched {len(envelope.result)} symbols")
        return envelope.result

    # Secured endpoints (account)

    async def get_wallet(self) -> dict[str, float]:
        """Available balance per currency."""
        response = await self.authenticated_post(WALLET_PATH)
        return decode_envelope(response.body, parser=parse_wallet).result

    async def get_balances(self) -> dict[str, Balance]:
        """Available and reserved balance per currency."""
        response = await self.authenticated_post(BALANCES_PATH)
        return decode_envelope(response.body, parser=parse_balances).result

    async def get_trading_credits(self) -> float:
        response = await self.authenticated_post(TRADING_CREDITS_PATH)
        return decode_envelope(response.body, parser=float).result

    async def get_limits(self) -> TradingLimits:
        """Deposit and withdrawal limits with current usage."""
        response = await self.authenticated_post(LIMITS_PATH)
        return decode_envelope(response.body, parser=TradingLimits.from_api).result

    async def get_ws_token(self) -> str:
        """Token for authenticating private WebSocket streams."""
        response = await self.authenticated_post(WS_TOKEN_PATH)
        return decode_envelope(response.body, parser=str).result

    # Secured endpoints (orders)

    async def place_bid(
        self,
        symbol: str,
        amount: float,
        rate: float,
        order_type: OrderType = "limit",
        client_id: str | None = None,
        post_only: bool | None = None,
    ) -> PlacedOrder:
        """
        Place a buy order.

        Args:
            symbol: Symbol, e.g. "btc_thb"
            amount: THB amount to spend
            rate: Price (0 for market orders)
            order_type: "limit" or "market"
            client_id: Optional client reference
            post_only: Reject instead of taking liquidity

        Returns:
            PlacedOrder
        """
        request = OrderRequest(symbol, amount, rate, order_type, client_id, post_only)
        return await self._place(PLACE_BID_PATH, request, "bid")

    async def place_ask(
        self,
        symbol: str,
        amount: float,
        rate: float,
        order_type: OrderType = "limit",
        client_id: str | None = None,
        post_only: bool | None = None,
    ) -> PlacedOrder:
        """
        Place a sell order.

        Args:
            symbol: Symbol, e.g. "btc_thb"
            amount: Amount of the coin to sell
            rate: Price (0 for market orders)
            order_type: "limit" or "market"
            client_id: Optional client reference
            post_only: Reject instead of taking liquidity

        Returns:
            PlacedOrder
        """
        request = OrderRequest(symbol, amount, rate, order_type, client_id, post_only)
        return await self._place(PLACE_ASK_PATH, request, "ask")

    async def _place(self, path: str, request: OrderRequest, label: str) -> PlacedOrder:
        request.validate()
        response = await self.authenticated_post(path, request.to_api_payload())
        order = decode_envelope(response.body, parser=PlacedOrder.from_api).result
        logger.info(
            f"Order placed: {label} {request.symbol} {request.amount} @ {request.rate} - ID: {order.order_id}"
        )
        return order

    async def cancel_order(
        self,
        symbol: str | None = None,
        order_id: str | None = None,
        side: str | None = None,
        order_hash: str | None = None,
    ) -> None:
        """
        Cancel an order, identified by (symbol, order_id, side) or by hash.

        Raises:
            APIError: e.g. code 21 when the order cannot be cancelled
        """
        lookup = OrderLookup(symbol, order_id, side, order_hash)
        lookup.validate()
        response = await self.authenticated_post(CANCEL_ORDER_PATH, lookup.to_api_payload())
        decode_envelope(response.body)
        logger.info(f"Order cancelled: {order_hash or order_id}")

    async def get_open_orders(self, symbol: str) -> list[OpenOrder]:
        """
        Get open orders for a symbol.

        Args:
            symbol: Symbol, e.g. "btc_thb"

        Returns:
            List of OpenOrder objects
        """
        response = await self.authenticated_get(OPEN_ORDERS_PATH, {"sym": symbol.lower()})
        return decode_envelope(
            response.body, parser=lambda r: [OpenOrder.from_api(o) for o in r]
        ).result

    async def get_order_history(
        self,
        symbol: str,
        page: int | None = None,
        limit: int | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> tuple[list[OrderHistoryEntry], Pagination | None]:
        """
        Get matched order history for a symbol.

        Args:
            symbol: Symbol, e.g. "btc_thb"
            page: Page number
            limit: Page size
            start: Start timestamp
            end: End timestamp

        Returns:
            Tuple of (entries, pagination)
        """
        params = {"sym": symbol.lower(), "p": page, "lmt": limit, "start": start, "end": end}
        response = await self.authenticated_get(ORDER_HISTORY_PATH, params)
        envelope = decode_envelope(
            response.body, parser=lambda r: [OrderHistoryEntry.from_api(o) for o in r]
        )
        return envelope.result, envelope.pagination

    async def get_order_info(
        self,
        symbol: str | None = None,
        order_id: str | None = None,
        side: str | None = None,
        order_hash: str | None = None,
    ) -> OrderInfo:
        """Get the state of a single order, identified by (symbol, order_id, side) or by hash."""
        lookup = OrderLookup(symbol, order_id, side, order_hash)
        lookup.validate()
        response = await self.authenticated_get(ORDER_INFO_PATH, lookup.to_api_payload())
        return decode_envelope(response.body, parser=OrderInfo.from_api).result
