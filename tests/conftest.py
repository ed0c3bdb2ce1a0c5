"""Pytest configuration and shared fixtures."""

import asyncio
import os
from typing import AsyncGenerator

import pytest
from aiohttp import WSMsgType, web
from aiohttp.test_utils import TestServer

from bitkubsdk.client.rest import RestClient
from bitkubsdk.client.websocket import StreamManager

SERVER_TIME = 1699381086593
API_KEY = "test-key"
API_SECRET = "test-secret"


class FakeExchange:
    """
    Local stand-in for the Bitkub REST and WebSocket endpoints.

    Every REST request is recorded with its raw path and body so tests can
    check exactly what went on the wire.
    """

    def __init__(self):
        self.api_key = API_KEY
        self.api_secret = API_SECRET
        self.server_time_ms = SERVER_TIME
        self.server_time: str = str(SERVER_TIME)
        self.server_time_status = 200
        self.responses: dict[str, tuple[int, str]] = {}
        self.requests: list[dict] = []

        # WebSocket behaviour
        self.ws_frames: list[str] = []
        self.ws_mode = "hold"  # "hold" keeps the socket open, "close" closes after frames
        self.ws_paths: list[str] = []
        self.ws_handler_done = asyncio.Event()

    def respond(self, path: str, body: str, status: int = 200) -> None:
        self.responses[path] = (status, body)

    def last_request(self) -> dict:
        return [r for r in self.requests if r["path"] != "/api/v3/servertime"][-1]

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/api/v3/servertime", self._server_time)
        app.router.add_get("/websocket-api/{streams}", self._websocket)
        app.router.add_route("*", "/api/{tail:.*}", self._rest)
        return app

    async def _server_time(self, request: web.Request) -> web.Response:
        self.requests.append({"method": "GET", "path": request.path, "raw_path": request.raw_path})
        return web.Response(text=self.server_time, status=self.server_time_status)

    async def _rest(self, request: web.Request) -> web.Response:
        raw_path = request.raw_path
        query = raw_path.split("?", 1)[1] if "?" in raw_path else ""
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "raw_path": raw_path,
                "query": query,
                "headers": request.headers.copy(),
                "body": await request.text(),
            }
        )
        status, body = self.responses.get(request.path, (200, '{"error":0,"result":{}}'))
        return web.Response(text=body, status=status, content_type="application/json")

    async def _websocket(self, request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        self.ws_paths.append(request.match_info["streams"])

        try:
            for frame in self.ws_frames:
                await ws.send_str(frame)

            if self.ws_mode == "close":
                await ws.close()
            else:
                async for msg in ws:
                    if msg.type == WSMsgType.ERROR:
                        break
        finally:
            self.ws_handler_done.set()
        return ws


@pytest.fixture
def fake_exchange() -> FakeExchange:
    return FakeExchange()


@pytest.fixture
async def exchange_server(fake_exchange: FakeExchange) -> AsyncGenerator[TestServer, None]:
    """Run the fake exchange on a local port."""
    server = TestServer(fake_exchange.build_app())
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
async def rest_client(
    exchange_server: TestServer, fake_exchange: FakeExchange
) -> AsyncGenerator[RestClient, None]:
    """Create an authenticated REST client pointed at the fake exchange."""
    client = RestClient(
        fake_exchange.api_key,
        fake_exchange.api_secret,
        base_url=str(exchange_server.make_url("")),
        timeout=5,
    )
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
def ws_url(exchange_server: TestServer) -> str:
    """WebSocket base URL of the fake exchange."""
    return str(exchange_server.make_url("/websocket-api/")).replace("http://", "ws://")


@pytest.fixture
async def stream_manager(ws_url: str) -> AsyncGenerator[StreamManager, None]:
    """Create a stream manager pointed at the fake exchange."""
    manager = StreamManager(ws_url=ws_url, heartbeat=5)
    yield manager
    await manager.close()


@pytest.fixture
def skip_if_no_credentials():
    """Skip test if API credentials are not available."""
    if not os.getenv("BITKUB_API_KEY") or not os.getenv("BITKUB_API_SECRET"):
        pytest.skip("API credentials not available")


@pytest.fixture
def ticker_frame() -> str:
    """Sample ticker frame."""
    return (
        '{"stream":"market.ticker.thb_btc","id":1,"last":1250000.5,"lowestAsk":1250100,'
        '"lowestAskSize":0.12,"highestBid":1249900,"highestBidSize":0.5,"change":1200,'
        '"percentChange":0.1,"baseVolume":120.5,"quoteVolume":150000000,"isFrozen":0,'
        '"high24hr":1260000,"low24hr":1240000,"open":1248800.5,"close":1250000.5}'
    )


@pytest.fixture
def trade_frame() -> str:
    """Sample trade frame."""
    return (
        '{"stream":"market.trade.thb_btc","sym":"THB_BTC","txn":"BTCSELL0021182688",'
        '"rat":1250000,"amt":0.0015,"bid":"146227387","sid":"146227400","ts":1699381086}'
    )


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "live: mark test as requiring live connection")
    config.addinivalue_line(
        "markers", "credentials: mark test as requiring API credentials"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    skip_live = pytest.mark.skip(reason="set BITKUB_LIVE_TESTS=1 to run live tests")
    for item in items:
        if "integration_live" in item.nodeid:
            item.add_marker(pytest.mark.live)
            if not os.getenv("BITKUB_LIVE_TESTS"):
                item.add_marker(skip_live)
