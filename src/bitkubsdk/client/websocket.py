"""WebSocket stream manager for Bitkub market data."""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Literal

import aiohttp

from ..models.stream import join_streams
from ..utils.config import Config
from ..utils.logger import logger

MessageKind = Literal["data", "error", "closed"]

CLOSED_TEXT = "Connection closed"


class StreamState(str, Enum):
    """Lifecycle of one subscription."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    CLOSED = "closed"


@dataclass(frozen=True)
class StreamMessage:
    """
    One item delivered to the consumer.

    ``data`` messages carry a raw frame exactly as received. ``error`` and
    ``closed`` messages are terminal: exactly one of them is delivered per
    subscription, and it is always the last.
    """

    kind: MessageKind
    data: str
    stream_name: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.kind != "data"


class StreamSubscription:
    """
    A single WebSocket connection carrying one or more comma-joined streams.

    The connection is private to the background receive task. Consumers only
    see the message queue, via ``get()`` or ``async for``.

    ``cancel()`` stops only this subscription. An optional ``cancel_event``
    owned by the caller may be shared across subscriptions; setting it stops
    every subscription that was given it. Either way the receive task closes
    the socket itself so a pending read returns immediately.

    At most ``max_queue`` data frames are buffered. When the consumer falls
    behind, the receive task stops reading from the socket until there is
    room again.
    """

    def __init__(
        self,
        stream_name: str,
        url: str,
        cancel_event: asyncio.Event | None = None,
        heartbeat: float | None = None,
        connect_timeout: float | None = None,
        max_queue: int | None = None,
    ):
        self.stream_name = stream_name
        self.url = url
        self.state = StreamState.DISCONNECTED
        self._stop = asyncio.Event()
        self._external_cancel = cancel_event
        self._heartbeat = heartbeat if heartbeat is not None else Config.WS_HEARTBEAT_INTERVAL
        self._connect_timeout = (
            connect_timeout if connect_timeout is not None else Config.WS_CONNECT_TIMEOUT
        )
        self.max_queue = max(1, max_queue if max_queue is not None else Config.WS_QUEUE_SIZE)
        self._queue: asyncio.Queue[StreamMessage] = asyncio.Queue(maxsize=self.max_queue)
        self._task: asyncio.Task | None = None
        self._terminal: StreamMessage | None = None
        self._drained = False

    def __repr__(self) -> str:
        return f"StreamSubscription({self.stream_name!r}, state={self.state.value})"

    def start(self, session: aiohttp.ClientSession) -> None:
        """Spawn the receive task. Returns without waiting for the dial."""
        if self._task is not None:
            raise RuntimeError("Subscription already started")
        self._task = asyncio.create_task(
            self._run(session), name=f"bitkub-ws:{self.stream_name}"
        )

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    @property
    def is_closed(self) -> bool:
        return self.state is StreamState.CLOSED

    def qsize(self) -> int:
        """Number of messages waiting to be consumed."""
        return self._queue.qsize()

    async def get(self) -> StreamMessage:
        """Wait for the next message."""
        return await self._queue.get()

    def __aiter__(self):
        return self

    async def __anext__(self) -> StreamMessage:
        if self._drained:
            raise StopAsyncIteration
        message = await self._queue.get()
        if message.is_terminal:
            self._drained = True
        return message

    async def cancel(self, timeout: float | None = None) -> None:
        """
        Stop this subscription and wait for the receive task to finish.

        The caller's shared ``cancel_event``, if any, is left untouched.

        Args:
            timeout: Seconds to wait before cancelling the task outright
        """
        self._stop.set()

        if self._task is None:
            self._finish("closed", CLOSED_TEXT)
            return
        if self._task.done():
            return

        timeout = timeout if timeout is not None else Config.WS_CLOSE_TIMEOUT
        try:
            await asyncio.wait_for(asyncio.shield(self._task), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Receive task for {self.stream_name} did not stop in {timeout}s, cancelling")
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)

    def _finish(self, kind: MessageKind, text: str) -> None:
        self.state = StreamState.CLOSED
        if self._terminal is not None:
            return
        self._terminal = StreamMessage(kind, text, self.stream_name)
        if self._queue.full():
            dropped = self._queue.get_nowait()
            logger.warning(f"Queue for {self.stream_name} full, dropped oldest frame for {kind} message")
            logger.debug(f"Dropped frame: {dropped.data[:200]}")
        self._queue.put_nowait(self._terminal)

    async def _wait_cancelled(self) -> None:
        """Return once this subscription or the caller's shared event is cancelled."""
        waiters = [asyncio.ensure_future(self._stop.wait())]
        if self._external_cancel is not None:
            waiters.append(asyncio.ensure_future(self._external_cancel.wait()))
        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                waiter.cancel()

    async def _run(self, session: aiohttp.ClientSession) -> None:
        """Dial, then relay frames until cancellation or a read error."""
        self.state = StreamState.CONNECTING
        cancel_waiter = asyncio.ensure_future(self._wait_cancelled())
        ws: aiohttp.ClientWebSocketResponse | None = None
        terminal: tuple[MessageKind, str] = ("closed", CLOSED_TEXT)

        try:
            logger.info(f"Connecting to WebSocket: {self.url}")
            dial = asyncio.ensure_future(
                asyncio.wait_for(self._dial(session), self._connect_timeout)
            )
            await asyncio.wait({dial, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED)

            if cancel_waiter.done():
                dial.cancel()
                results = await asyncio.gather(dial, return_exceptions=True)
                if isinstance(results[0], aiohttp.ClientWebSocketResponse):
                    ws = results[0]
                logger.info(f"WebSocket {self.stream_name} cancelled while connecting")
                return

            try:
                ws = dial.result()
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError, ValueError) as e:
                logger.error(f"WebSocket connection failed: {e!r}")
                terminal = ("error", f"Failed to connect to websocket: {e!r}")
                return

            self.state = StreamState.STREAMING
            logger.info(f"WebSocket connected: {self.stream_name}")
            terminal = await self._receive_loop(ws, cancel_waiter)

        except asyncio.CancelledError:
            logger.debug(f"Receive task for {self.stream_name} cancelled")
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in WebSocket {self.stream_name}: {e!r}")
            if self.state is StreamState.STREAMING:
                terminal = ("error", f"Error reading message from websocket: {e!r}")
            else:
                terminal = ("error", f"Failed to connect to websocket: {e!r}")
        finally:
            cancel_waiter.cancel()
            if ws is not None and not ws.closed:
                await ws.close()
            self._finish(*terminal)
            logger.info(f"WebSocket {self.stream_name} closed ({terminal[0]})")

    async def _dial(self, session: aiohttp.ClientSession) -> aiohttp.ClientWebSocketResponse:
        return await session.ws_connect(
            self.url,
            heartbeat=self._heartbeat,
            timeout=aiohttp.ClientWSTimeout(ws_close=Config.WS_CLOSE_TIMEOUT),
        )

    async def _deliver(self, message: StreamMessage, cancel_waiter: asyncio.Future) -> None:
        """Queue a data frame, waiting for room unless cancelled first."""
        if not self._queue.full():
            self._queue.put_nowait(message)
            return

        put = asyncio.ensure_future(self._queue.put(message))
        await asyncio.wait({put, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED)
        if not put.done():
            put.cancel()
            await asyncio.gather(put, return_exceptions=True)

    async def _receive_loop(
        self,
        ws: aiohttp.ClientWebSocketResponse,
        cancel_waiter: asyncio.Future,
    ) -> tuple[MessageKind, str]:
        """Relay frames; return the terminal message to emit."""
        while True:
            receive = asyncio.ensure_future(ws.receive())
            await asyncio.wait({receive, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED)

            if cancel_waiter.done():
                # Closing unblocks the pending read
                await ws.close()
                if not receive.done():
                    receive.cancel()
                await asyncio.gather(receive, return_exceptions=True)
                return ("closed", CLOSED_TEXT)

            try:
                msg = receive.result()
            except (aiohttp.ClientError, asyncio.TimeoutError, RuntimeError) as e:
                logger.error(f"Error reading message from websocket: {e!r}")
                return ("error", f"Error reading message from websocket: {e!r}")

            if msg.type == aiohttp.WSMsgType.TEXT:
                await self._deliver(StreamMessage("data", msg.data, self.stream_name), cancel_waiter)

            elif msg.type == aiohttp.WSMsgType.BINARY:
                await self._deliver(
                    StreamMessage("data", msg.data.decode("utf-8", errors="replace"), self.stream_name),
                    cancel_waiter,
                )

            elif msg.type == aiohttp.WSMsgType.ERROR:
                logger.error(f"WebSocket error: {ws.exception()!r}")
                return ("error", f"Error reading message from websocket: {ws.exception()!r}")

            elif msg.type in (
                aiohttp.WSMsgType.CLOSE,
                aiohttp.WSMsgType.CLOSING,
                aiohttp.WSMsgType.CLOSED,
            ):
                logger.warning(f"WebSocket closed by server (code {ws.close_code})")
                return ("error", f"Error reading message from websocket: closed by server (code {ws.close_code})")


class StreamManager:
    """Opens stream subscriptions and owns the HTTP session they share."""

    def __init__(
        self,
        ws_url: str | None = None,
        heartbeat: float | None = None,
        max_queue: int | None = None,
    ):
        self.url = ws_url or Config.get_ws_url()
        if not self.url.endswith("/"):
            self.url += "/"
        self.session: aiohttp.ClientSession | None = None
        self._heartbeat = heartbeat
        self._max_queue = max_queue
        self._subscriptions: list[StreamSubscription] = []

    async def __aenter__(self):
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        await self.close()

    @property
    def subscriptions(self) -> list[StreamSubscription]:
        return list(self._subscriptions)

    def open_stream(
        self,
        *stream_names: str,
        cancel_event: asyncio.Event | None = None,
    ) -> StreamSubscription:
        """
        Subscribe to one or more streams over a single connection.

        Must be called from a running event loop. Returns immediately; the
        dial happens in the background and a failure is reported as the
        subscription's only message.

        Args:
            stream_names: e.g. "market.ticker.thb_btc", "market.trade.thb_btc"
            cancel_event: Caller-owned signal, may be shared by several subscriptions

        Returns:
            StreamSubscription
        """
        line = join_streams(stream_names)

        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()

        subscription = StreamSubscription(
            line,
            self.url + line,
            cancel_event=cancel_event,
            heartbeat=self._heartbeat,
            max_queue=self._max_queue,
        )
        subscription.start(self.session)
        self._subscriptions = [s for s in self._subscriptions if not s.is_closed]
        self._subscriptions.append(subscription)
        return subscription

    async def close(self) -> None:
        """Cancel every open subscription and close the session."""
        logger.info("Closing stream manager")
        await asyncio.gather(
            *(s.cancel() for s in self._subscriptions if not s.is_closed)
        )
        self._subscriptions.clear()

        if self.session and not self.session.closed:
            await self.session.close()
