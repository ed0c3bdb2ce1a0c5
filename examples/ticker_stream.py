"""
Stream tickers for a few Bitkub symbols until interrupted.

This example demonstrates:
- Listing symbols over the public REST API
- Opening one multiplexed ticker stream
- Draining the subscription until its terminal message
- Cancelling from a signal handler

Usage:
    python examples/ticker_stream.py THB_BTC THB_ETH
"""

import asyncio
import signal
import sys

from bitkubsdk import Config, RestClient, StreamManager
from bitkubsdk.models.market import WsTicker
from bitkubsdk.models.stream import decode_stream_frame, ticker_stream
from bitkubsdk.utils.logger import logger


async def main(requested: list[str]):
    async with RestClient() as client:
        symbols = await client.get_symbols()

    known = {s.symbol.upper(): s for s in symbols}
    chosen = [known[name.upper()] for name in requested if name.upper() in known]
    if not chosen:
        chosen = symbols[:3]
    logger.info(f"Streaming tickers for {[s.symbol for s in chosen]}")

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, stop.set)

    async with StreamManager() as manager:
        subscription = manager.open_stream(
            *(ticker_stream(s.symbol) for s in chosen), cancel_event=stop
        )

        async for message in subscription:
            if message.kind != "data":
                logger.info(f"Stream ended ({message.kind}): {message.data}")
                break

            frame = decode_stream_frame(message.data)
            if isinstance(frame, WsTicker):
                logger.info(
                    f"{frame.stream:24s} | "
                    f"Last: {frame.last:>14,.2f} | "
                    f"Bid: {frame.highest_bid:>14,.2f} | "
                    f"Ask: {frame.lowest_ask:>14,.2f} | "
                    f"24h: {frame.percent_change:>+6.2f}%"
                )


if __name__ == "__main__":
    print("=" * 80)
    print("Bitkub ticker stream")
    print(f"REST URL: {Config.get_rest_url()}")
    print(f"WebSocket URL: {Config.get_ws_url()}")
    print("=" * 80)

    asyncio.run(main(sys.argv[1:]))
