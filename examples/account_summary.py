"""
Print balances and open orders for a Bitkub account.

Reads BITKUB_API_KEY and BITKUB_API_SECRET from the environment (or .env).
Nothing is placed or cancelled.
"""

import asyncio
import os

from dotenv import load_dotenv

from bitkubsdk import APIError, RestClient
from bitkubsdk.utils.logger import logger


async def main():
    load_dotenv()
    api_key = os.getenv("BITKUB_API_KEY", "")
    api_secret = os.getenv("BITKUB_API_SECRET", "")
    if not api_key or not api_secret:
        logger.error("BITKUB_API_KEY and BITKUB_API_SECRET must be set")
        return

    async with RestClient(api_key, api_secret) as client:
        balances = await client.get_balances()
        for currency, balance in sorted(balances.items()):
            if balance.total > 0:
                logger.info(
                    f"{currency:8s} available={balance.available:<16} reserved={balance.reserved}"
                )

        limits = await client.get_limits()
        logger.info(
            f"Fiat withdraw used {limits.fiat_withdraw_used:,.2f} of {limits.fiat_withdraw:,.2f} THB"
        )

        for currency in sorted(c for c, b in balances.items() if b.reserved > 0 and c != "THB"):
            symbol = f"{currency}_THB"
            try:
                orders = await client.get_open_orders(symbol)
            except APIError as e:
                logger.warning(f"{symbol}: {e}")
                continue
            for order in orders:
                logger.info(
                    f"{symbol} {order.side:4s} {order.amount} @ {order.rate} (id={order.order_id})"
                )


if __name__ == "__main__":
    asyncio.run(main())
