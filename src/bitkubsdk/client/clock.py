"""Exchange server time source used for request signing."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..utils.logger import logger
from ..utils.timing import format_timestamp_ms, get_timestamp_ms
from .envelope import decode_bare


@dataclass
class RawResponse:
    """HTTP status and undecoded body of a REST call."""

    status: int
    body: str


class ServerClock:
    """
    Fetches the exchange's clock on every call.

    The exchange rejects signatures whose timestamp drifts outside its
    tolerance window, so the local clock is never used as a fallback.
    Errors from the fetch propagate unchanged.
    """

    def __init__(self, fetch: Callable[[], Awaitable[RawResponse]]):
        self._fetch = fetch
        self.last_skew_ms: int | None = None

    async def now_ms(self) -> int:
        """Current server time in milliseconds."""
        response = await self._fetch()
        timestamp = decode_bare(response.body, parser=_parse_timestamp)

        self.last_skew_ms = timestamp - get_timestamp_ms()
        logger.debug(
            f"Server time {timestamp} ({format_timestamp_ms(timestamp)}), skew {self.last_skew_ms}ms"
        )
        return timestamp


def _parse_timestamp(value) -> int:
    # bool is an int subclass and must not pass as a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"Server time is not an integer: {value!r}")
    timestamp = int(value)
    if timestamp <= 0:
        raise ValueError(f"Server time is not positive: {timestamp}")
    return timestamp
