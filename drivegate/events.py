"""Keep-alive event stream for connectors that expect an SSE handshake on GET /mcp.

The stream carries no application data: one ``initialized`` frame on open,
then a comment frame per tick until the client goes away.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable

from drivegate.models.mcp import JSONRPC_VERSION, PROTOCOL_VERSION

logger = logging.getLogger(__name__)

KEEPALIVE_FRAME = ": ping\n\n"


def initialized_frame() -> str:
    message = {
        "jsonrpc": JSONRPC_VERSION,
        "method": "initialized",
        "params": {"protocolVersion": PROTOCOL_VERSION},
    }
    return f"data: {json.dumps(message)}\n\n"


class KeepAliveStream:
    """Connection lifecycle: open -> tick every ``interval`` seconds -> close."""

    def __init__(self, interval: float, is_disconnected: Callable[[], Awaitable[bool]]):
        self.interval = interval
        self.is_disconnected = is_disconnected
        self.ticks = 0
        self.opened = False
        self.closed = False

    async def frames(self) -> AsyncIterator[str]:
        self.opened = True
        logger.debug("Event stream opened")
        try:
            yield initialized_frame()
            while True:
                await asyncio.sleep(self.interval)
                if await self.is_disconnected():
                    break
                self.ticks += 1
                yield KEEPALIVE_FRAME
        finally:
            # also reached when the server cancels the response task on disconnect
            self.closed = True
            logger.debug("Event stream closed after %d keep-alives", self.ticks)
