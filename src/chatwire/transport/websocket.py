"""
WebSocket connection manager.

One duplex connection per manager. Outbound frames go through a bounded queue
drained by a sender task, so `send()` never blocks. Inbound frames are exposed
as an async iterator of raw text; nothing here parses them.
"""

import asyncio
import logging
from contextlib import suppress
from typing import AsyncIterator, Optional

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from chatwire.errors import ConnectionFailure, SendFailure

DEFAULT_URL = "ws://127.0.0.1:8080"
DEFAULT_OUTBOUND_QUEUE_SIZE = 64
DEFAULT_OPEN_TIMEOUT = 10.0
FLUSH_TIMEOUT = 2.0

logger = logging.getLogger(__name__)


class WebSocketManager:
    def __init__(
        self,
        url: str = DEFAULT_URL,
        outbound_queue_size: int = DEFAULT_OUTBOUND_QUEUE_SIZE,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
    ):
        self._url = url
        self._outbound_queue_size = outbound_queue_size
        self._open_timeout = open_timeout
        self._ws: Optional[ClientConnection] = None
        self._outbox: Optional[asyncio.Queue[str]] = None
        self._sender: Optional[asyncio.Task[None]] = None
        self._closed = True

    @property
    def url(self) -> str:
        return self._url

    @property
    def connected(self) -> bool:
        return self._ws is not None and not self._closed

    async def connect(self) -> None:
        """Open the connection. No retry: a failure is reported to the caller."""
        if self.connected:
            return
        if self._ws is not None:
            # Previous connection ended; release its sender before reopening.
            await self.close()
        try:
            self._ws = await connect(self._url, open_timeout=self._open_timeout)
        except (OSError, WebSocketException, asyncio.TimeoutError) as e:
            raise ConnectionFailure(f"Failed to connect to {self._url}: {e}", details={"url": self._url}) from e

        self._closed = False
        self._outbox = asyncio.Queue(maxsize=self._outbound_queue_size)
        self._sender = asyncio.create_task(self._drain(self._ws, self._outbox))
        logger.info("Connected to %s", self._url)

    def send(self, text: str) -> None:
        """Enqueue a frame without waiting. Raises SendFailure if it was dropped."""
        if self._outbox is None or self._closed:
            logger.warning("Dropping outbound frame: connection is closed")
            raise SendFailure("Connection is closed")
        try:
            self._outbox.put_nowait(text)
        except asyncio.QueueFull:
            logger.warning("Dropping outbound frame: queue full (%d)", self._outbound_queue_size)
            raise SendFailure("Outbound queue is full", details={"maxsize": self._outbound_queue_size})

    async def frames(self) -> AsyncIterator[str]:
        """Yield inbound text frames until the connection closes.

        A clean close ends the iteration; a lost transport raises ConnectionFailure.
        """
        ws = self._ws
        if ws is None:
            raise ConnectionFailure("Not connected. Call connect() first.")
        try:
            async for frame in ws:
                if isinstance(frame, bytes):
                    frame = frame.decode("utf-8", errors="replace")
                logger.debug("<- %s", frame)
                yield frame
        except ConnectionClosed as e:
            self._closed = True
            raise ConnectionFailure(f"Connection to {self._url} lost: {e}", details={"url": self._url}) from e
        self._closed = True
        logger.info("Connection to %s closed", self._url)

    async def _drain(self, ws: ClientConnection, outbox: "asyncio.Queue[str]") -> None:
        while True:
            text = await outbox.get()
            try:
                await ws.send(text)
                logger.debug("-> %s", text)
            except ConnectionClosed as e:
                self._closed = True
                logger.warning("Send failed, connection closed: %s", e)
                self._discard(outbox)
                return
            finally:
                outbox.task_done()

    @staticmethod
    def _discard(outbox: "asyncio.Queue[str]") -> None:
        dropped = 0
        while not outbox.empty():
            outbox.get_nowait()
            outbox.task_done()
            dropped += 1
        if dropped:
            logger.warning("Dropped %d queued outbound frame(s)", dropped)

    async def close(self) -> None:
        """Flush queued frames (bounded wait), then close the socket."""
        was_open = not self._closed
        self._closed = True
        if self._outbox is not None and was_open:
            with suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._outbox.join(), timeout=FLUSH_TIMEOUT)
        if self._sender is not None:
            self._sender.cancel()
            with suppress(asyncio.CancelledError):
                await self._sender
            self._sender = None
        if self._ws is not None:
            await self._ws.close()
            self._ws = None
            logger.info("Disconnected from %s", self._url)
        self._outbox = None
