"""
AsyncChatClient — connection, relay and chat core wired together.
"""

import asyncio
import logging
from contextlib import suppress
from typing import Any, Optional

from chatwire.chat import ChatCore, ChatInput
from chatwire.errors import ChatWireError, ConnectionFailure
from chatwire.models.session import Session
from chatwire.relay import EventRelay
from chatwire.transport.websocket import (
    DEFAULT_OPEN_TIMEOUT,
    DEFAULT_OUTBOUND_QUEUE_SIZE,
    DEFAULT_URL,
    WebSocketManager,
)

logger = logging.getLogger(__name__)


class AsyncChatClient:
    """Async chat client (primary)."""

    def __init__(
        self,
        session: Session,
        url: str = DEFAULT_URL,
        *,
        outbound_queue_size: int = DEFAULT_OUTBOUND_QUEUE_SIZE,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
        strict: bool = False,
    ):
        self._session = session
        self._url = url
        self._outbound_queue_size = outbound_queue_size
        self._open_timeout = open_timeout
        self._strict = strict

        self.relay = EventRelay()
        self._conn: Optional[WebSocketManager] = None
        self._core: Optional[ChatCore] = None
        self._pump_task: Optional[asyncio.Task[None]] = None
        self._failure: Optional[ChatWireError] = None

    @property
    def session(self) -> Session:
        return self._session

    @property
    def connected(self) -> bool:
        return self._conn is not None and self._conn.connected

    @property
    def core(self) -> ChatCore:
        if self._core is None:
            raise ConnectionFailure("Not connected. Call connect() first.")
        return self._core

    async def connect(self) -> None:
        """Open the connection, send the register handshake and start receiving."""
        if self._core is not None:
            return
        conn = WebSocketManager(
            url=self._url,
            outbound_queue_size=self._outbound_queue_size,
            open_timeout=self._open_timeout,
        )
        await conn.connect()
        self._conn = conn
        self._failure = None
        # The core sends Register on construction, before the pump can deliver anything.
        self._core = ChatCore(self._session, conn, self.relay, strict=self._strict)
        self._pump_task = asyncio.create_task(self._pump(conn))

    async def _pump(self, conn: WebSocketManager) -> None:
        try:
            async for frame in conn.frames():
                self.relay.publish(frame)
        except ChatWireError as e:
            logger.error("Receive loop stopped: %s", e)
            self._failure = e
            # Nothing reads frames past this point, so the session is over.
            await conn.close()

    async def wait_closed(self) -> None:
        """Wait until the server closes the connection. Re-raises a lost transport."""
        if self._pump_task is not None:
            await asyncio.shield(self._pump_task)
        if self._failure is not None:
            raise self._failure

    def send_message(self, text: str) -> bool:
        return self.core.send_message(text)

    def submit(self, chat_input: ChatInput) -> bool:
        return self.core.submit(chat_input)

    async def close(self) -> None:
        if self._core is not None:
            self._core.close()
            self._core = None
        if self._pump_task is not None:
            self._pump_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._pump_task
            self._pump_task = None
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def __aenter__(self) -> "AsyncChatClient":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
