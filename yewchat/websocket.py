"""Bridge between a WebSocket server and the event bus."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional, Union

import websockets
from websockets.exceptions import ConnectionClosed

from yewchat.event_bus import EventBus

log = logging.getLogger(__name__)

DEFAULT_URL = "ws://127.0.0.1:8080"
CHANNEL_CAPACITY = 1000


class SendError(Exception):
    """Raised when a message cannot be queued for the server."""


class WebsocketService:
    """Queues outgoing text for the server and publishes incoming frames on the bus."""

    def __init__(self, event_bus: EventBus, url: str = DEFAULT_URL) -> None:
        self.event_bus = event_bus
        self.url = url
        self._outgoing: asyncio.Queue[str] = asyncio.Queue(maxsize=CHANNEL_CAPACITY)
        self._connection = None
        self._closed = False

    def try_send(self, message: str) -> None:
        """Queue ``message`` for the server without waiting."""
        if self._closed:
            raise SendError("channel is closed")
        try:
            self._outgoing.put_nowait(message)
        except asyncio.QueueFull as exc:
            raise SendError("channel is full") from exc

    async def run(self) -> None:
        """Connect and pump messages both ways until the connection ends."""
        if self._closed:
            return
        async with websockets.connect(self.url) as connection:
            self._connection = connection
            writer = asyncio.create_task(self._write(connection))
            try:
                await self._read(connection)
            finally:
                writer.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await writer
                self._connection = None
        log.debug("WebSocket Closed")

    async def close(self) -> None:
        """Stop accepting messages and close the connection if open."""
        self._closed = True
        connection: Optional[object] = self._connection
        if connection is not None:
            await connection.close()

    async def _write(self, connection) -> None:
        while True:
            message = await self._outgoing.get()
            log.debug("got event from channel! %s", message)
            try:
                await connection.send(message)
            except ConnectionClosed as exc:
                log.error("ws: %r", exc)
                return

    async def _read(self, connection) -> None:
        try:
            async for frame in connection:
                self._dispatch(frame)
        except ConnectionClosed as exc:
            log.error("ws: %r", exc)

    def _dispatch(self, frame: Union[str, bytes]) -> None:
        if isinstance(frame, (bytes, bytearray, memoryview)):
            try:
                text = bytes(frame).decode("utf-8")
            except UnicodeDecodeError:
                return
        else:
            text = frame
        log.debug("from websocket: %s", text)
        self.event_bus.send(text)