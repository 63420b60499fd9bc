import asyncio

import pytest
import websockets

from yewchat.event_bus import EventBus
from yewchat.websocket import SendError, WebsocketService


def _port(server):
    return server.sockets[0].getsockname()[1]


def test_queue_is_bounded():
    service = WebsocketService(EventBus(), "ws://localhost:1")
    for index in range(1000):
        service.try_send(str(index))
    with pytest.raises(SendError):
        service.try_send("overflow")


@pytest.mark.asyncio
async def test_closed_service_refuses_messages():
    service = WebsocketService(EventBus(), "ws://localhost:1")
    await service.close()
    with pytest.raises(SendError):
        service.try_send("late")


@pytest.mark.asyncio
async def test_round_trip_with_text_and_bytes():
    async def handler(connection):
        message = await connection.recv()
        await connection.send(message)
        await connection.send(b"\xff\xfe")
        await connection.send("from-bytes".encode("utf-8"))

    async with websockets.serve(handler, "127.0.0.1", 0) as server:
        bus = EventBus()
        received = []
        bus.connect(received.append)
        service = WebsocketService(bus, f"ws://127.0.0.1:{_port(server)}")
        service.try_send("hello")
        await asyncio.wait_for(service.run(), timeout=5)

    assert received == ["hello", "from-bytes"]


@pytest.mark.asyncio
async def test_close_ends_run():
    async def handler(connection):
        await connection.send("welcome")
        async for _ in connection:
            pass

    async with websockets.serve(handler, "127.0.0.1", 0) as server:
        bus = EventBus()
        received = []
        arrived = asyncio.Event()

        def on_message(message):
            received.append(message)
            arrived.set()

        bus.connect(on_message)
        service = WebsocketService(bus, f"ws://127.0.0.1:{_port(server)}")
        task = asyncio.create_task(service.run())
        await asyncio.wait_for(arrived.wait(), timeout=5)
        await service.close()
        await asyncio.wait_for(task, timeout=5)

    assert task.done()
    assert received == ["welcome"]
    with pytest.raises(SendError):
        service.try_send("after close")