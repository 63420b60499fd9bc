"""The application shell: routing between the login and chat views."""

from __future__ import annotations

import argparse
import asyncio
import sys
import threading
from typing import Callable, Optional, TextIO, Union

from websockets.exceptions import WebSocketException

from yewchat.chat import Chat, MessageSink
from yewchat.event_bus import EventBus
from yewchat.login import Login
from yewchat.routes import Route, User, path_for_route, route_for_path
from yewchat.websocket import DEFAULT_URL, WebsocketService

ServiceFactory = Callable[[EventBus], MessageSink]
Page = Union[Login, Chat]

NOT_FOUND_HTML = "<h1>404 baby</h1>"


def _default_factory(event_bus: EventBus) -> MessageSink:
    return WebsocketService(event_bus)


class App:
    """Holds the shared user and bus, and the page currently shown."""

    def __init__(self, service_factory: Optional[ServiceFactory] = None) -> None:
        self.user = User()
        self.event_bus = EventBus()
        self.service_factory = service_factory or _default_factory
        self.page: Optional[Page] = None

    def render(self, path: str) -> str:
        """Render the page served at ``path`` as HTML."""
        body = switch(route_for_path(path), self)
        return f'<div class="flex w-screen h-screen">{body}</div>'


def _mount(app: App, page: Optional[Page]) -> None:
    old = app.page
    if isinstance(old, Chat) and old is not page:
        app.event_bus.disconnect(old.handler_id)
    app.page = page


def switch(route: Route, app: App) -> str:
    """Show the page for ``route`` in ``app`` and return its HTML."""
    if route is Route.LOGIN:
        if not isinstance(app.page, Login):
            _mount(app, Login(app.user))
        return app.page.view()
    if route is Route.CHAT:
        if not isinstance(app.page, Chat):
            service = app.service_factory(app.event_bus)
            _mount(app, Chat(app.user, service, app.event_bus))
        return app.page.view()
    _mount(app, None)
    return NOT_FOUND_HTML


def _pump_lines(stream: TextIO, loop: asyncio.AbstractEventLoop, submit) -> None:
    for line in stream:
        try:
            loop.call_soon_threadsafe(submit, line.rstrip("\n"))
        except RuntimeError:
            return


async def _session(url: str, username: str, stream: TextIO) -> None:
    app = App(lambda bus: WebsocketService(bus, url))
    app.render(path_for_route(Route.LOGIN))
    login = app.page
    login.on_input(username)
    target = login.on_click()
    app.render(path_for_route(target))
    chat = app.page

    shown = 0

    def show(_text: str) -> None:
        nonlocal shown
        for item in chat.messages[shown:]:
            print(f"{item.sender}: {item.message}", flush=True)
        shown = len(chat.messages)

    app.event_bus.connect(show)
    loop = asyncio.get_running_loop()
    threading.Thread(
        target=_pump_lines, args=(stream, loop, chat.submit_message), daemon=True
    ).start()
    await chat.service.run()


def main(argv=None) -> int:
    """Join the chat as a user, sending lines read from standard input."""
    parser = argparse.ArgumentParser(prog="yewchat", description="Join the chat room.")
    parser.add_argument("username", help="name to register with")
    parser.add_argument("--url", default=DEFAULT_URL, help="chat server address")
    args = parser.parse_args(argv)
    if not args.username:
        parser.error("username must not be empty")
    try:
        asyncio.run(_session(args.url, args.username, sys.stdin))
    except (OSError, WebSocketException) as exc:
        print(f"yewchat: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())