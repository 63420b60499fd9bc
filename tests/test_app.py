import json

import pytest

from yewchat.app import App, main, switch
from yewchat.chat import Chat, MsgType, WebSocketMessage, decode_message, encode_message
from yewchat.login import Login
from yewchat.routes import DEFAULT_USERNAME, Route


class FakeService:
    def __init__(self, event_bus):
        self.event_bus = event_bus
        self.sent = []

    def try_send(self, message):
        self.sent.append(message)


@pytest.fixture
def services():
    return []


@pytest.fixture
def app(services):
    def factory(bus):
        service = FakeService(bus)
        services.append(service)
        return service

    return App(factory)


def test_render_login(app):
    html = app.render("/")
    assert html.startswith('<div class="flex w-screen h-screen">')
    assert "Go Chatting!" in html
    assert isinstance(app.page, Login)


def test_render_unknown_path(app):
    assert app.render("/nowhere") == '<div class="flex w-screen h-screen"><h1>404 baby</h1></div>'
    assert app.page is None


def test_switch_not_found(app):
    assert switch(Route.NOT_FOUND, app) == "<h1>404 baby</h1>"


def test_login_then_chat_registers_username(app, services):
    app.render("/")
    app.page.on_input("alice")
    assert app.page.on_click() is Route.CHAT
    app.render("/chat")
    assert isinstance(app.page, Chat)
    assert len(services) == 1
    assert decode_message(services[0].sent[0]) == WebSocketMessage(MsgType.REGISTER, data="alice")


def test_direct_chat_uses_default_username(app, services):
    app.render("/chat")
    assert decode_message(services[0].sent[0]).data == DEFAULT_USERNAME


def test_rerender_keeps_chat(app, services):
    app.render("/chat")
    first = app.page
    app.render("/chat")
    assert app.page is first
    assert len(services) == 1


def test_leaving_chat_disconnects(app):
    app.render("/chat")
    assert len(app.event_bus) == 1
    app.render("/")
    assert len(app.event_bus) == 0


def test_login_keeps_typed_name_across_renders(app):
    app.render("/")
    login = app.page
    login.on_input("bob")
    app.render("/")
    assert app.page is login and app.page.username == "bob"


def test_bus_message_appears_in_chat(app):
    app.render("/chat")
    inner = json.dumps({"from": "bob", "message": "hello there"})
    app.event_bus.send(encode_message(WebSocketMessage(MsgType.MESSAGE, data=inner)))
    assert "<p>hello there</p>" in app.render("/chat")


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0


def test_main_rejects_empty_username():
    with pytest.raises(SystemExit) as info:
        main([""])
    assert info.value.code == 2