# yewchat

A small chat client that talks to a chat server over a WebSocket.
After you pick a user name, the client registers with the server, keeps
track of the users who are online and collects the messages they send.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running

```
yewchat USERNAME [--url URL]
```

The command registers `USERNAME` with the chat server at `URL`. The default
is `ws://127.0.0.1:8080`. Each line read from standard input is sent as a
chat message. Each message the server delivers is printed as
`sender: message`. An empty user name is rejected. The command exits with
status 1 if the connection fails and with status 130 when interrupted.

## Views and routes

The application has three routes, defined by `yewchat.routes.Route`:

| Path    | Route       | View                                          |
|---------|-------------|-----------------------------------------------|
| `/`     | `LOGIN`     | `yewchat.login.Login`: enter a user name      |
| `/chat` | `CHAT`      | `yewchat.chat.Chat`: online users, messages   |
| `/404`  | `NOT_FOUND` | a plain "404 baby" heading                    |

`route_for_path(path)` maps a path to its route. It ignores any query string
and trailing slash, and maps unknown paths to `NOT_FOUND`.
`path_for_route(route)` goes the other way.

`yewchat.app.App` holds the shared `User` (its username starts as
`"initial"`), an `EventBus` and the page currently shown.
`App.render(path)` returns the HTML for the page at `path`.
`switch(route, app)` mounts the page for a route and returns its HTML.
Leaving the chat view disconnects it from the bus. By default the chat view
gets a `WebsocketService` for the default address. Pass `service_factory` to
`App` to supply something else with a `try_send` method.

## Wire protocol

Every frame is a JSON object with a `messageType` of `users`, `register` or
`message`, plus an optional `data` string and an optional `dataArray` list
of strings:

- `register`: sent by the client when the chat view is created. `data`
  holds the user name.
- `users`: sent by the server. `dataArray` lists the names of the users who
  are online. Each name gets an avatar address from `avatar_url(name)`.
- `message`: sent by the client with the text in `data`. The server sends
  it to everyone with `data` set to a JSON object
  `{"from": ..., "message": ...}`. A message ending in `.gif` is rendered as
  an image. A sender who is not in the user list gets
  `fallback_avatar_url(name)`.

`yewchat.chat.encode_message` and `yewchat.chat.decode_message` convert
between `WebSocketMessage` values and this JSON form. `decode_message`, and
`Chat.handle_message` through it, raise `ValueError` for a malformed frame.

## The pieces

- `yewchat.event_bus.EventBus`: `connect(callback)` returns a handler id,
  `disconnect(handler_id)` removes it, and `send(message)` passes the message
  to every connected callback.
- `yewchat.websocket.WebsocketService(event_bus, url)`: `try_send(message)`
  queues an outgoing frame without waiting. It raises `SendError` when the
  service is closed or when 1000 frames are already waiting. The coroutine
  `run()` connects, sends the queued frames and publishes incoming frames on
  the bus. Binary frames that are not valid UTF-8 are dropped. The coroutine
  `close()` stops the queue and closes the connection.
- `yewchat.login.Login(user)`: `on_input(value)` records the typed name.
  `on_click()` stores it on the user and returns `Route.CHAT`. It returns
  `None` while the name is empty.
- `yewchat.chat.Chat(user, service, event_bus)`: registers the user and
  subscribes to the bus. `handle_message(text)` applies a frame and returns
  whether the view changed. `submit_message(text)` sends a chat message.
  `view()` renders the view.

## What it does not do

The views produce HTML strings only. Nothing in the package serves them to a
browser or handles clicks on them. The `yewchat` command prints incoming
messages but not the list of online users. The package contains no chat
server, so it needs one to connect to.