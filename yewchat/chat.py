"""The chat view: online users, the message list and the input box."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from html import escape
from typing import List, Optional, Protocol

from yewchat.event_bus import EventBus
from yewchat.routes import User
from yewchat.websocket import SendError

log = logging.getLogger(__name__)

_AVATAR_URL = "https://avatars.dicebear.com/api/adventurer-neutral/{}.svg"
_FALLBACK_AVATAR_URL = "https://avatars.dicebear.com/api/initials/{}.svg"


class MsgType(enum.Enum):
    """Kinds of frames exchanged with the chat server."""

    USERS = "users"
    REGISTER = "register"
    MESSAGE = "message"


@dataclass
class WebSocketMessage:
    """A frame exchanged with the chat server."""

    message_type: MsgType
    data_array: Optional[List[str]] = None
    data: Optional[str] = None


@dataclass
class MessageData:
    """A chat line: who sent it and what it says."""

    sender: str
    message: str


@dataclass
class UserProfile:
    """An online user and the avatar shown for them."""

    name: str
    avatar: str


class MessageSink(Protocol):
    def try_send(self, message: str) -> None: ...


def avatar_url(name: str) -> str:
    """Return the avatar image address for an online user."""
    return _AVATAR_URL.format(name)


def fallback_avatar_url(name: str) -> str:
    """Return the avatar image address for a sender not in the user list."""
    return _FALLBACK_AVATAR_URL.format(name)


def encode_message(message: WebSocketMessage) -> str:
    """Serialise ``message`` to its JSON wire form."""
    payload = {
        "messageType": message.message_type.value,
        "dataArray": message.data_array,
        "data": message.data,
    }
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def _load_object(text: str, what: str) -> dict:
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError(f"{what} must be a JSON object")
    return payload


def decode_message(text: str) -> WebSocketMessage:
    """Parse a JSON frame; raise ValueError if it is malformed."""
    payload = _load_object(text, "message")
    if "messageType" not in payload:
        raise ValueError("missing field messageType")
    message_type = MsgType(payload["messageType"])

    data_array = payload.get("dataArray")
    if data_array is not None:
        if not isinstance(data_array, list) or not all(
            isinstance(item, str) for item in data_array
        ):
            raise ValueError("dataArray must be a list of strings")

    data = payload.get("data")
    if data is not None and not isinstance(data, str):
        raise ValueError("data must be a string")

    return WebSocketMessage(message_type, data_array=data_array, data=data)


def _decode_message_data(text: str) -> MessageData:
    payload = _load_object(text, "message data")
    sender = payload.get("from")
    message = payload.get("message")
    if not isinstance(sender, str) or not isinstance(message, str):
        raise ValueError("message data needs string fields from and message")
    return MessageData(sender=sender, message=message)


@dataclass
class _Users:
    profiles: List[UserProfile] = field(default_factory=list)


class Chat:
    """Registers the user with the server and tracks users and messages."""

    def __init__(self, user: User, service: MessageSink, event_bus: EventBus) -> None:
        self.user = user
        self.service = service
        self.event_bus = event_bus
        self.users: List[UserProfile] = []
        self.messages: List[MessageData] = []

        register = WebSocketMessage(MsgType.REGISTER, data=user.username)
        try:
            service.try_send(encode_message(register))
        except SendError:
            pass
        else:
            log.debug("message sent successfully")

        self.handler_id = event_bus.connect(self.handle_message)

    def handle_message(self, text: str) -> bool:
        """Apply a frame from the server; return whether the view changed."""
        message = decode_message(text)
        if message.message_type is MsgType.USERS:
            self.users = [
                UserProfile(name=name, avatar=avatar_url(name))
                for name in message.data_array or []
            ]
            return True
        if message.message_type is MsgType.MESSAGE:
            if message.data is None:
                raise ValueError("message frame carries no data")
            self.messages.append(_decode_message_data(message.data))
            return True
        return False

    def submit_message(self, text: str) -> bool:
        """Send ``text`` as a chat message; the view itself does not change."""
        outgoing = WebSocketMessage(MsgType.MESSAGE, data=text)
        try:
            self.service.try_send(encode_message(outgoing))
        except SendError as exc:
            log.debug("error sending to channel: %r", exc)
        return False

    def _avatar_for(self, sender: str) -> str:
        return next(
            (profile.avatar for profile in self.users if profile.name == sender),
            fallback_avatar_url(sender),
        )

    def _user_html(self, profile: UserProfile) -> str:
        return (
            '<div class="flex items-center mb-3 hover:bg-gray-700 p-2 rounded-lg transition">'
            f'<img class="w-10 h-10 rounded-full mr-3" src="{escape(profile.avatar)}" alt="avatar"/>'
            f'<div class="text-sm font-medium">{escape(profile.name)}</div>'
            "</div>"
        )

    def _message_html(self, item: MessageData) -> str:
        if item.message.endswith(".gif"):
            body = f'<img class="mt-2 rounded" src="{escape(item.message)}"/>'
        else:
            body = f"<p>{escape(item.message)}</p>"
        return (
            '<div class="flex items-start space-x-3 bg-white p-4 rounded-lg shadow w-fit max-w-xl">'
            f'<img class="w-10 h-10 rounded-full" src="{escape(self._avatar_for(item.sender))}" alt="avatar"/>'
            "<div>"
            f'<div class="font-semibold text-sm mb-1">{escape(item.sender)}</div>'
            f'<div class="text-sm text-gray-700">{body}</div>'
            "</div>"
            "</div>"
        )

    def view(self) -> str:
        """Render the view as HTML."""
        users = "".join(self._user_html(profile) for profile in self.users)
        messages = "".join(self._message_html(item) for item in self.messages)
        return (
            '<div class="flex w-screen h-screen font-sans bg-gray-100 text-gray-800">'
            '<div class="w-64 bg-gray-800 text-white border-r border-gray-700 p-4">'
            '<h2 class="text-lg font-semibold mb-4">👥 Online Users</h2>'
            f"{users}"
            "</div>"
            '<div class="flex flex-col flex-grow">'
            '<div class="h-16 flex items-center px-6 border-b border-gray-300 bg-gray-100 shadow-sm">'
            '<h1 class="text-xl font-semibold">💬 Chat Room</h1>'
            "</div>"
            '<div class="flex-grow overflow-y-auto p-6 space-y-4 bg-gray-100">'
            f"{messages}"
            "</div>"
            '<div class="h-16 bg-white border-t border-gray-200 flex items-center px-4">'
            '<input type="text" placeholder="Type your message..." '
            'class="flex-grow bg-gray-100 rounded-full px-4 py-2 text-sm outline-none '
            'focus:ring-2 focus:ring-blue-500" name="message" required/>'
            '<button class="ml-3 bg-blue-600 hover:bg-blue-500 text-white rounded-full '
            'w-10 h-10 flex justify-center items-center shadow">'
            '<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg" class="w-5 h-5 fill-current">'
            '<path d="M0 0h24v24H0z" fill="none"></path>'
            '<path d="M2.01 21L23 12 2.01 3 2 10l15 2-15 2z"></path>'
            "</svg>"
            "</button>"
            "</div>"
            "</div>"
            "</div>"
        )