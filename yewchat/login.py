"""The login view: pick a username, then go to the chat."""

from __future__ import annotations

from html import escape
from typing import Optional

from yewchat.routes import Route, User, path_for_route

_INPUT_CLASS = (
    "rounded-l-lg p-4 border-t mr-0 border-b border-l text-gray-800 "
    "border-gray-200 bg-white"
)
_BUTTON_CLASS = (
    "px-8 rounded-r-lg bg-violet-600 text-white font-bold p-4 uppercase "
    "border-violet-600 border-t border-b border-r"
)


class Login:
    """Holds the typed username and stores it on the shared user when confirmed."""

    def __init__(self, user: User) -> None:
        self.user = user
        self.username = ""

    @property
    def disabled(self) -> bool:
        """Whether the confirm button is disabled."""
        return len(self.username) < 1

    def on_input(self, value: str) -> None:
        """Record the current content of the username field."""
        self.username = value

    def on_click(self) -> Optional[Route]:
        """Store the username and return the route to go to, or None if disabled."""
        if self.disabled:
            return None
        self.user.username = self.username
        return Route.CHAT

    def view(self) -> str:
        """Render the view as HTML."""
        disabled = " disabled" if self.disabled else ""
        href = escape(path_for_route(Route.CHAT))
        return (
            '<div class="bg-gray-800 flex w-screen">'
            '<div class="container mx-auto flex flex-col justify-center items-center">'
            '<form class="m-4 flex">'
            f'<input class="{_INPUT_CLASS}" placeholder="Username"/>'
            f'<a href="{href}">'
            f'<button class="{_BUTTON_CLASS}"{disabled}>Go Chatting!</button>'
            "</a>"
            "</form>"
            "</div>"
            "</div>"
        )