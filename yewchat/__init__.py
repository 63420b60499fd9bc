"""WebSocket chat client: login and chat views, an event bus and a command-line session."""

__version__ = "0.1.0"