"""
Collaborator interfaces the room session consumes.

`ChatRoomConnection` in transport/connection.py is the default
implementation; tests and embedders can supply their own.
"""

from typing import Any, Callable, Optional, Protocol

from ezchat_room.models.message import MessagePage


class TransportHandlers:
    """Lifecycle and payload callbacks handed to `connect_websocket`."""
    __slots__ = ("on_open", "on_close", "on_error", "on_message")

    def __init__(
        self,
        on_open: Callable[[], None],
        on_close: Callable[[], None],
        on_error: Callable[[BaseException], None],
        on_message: Callable[[dict[str, Any]], None],
    ):
        self.on_open = on_open
        self.on_close = on_close
        self.on_error = on_error
        self.on_message = on_message


class MessageFetcher(Protocol):
    async def fetch_messages(self, cursor: Optional[str] = None, amount: Optional[int] = None) -> MessagePage:
        """Fetch one page of history, in chronological order regardless of caller policy."""
        ...


class RoomConnection(Protocol):
    async def send_message(self, text: str) -> None: ...


class ChatRoomTransport(MessageFetcher, Protocol):
    def connect_websocket(self, handlers: TransportHandlers) -> RoomConnection:
        """Start opening the push connection. Returns immediately; progress arrives via handlers."""
        ...

    async def refresh_token(self) -> None: ...
