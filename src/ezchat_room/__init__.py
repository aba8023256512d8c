"""
ezchat-room: live chat room state for Python clients.

Merges REST history pages with the websocket push stream into one ordered,
observable message list.
"""

from ezchat_room.room import RoomSession, connect_to_room
from ezchat_room.config import RoomConfig
from ezchat_room.mapper import ConnectionStatus
from ezchat_room.store import Derived, Readable, Writable
from ezchat_room.models.message import ChatMessage, MessagePage
from ezchat_room.transport.connection import ChatRoomConnection
from ezchat_room.errors import (
    BootstrapFailure,
    ConfigError,
    EzChatError,
    FetchMoreFailure,
    NoMoreHistory,
    PayloadError,
    SendBeforeReady,
    TokenRefreshFailure,
    TransportFault,
)

__version__ = "0.1.0"
__all__ = [
    "connect_to_room",
    "RoomSession",
    "RoomConfig",
    "ConnectionStatus",
    "Readable",
    "Writable",
    "Derived",
    "ChatMessage",
    "MessagePage",
    "ChatRoomConnection",
    "EzChatError",
    "ConfigError",
    "BootstrapFailure",
    "NoMoreHistory",
    "FetchMoreFailure",
    "TransportFault",
    "PayloadError",
    "SendBeforeReady",
    "TokenRefreshFailure",
]
