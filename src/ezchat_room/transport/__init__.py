from ezchat_room.transport.base import ChatRoomTransport, MessageFetcher, RoomConnection, TransportHandlers
from ezchat_room.transport.connection import ChatRoomConnection

__all__ = [
    "ChatRoomConnection",
    "ChatRoomTransport",
    "MessageFetcher",
    "RoomConnection",
    "TransportHandlers",
]
