from ezchat_room.models.message import ChatMessage, MessageId, MessagePage
from ezchat_room.models.events import (
    DeleteMessageEvent,
    ErrorEvent,
    JoinEvent,
    LeaveEvent,
    MessageEvent,
    PayloadType,
    RoomEvent,
    parse_event,
)

__all__ = [
    "ChatMessage",
    "MessageId",
    "MessagePage",
    "DeleteMessageEvent",
    "ErrorEvent",
    "JoinEvent",
    "LeaveEvent",
    "MessageEvent",
    "PayloadType",
    "RoomEvent",
    "parse_event",
]
