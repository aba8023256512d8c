"""
Websocket event models: every frame pushed by the room is tagged by
`payloadType`.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ezchat_room.models.message import ChatMessage, MessageId


class PayloadType:
    MESSAGE = "message"
    DELETE_MESSAGE = "delete_message"
    JOIN = "join"
    LEAVE = "leave"
    ERROR = "error"


class DeleteMessagePayload(BaseModel):
    message_id: MessageId = Field(alias="messageId")

    model_config = {"populate_by_name": True}


class ErrorPayload(BaseModel):
    message: str


class _Event(BaseModel):
    model_config = {"populate_by_name": True}


class MessageEvent(_Event):
    payload_type: Literal["message"] = Field(default="message", alias="payloadType")
    payload: ChatMessage


class DeleteMessageEvent(_Event):
    payload_type: Literal["delete_message"] = Field(default="delete_message", alias="payloadType")
    payload: DeleteMessagePayload


class JoinEvent(_Event):
    payload_type: Literal["join"] = Field(default="join", alias="payloadType")
    payload: Optional[dict[str, Any]] = None


class LeaveEvent(_Event):
    payload_type: Literal["leave"] = Field(default="leave", alias="payloadType")
    payload: Optional[dict[str, Any]] = None


class ErrorEvent(_Event):
    payload_type: Literal["error"] = Field(default="error", alias="payloadType")
    payload: ErrorPayload


RoomEvent = Annotated[
    Union[MessageEvent, DeleteMessageEvent, JoinEvent, LeaveEvent, ErrorEvent],
    Field(discriminator="payload_type"),
]

_room_event_adapter: TypeAdapter[RoomEvent] = TypeAdapter(RoomEvent)


def parse_event(raw: dict[str, Any]) -> Optional[RoomEvent]:
    """Parse an incoming websocket frame. Returns None if invalid."""
    try:
        return _room_event_adapter.validate_python(raw)
    except ValidationError:
        return None
