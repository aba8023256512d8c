"""
Chat message and history page models.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

MessageId = Union[int, str]


class ChatMessage(BaseModel):
    """A chat message. Only `id` is interpreted; everything else is carried through."""
    id: MessageId

    model_config = {"extra": "allow"}


class MessagePage(BaseModel):
    """One page of history as returned by the fetch collaborator."""
    messages: list[ChatMessage] = Field(default_factory=list)
    next_cursor: Optional[str] = Field(default=None, alias="nextCursor")

    model_config = {"populate_by_name": True}

    @field_validator("next_cursor", mode="before")
    @classmethod
    def _empty_cursor_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None
