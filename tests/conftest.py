"""Fake collaborators shared by the unit tests."""

import asyncio
from typing import Any, Optional, Union

import pytest

from ezchat_room.models.message import ChatMessage, MessagePage
from ezchat_room.transport.base import TransportHandlers


def msgs(*ids: Any) -> list[ChatMessage]:
    return [ChatMessage(id=i) for i in ids]


def ids_of(messages: list[ChatMessage]) -> list[Any]:
    return [m.id for m in messages]


class FakeConnection:
    def __init__(self) -> None:
        self.sent: list[str] = []
        self.fail: Optional[Exception] = None

    async def send_message(self, text: str) -> None:
        if self.fail is not None:
            raise self.fail
        self.sent.append(text)


class FakeTransport:
    """In-memory fetch + push collaborator.

    `pages` maps a cursor to the page (or exception) returned for it; the
    initial fetch (cursor None) returns `initial`. Set `gate` to hold every
    fetch until the event is set.
    """

    def __init__(
        self,
        initial: Union[MessagePage, Exception, None] = None,
        pages: Optional[dict[str, Union[MessagePage, Exception]]] = None,
    ) -> None:
        self.initial = initial if initial is not None else MessagePage()
        self.pages = pages or {}
        self.gate: Optional[asyncio.Event] = None
        self.fetch_calls: list[tuple[Optional[str], Optional[int]]] = []
        self.connect_calls = 0
        self.connect_error: Optional[Exception] = None
        self.handlers: Optional[TransportHandlers] = None
        self.connection = FakeConnection()
        self.refresh_calls = 0
        self.refresh_error: Optional[Exception] = None

    async def fetch_messages(self, cursor: Optional[str] = None, amount: Optional[int] = None) -> MessagePage:
        self.fetch_calls.append((cursor, amount))
        if self.gate is not None:
            await self.gate.wait()
        # Always suspend once, like a real request would
        await asyncio.sleep(0)
        result = self.initial if cursor is None else self.pages[cursor]
        if isinstance(result, Exception):
            raise result
        return result

    def connect_websocket(self, handlers: TransportHandlers) -> FakeConnection:
        self.connect_calls += 1
        if self.connect_error is not None:
            raise self.connect_error
        self.handlers = handlers
        return self.connection

    async def refresh_token(self) -> None:
        self.refresh_calls += 1
        if self.refresh_error is not None:
            raise self.refresh_error

    # Drive the push side the way a websocket would
    def open(self) -> None:
        assert self.handlers is not None
        self.handlers.on_open()

    def close(self) -> None:
        assert self.handlers is not None
        self.handlers.on_close()

    def push(self, raw: dict[str, Any]) -> None:
        assert self.handlers is not None
        self.handlers.on_message(raw)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport(initial=MessagePage(messages=msgs(1, 2), next_cursor="c1"))
