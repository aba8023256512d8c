"""
Room session: the object handed to a UI layer.

connect_to_room() merges configuration, builds the collaborators and
schedules the one-time bootstrap:

    fetch first page -> seed sequence + cursor -> open websocket -> attach

Everything the UI needs is an observable cell on the session. Commands never
raise; failures land on `error` or `loading_more_error`.
"""

import asyncio
import logging
from typing import Any, Optional

from ezchat_room.config import RoomConfig, build_config
from ezchat_room.errors import BootstrapFailure, TokenRefreshFailure
from ezchat_room.mapper import ConnectionStatus, TransportEventMapper
from ezchat_room.models.message import ChatMessage
from ezchat_room.pagination import PaginationController
from ezchat_room.sequence import MessageSequence
from ezchat_room.store import Readable
from ezchat_room.transport.base import ChatRoomTransport
from ezchat_room.transport.connection import ChatRoomConnection

logger = logging.getLogger(__name__)


class RoomSession:
    def __init__(self, room_id: int, config: RoomConfig, transport: ChatRoomTransport):
        self.room_id = room_id
        self.config = config
        self._transport = transport
        self._sequence = MessageSequence(config.reverse_messages, config.max_messages)
        self._pagination = PaginationController(transport, self._sequence)
        self._mapper = TransportEventMapper(self._sequence)
        self.bootstrap_task: Optional[asyncio.Task[None]] = None

    @property
    def messages(self) -> Readable[list[ChatMessage]]:
        return self._sequence.messages

    @property
    def status(self) -> Readable[ConnectionStatus]:
        return self._mapper.status

    @property
    def is_loading(self) -> Readable[bool]:
        return self._mapper.is_loading

    @property
    def is_connected(self) -> Readable[bool]:
        return self._mapper.is_connected

    @property
    def error(self) -> Readable[Optional[Exception]]:
        return self._mapper.error

    @property
    def is_loading_more_messages(self) -> Readable[bool]:
        return self._pagination.is_loading_more

    @property
    def loading_more_error(self) -> Readable[Optional[Exception]]:
        return self._pagination.error

    @property
    def has_more_messages(self) -> Readable[bool]:
        return self._pagination.has_more_messages

    @property
    def transport(self) -> ChatRoomTransport:
        return self._transport

    def start(self) -> "asyncio.Task[None]":
        """Schedule the bootstrap on the running loop (once)."""
        if self.bootstrap_task is None:
            self._mapper.begin_loading()
            loop = asyncio.get_running_loop()
            self.bootstrap_task = loop.create_task(self._bootstrap())
        return self.bootstrap_task

    async def _bootstrap(self) -> None:
        try:
            page = await self._transport.fetch_messages(None, self.config.messages_per_page)
        except Exception as e:
            logger.error(f"Initial message fetch for room {self.room_id} failed: {e}")
            self._mapper.bootstrap_failed(BootstrapFailure(f"Failed to fetch messages: {e}", cause=e))
            return

        self._sequence.seed_initial_page(page.messages)
        self._pagination.seed(page.next_cursor)

        try:
            connection = self._transport.connect_websocket(self._mapper.handlers())
        except Exception as e:
            logger.error(f"Opening websocket for room {self.room_id} failed: {e}")
            self._mapper.bootstrap_failed(BootstrapFailure(f"Failed to open websocket: {e}", cause=e))
            return
        self._mapper.attach(connection)

    async def send_message(self, text: str) -> bool:
        return await self._mapper.send_message(text)

    async def fetch_more_messages(self, amount: Optional[int] = None) -> bool:
        return await self._pagination.fetch_more(amount or self.config.messages_per_page)

    async def refresh_token(self) -> bool:
        try:
            await self._transport.refresh_token()
        except Exception as e:
            logger.error(f"Token refresh failed: {e}")
            self._mapper.error.set(TokenRefreshFailure(f"Failed to refresh token: {e}", cause=e))
            return False
        return True

    def __repr__(self) -> str:
        return f"RoomSession(room_id={self.room_id!r}, status={self._mapper.status.get().value!r})"


def connect_to_room(
    room_id: int,
    config: Optional[Any] = None,
    *,
    transport: Optional[ChatRoomTransport] = None,
    **overrides: Any,
) -> RoomSession:
    """Create a session for `room_id` and start bootstrapping it.

    Must be called from a running event loop. `config` may be a RoomConfig
    or a dict of options; keyword overrides win over both. Raises ConfigError
    for invalid options, nothing else.
    """
    cfg = build_config(config, **overrides)
    if transport is None:
        transport = ChatRoomConnection(room_id, cfg.resolve_auth_function(), base_url=cfg.base_url)
    session = RoomSession(room_id, cfg, transport)
    session.start()
    return session
