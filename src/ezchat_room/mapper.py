"""
Transport event mapper: turns websocket lifecycle callbacks and pushed
frames into sequence mutations and status-cell updates.

Connection status state machine:

    IDLE -> LOADING -> {OPEN, CLOSED, ERRORED}
    OPEN -> {CLOSED, ERRORED}

CLOSED and ERRORED are terminal for a session; a new session is needed to
reconnect. Payload events are applied in any status.
"""

import logging
from enum import Enum
from typing import Any, Optional

from ezchat_room.errors import PayloadError, SendBeforeReady, TransportFault
from ezchat_room.models.events import (
    DeleteMessageEvent,
    ErrorEvent,
    JoinEvent,
    LeaveEvent,
    MessageEvent,
    RoomEvent,
    parse_event,
)
from ezchat_room.sequence import MessageSequence
from ezchat_room.store import Derived, Writable
from ezchat_room.transport.base import RoomConnection, TransportHandlers

logger = logging.getLogger(__name__)


class ConnectionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    OPEN = "open"
    CLOSED = "closed"
    ERRORED = "errored"


ALLOWED_TRANSITIONS: dict[ConnectionStatus, frozenset[ConnectionStatus]] = {
    ConnectionStatus.IDLE: frozenset({ConnectionStatus.LOADING}),
    ConnectionStatus.LOADING: frozenset({ConnectionStatus.OPEN, ConnectionStatus.CLOSED, ConnectionStatus.ERRORED}),
    ConnectionStatus.OPEN: frozenset({ConnectionStatus.CLOSED, ConnectionStatus.ERRORED}),
    ConnectionStatus.CLOSED: frozenset(),
    ConnectionStatus.ERRORED: frozenset(),
}


class TransportEventMapper:
    def __init__(self, sequence: MessageSequence):
        self._sequence = sequence
        self._connection: Optional[RoomConnection] = None
        self.status: Writable[ConnectionStatus] = Writable(ConnectionStatus.IDLE)
        self.error: Writable[Optional[Exception]] = Writable(None)
        self.is_connected: Derived[ConnectionStatus, bool] = Derived(
            self.status, lambda s: s is ConnectionStatus.OPEN,
        )
        self.is_loading: Derived[ConnectionStatus, bool] = Derived(
            self.status, lambda s: s is ConnectionStatus.LOADING,
        )

    def handlers(self) -> TransportHandlers:
        return TransportHandlers(
            on_open=self.on_open,
            on_close=self.on_close,
            on_error=self.on_error,
            on_message=self.on_message,
        )

    def attach(self, connection: RoomConnection) -> None:
        self._connection = connection

    def begin_loading(self) -> None:
        self._transition(ConnectionStatus.LOADING)

    def bootstrap_failed(self, error: Exception) -> None:
        self.error.set(error)
        self._transition(ConnectionStatus.ERRORED)

    def on_open(self) -> None:
        if self._transition(ConnectionStatus.OPEN):
            self.error.set(None)

    def on_close(self) -> None:
        self._transition(ConnectionStatus.CLOSED)

    def on_error(self, err: BaseException) -> None:
        logger.error(f"Websocket error: {err}")
        self.error.set(TransportFault(f"A websocket error occurred: {err}", cause=err))
        self._transition(ConnectionStatus.ERRORED)

    def on_message(self, raw: dict[str, Any]) -> None:
        event = parse_event(raw)
        if event is None:
            logger.warning(f"Dropping unrecognised room event: {str(raw)[:200]}")
            return
        self.dispatch(event)

    def dispatch(self, event: RoomEvent) -> None:
        if isinstance(event, MessageEvent):
            self._sequence.push_live_message(event.payload)
        elif isinstance(event, DeleteMessageEvent):
            self._sequence.remove_message(event.payload.message_id)
        elif isinstance(event, (JoinEvent, LeaveEvent)):
            # Accepted but not rendered yet
            pass
        elif isinstance(event, ErrorEvent):
            self.error.set(PayloadError(event.payload.message))
        else:
            raise TypeError(f"Unhandled room event type: {type(event).__name__}")

    async def send_message(self, text: str) -> bool:
        """Send over the open connection. Records an error instead of raising."""
        if self._connection is None or self.status.get() is not ConnectionStatus.OPEN:
            self.error.set(SendBeforeReady())
            return False
        try:
            await self._connection.send_message(text)
        except Exception as e:
            logger.error(f"Send failed: {e}")
            self.error.set(TransportFault(f"Failed to send message: {e}", cause=e))
            return False
        return True

    def _transition(self, target: ConnectionStatus) -> bool:
        current = self.status.get()
        if target not in ALLOWED_TRANSITIONS[current]:
            logger.debug(f"Ignoring status transition {current.value} -> {target.value}")
            return False
        self.status.set(target)
        return True
