"""
ChatRoomConnection: default fetch + push collaborator for one room.
"""

import logging
from typing import Optional

import httpx

from ezchat_room.config import DEFAULT_BASE_URL, AuthFunction
from ezchat_room.models.events import PayloadType
from ezchat_room.models.message import MessagePage
from ezchat_room.transport.base import TransportHandlers
from ezchat_room.transport.http import HttpClient
from ezchat_room.transport.websocket import WebSocketClient

logger = logging.getLogger(__name__)


class WebSocketRoomConnection:
    """Send handle returned by `ChatRoomConnection.connect_websocket`."""

    def __init__(self, client: WebSocketClient):
        self._client = client

    async def send_message(self, text: str) -> None:
        await self._client.send({"payloadType": PayloadType.MESSAGE, "payload": {"text": text}})


class ChatRoomConnection:
    def __init__(
        self,
        room_id: int,
        auth_function: AuthFunction,
        base_url: str = DEFAULT_BASE_URL,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._room_id = room_id
        self._auth_function = auth_function
        self._token: Optional[str] = None
        self.http = HttpClient(base_url=base_url, transport=http_transport)
        self._ws = WebSocketClient(base_url, room_id)

    async def _ensure_token(self) -> str:
        if self._token is None:
            await self.refresh_token()
        return self._token or ""

    async def refresh_token(self) -> None:
        """Ask the auth function for a fresh token and use it from now on."""
        token = await self._auth_function()
        self._token = token
        self.http.set_token(token)
        self._ws.set_token(token)

    async def fetch_messages(self, cursor: Optional[str] = None, amount: Optional[int] = None) -> MessagePage:
        await self._ensure_token()
        data = await self.http.get(
            f"/rooms/{self._room_id}/messages",
            params={"cursor": cursor, "limit": amount},
        )
        return MessagePage.model_validate(data)

    def connect_websocket(self, handlers: TransportHandlers) -> WebSocketRoomConnection:
        # The token is resolved by the bootstrap fetch that always precedes this
        if self._token is None:
            logger.warning(f"Opening websocket for room {self._room_id} without a token")
        self._ws.start(handlers)
        return WebSocketRoomConnection(self._ws)

    async def close(self) -> None:
        await self._ws.disconnect()
        await self.http.close()
