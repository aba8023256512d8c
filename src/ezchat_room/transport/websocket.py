"""
Websocket push connection for a single room.

Connection: wss://{host}/api/rooms/{room_id}/ws?token={token}.
Frames are JSON objects tagged by `payloadType`. Lifecycle is reported
through TransportHandlers: a clean close fires only `on_close`, a failed
connect or an abnormal close fires `on_error` and then `on_close`.
"""

import asyncio
import json
import logging
from typing import Any, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

import websockets

from ezchat_room.errors import TransportFault
from ezchat_room.transport.base import TransportHandlers

logger = logging.getLogger(__name__)


def websocket_url(base_url: str, room_id: int, token: str) -> str:
    parts = urlsplit(base_url.rstrip("/"))
    scheme = "ws" if parts.scheme == "http" else "wss"
    path = f"{parts.path}/api/rooms/{room_id}/ws"
    return urlunsplit((scheme, parts.netloc, path, urlencode({"token": token}), ""))


class WebSocketClient:
    def __init__(self, base_url: str, room_id: int, token: str = ""):
        self._base_url = base_url
        self._room_id = room_id
        self._token = token
        self._ws: Optional[Any] = None
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def connected(self) -> bool:
        return self._ws is not None

    def set_token(self, token: str) -> None:
        """Token used the next time a connection is opened."""
        self._token = token

    def start(self, handlers: TransportHandlers) -> None:
        """Schedule the connection on the running loop. Returns immediately."""
        if self._task is not None and not self._task.done():
            return
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(handlers))

    async def _run(self, handlers: TransportHandlers) -> None:
        url = websocket_url(self._base_url, self._room_id, self._token)
        try:
            async with websockets.connect(url) as ws:
                self._ws = ws
                handlers.on_open()
                async for frame in ws:
                    self._dispatch(frame, handlers)
        except websockets.ConnectionClosedOK:
            pass
        except Exception as e:
            handlers.on_error(e)
        finally:
            self._ws = None
            handlers.on_close()

    @staticmethod
    def _dispatch(frame: Any, handlers: TransportHandlers) -> None:
        try:
            data = json.loads(frame)
        except (TypeError, ValueError):
            logger.warning(f"Dropping non-JSON frame: {str(frame)[:200]}")
            return
        if not isinstance(data, dict):
            logger.warning(f"Dropping non-object frame: {str(frame)[:200]}")
            return
        try:
            handlers.on_message(data)
        except Exception:
            # A failing subscriber must not end the connection
            logger.exception("Room event handler failed")

    async def send(self, payload: dict[str, Any]) -> None:
        if self._ws is None:
            raise TransportFault("Websocket not connected")
        await self._ws.send(json.dumps(payload))

    async def disconnect(self) -> None:
        task, self._task = self._task, None
        if self._ws is not None:
            await self._ws.close()
        elif task is not None:
            # Still connecting
            task.cancel()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
