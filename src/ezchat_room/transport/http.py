"""
REST HTTP client for the ezchat API: history pages.
"""

from typing import Any, Optional

import httpx

from ezchat_room.config import DEFAULT_BASE_URL
from ezchat_room.errors import EzChatError

USER_AGENT = "ezchat-room/0.1.0"


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}/api",
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=30.0,
            transport=transport,
        )

    def set_token(self, token: Optional[str]) -> None:
        self._token = token

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _unwrap(json_data: Any) -> Any:
        """Unwrap `{ "status": "success", "data": <actual_data> }` responses."""
        if isinstance(json_data, dict) and "status" in json_data and "data" in json_data:
            return json_data["data"]
        return json_data

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        resp = await self._client.get(path, params=query, headers=self._auth_headers())
        if resp.status_code >= 400:
            raise EzChatError("http_error", f"HTTP {resp.status_code}: {resp.text[:200]}",
                              details={"status_code": resp.status_code})
        return self._unwrap(resp.json())

    async def close(self) -> None:
        await self._client.aclose()
