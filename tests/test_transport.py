"""Default collaborators: REST page fetch and websocket URL building."""

import json

import httpx
import pytest

from ezchat_room.errors import EzChatError
from ezchat_room.transport.connection import ChatRoomConnection
from ezchat_room.transport.http import HttpClient
from ezchat_room.transport.websocket import websocket_url


def make_connection(handler, tokens=("tok-1",)):
    issued = list(tokens)
    calls = []

    async def auth() -> str:
        calls.append(1)
        return issued[min(len(calls), len(issued)) - 1]

    conn = ChatRoomConnection(
        42, auth, base_url="https://chat.example.com/",
        http_transport=httpx.MockTransport(handler),
    )
    return conn, calls


class TestFetchMessages:
    @pytest.mark.asyncio
    async def test_requests_page_with_cursor_and_token(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={
                "status": "success",
                "data": {"messages": [{"id": 5, "text": "hi"}], "nextCursor": "c9"},
            })

        conn, auth_calls = make_connection(handler)
        page = await conn.fetch_messages("c8", 10)

        request = seen[0]
        assert request.url.path == "/api/rooms/42/messages"
        assert request.url.params["cursor"] == "c8"
        assert request.url.params["limit"] == "10"
        assert request.headers["Authorization"] == "Bearer tok-1"
        assert [m.id for m in page.messages] == [5]
        assert page.next_cursor == "c9"
        assert auth_calls == [1]
        await conn.close()

    @pytest.mark.asyncio
    async def test_first_page_omits_cursor_and_token_is_reused(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"messages": []})

        conn, auth_calls = make_connection(handler)
        page = await conn.fetch_messages()
        await conn.fetch_messages()

        assert "cursor" not in seen[0].url.params
        assert "limit" not in seen[0].url.params
        assert page.next_cursor is None
        assert auth_calls == [1]
        await conn.close()

    @pytest.mark.asyncio
    async def test_refresh_token_changes_bearer(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get("Authorization"))
            return httpx.Response(200, json={"messages": [], "nextCursor": ""})

        conn, _ = make_connection(handler, tokens=("old", "new"))
        await conn.fetch_messages()
        await conn.refresh_token()
        page = await conn.fetch_messages()

        assert seen == ["Bearer old", "Bearer new"]
        assert page.next_cursor is None
        await conn.close()

    @pytest.mark.asyncio
    async def test_http_error_raises_ezchat_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="internal")

        conn, _ = make_connection(handler)
        with pytest.raises(EzChatError) as exc:
            await conn.fetch_messages()
        assert exc.value.code == "http_error"
        assert exc.value.details == {"status_code": 500}
        await conn.close()


def test_unwrap_leaves_plain_payloads_alone():
    assert HttpClient._unwrap({"messages": []}) == {"messages": []}
    assert HttpClient._unwrap({"status": "success", "data": [1]}) == [1]
    assert json.dumps(HttpClient._unwrap([1, 2])) == "[1, 2]"


@pytest.mark.parametrize("base, expected", [
    ("https://chat.example.com", "wss://chat.example.com/api/rooms/3/ws?token=abc"),
    ("http://localhost:8000/", "ws://localhost:8000/api/rooms/3/ws?token=abc"),
    ("https://example.com/prefix", "wss://example.com/prefix/api/rooms/3/ws?token=abc"),
])
def test_websocket_url(base, expected):
    assert websocket_url(base, 3, "abc") == expected
