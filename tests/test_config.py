"""Configuration merging and auth resolution."""

import pytest

from ezchat_room.config import RoomConfig, build_config
from ezchat_room.errors import ConfigError


def test_camel_and_snake_case_options():
    cfg = build_config({"reverseMessages": True, "messages_per_page": 10})
    assert cfg.reverse_messages is True
    assert cfg.messages_per_page == 10
    assert cfg.max_messages == 200


def test_overrides_win_over_config():
    base = RoomConfig(reverse_messages=True, max_messages=50)
    cfg = build_config(base, max_messages=10)
    assert cfg.reverse_messages is True
    assert cfg.max_messages == 10


def test_max_messages_can_be_disabled():
    assert build_config(max_messages=None).max_messages is None


@pytest.mark.parametrize("bad", [{"max_messages": 0}, {"messagesPerPage": -1}, {"nope": 1}])
def test_invalid_options(bad):
    with pytest.raises(ConfigError) as exc:
        build_config(bad)
    assert exc.value.code == "config_error"


@pytest.mark.asyncio
async def test_auth_function_preferred_over_token():
    async def auth() -> str:
        return "from-function"

    cfg = build_config(auth_function=auth, auth_token="static")
    assert await cfg.resolve_auth_function()() == "from-function"


@pytest.mark.asyncio
async def test_static_token_fallback():
    assert await build_config(authToken="static").resolve_auth_function()() == "static"
    assert await build_config().resolve_auth_function()() == ""
