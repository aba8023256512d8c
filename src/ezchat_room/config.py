"""
Room connection configuration and its documented defaults.
"""

from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, Field, ValidationError

from ezchat_room.errors import ConfigError

AuthFunction = Callable[[], Awaitable[str]]

DEFAULT_BASE_URL = "https://api.ezchat.io"
DEFAULT_MAX_MESSAGES = 200
DEFAULT_MESSAGES_PER_PAGE = 25


class RoomConfig(BaseModel):
    auth_function: Optional[AuthFunction] = Field(default=None, alias="authFunction")
    auth_token: Optional[str] = Field(default=None, alias="authToken")
    include_leave_join_messages: bool = Field(default=False, alias="includeLeaveJoinMessages")  # reserved
    reverse_messages: bool = Field(default=False, alias="reverseMessages")
    max_messages: Optional[int] = Field(default=DEFAULT_MAX_MESSAGES, gt=0, alias="maxMessages")
    messages_per_page: int = Field(default=DEFAULT_MESSAGES_PER_PAGE, gt=0, alias="messagesPerPage")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseUrl")

    model_config = {"populate_by_name": True, "extra": "forbid", "frozen": True}

    def resolve_auth_function(self) -> AuthFunction:
        """Prefer the auth function; fall back to the static token (or empty)."""
        if self.auth_function is not None:
            return self.auth_function
        token = self.auth_token or ""

        async def static_token() -> str:
            return token
        return static_token


def build_config(config: Optional[Any] = None, **overrides: Any) -> RoomConfig:
    """Merge a RoomConfig, a dict (snake_case or camelCase) and keyword overrides over the defaults."""
    if isinstance(config, RoomConfig):
        data: dict[str, Any] = config.model_dump(exclude_unset=True)
    else:
        data = dict(config or {})
    data.update(overrides)
    try:
        return RoomConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid room configuration: {e}", details={"errors": e.errors()}) from e
