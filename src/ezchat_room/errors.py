"""
ezchat-room error types.

None of these are raised past a RoomSession: they are written to the
session's error cells instead.
"""

from typing import Any, Optional


class EzChatError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class ConfigError(EzChatError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("config_error", message, details)


class BootstrapFailure(EzChatError):
    """Initial history fetch or transport open failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__("bootstrap_failure", message, cause=cause)


class NoMoreHistory(EzChatError):
    def __init__(self, message: str = "No more messages to fetch"):
        super().__init__("no_more_history", message)


class FetchMoreFailure(EzChatError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__("fetch_more_failure", message, cause=cause)


class TransportFault(EzChatError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__("transport_fault", message, cause=cause)


class PayloadError(EzChatError):
    """Application-level `error` event received over a healthy transport."""

    def __init__(self, message: str):
        super().__init__("payload_error", message)


class SendBeforeReady(EzChatError):
    def __init__(self, message: str = "sendMessage called before connecting to websocket"):
        super().__init__("send_before_ready", message)


class TokenRefreshFailure(EzChatError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__("token_refresh_failure", message, cause=cause)
