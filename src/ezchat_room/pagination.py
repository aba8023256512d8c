"""
Backward pagination through room history.

Holds the opaque cursor and the pending-operation guard. At most one
fetch-more is in flight per session; a second call while one is pending is a
silent no-op. Live events keep flowing into the sequence while a page is
being fetched.
"""

import logging
from typing import Optional

from ezchat_room.errors import FetchMoreFailure, NoMoreHistory
from ezchat_room.sequence import MessageSequence
from ezchat_room.store import Derived, Writable
from ezchat_room.transport.base import MessageFetcher

logger = logging.getLogger(__name__)


class PaginationController:
    def __init__(self, fetcher: MessageFetcher, sequence: MessageSequence):
        self._fetcher = fetcher
        self._sequence = sequence
        self.cursor: Writable[Optional[str]] = Writable(None)
        self.is_loading_more: Writable[bool] = Writable(False)
        self.error: Writable[Optional[Exception]] = Writable(None)
        self.has_more_messages: Derived[Optional[str], bool] = Derived(self.cursor, lambda c: c is not None)

    def seed(self, cursor: Optional[str]) -> None:
        self.cursor.set(cursor or None)

    async def fetch_more(self, amount: int) -> bool:
        """Fetch the next older page and merge it.

        Returns True when a page was merged. Failures are recorded on
        `error`, never raised.
        """
        cursor = self.cursor.get()
        if cursor is None:
            self.error.set(NoMoreHistory())
            return False

        if self.is_loading_more.get():
            return False

        self.is_loading_more.set(True)
        try:
            page = await self._fetcher.fetch_messages(cursor, amount)
        except Exception as e:
            logger.error(f"Fetching older messages failed (cursor={cursor!r}): {e}")
            self.error.set(FetchMoreFailure(f"Failed to fetch more messages: {e}", cause=e))
            return False
        else:
            self._sequence.append_older_page(page.messages)
            self.cursor.set(page.next_cursor)
        finally:
            # Also runs on cancellation
            self.is_loading_more.set(False)

        self.error.set(None)
        return True
