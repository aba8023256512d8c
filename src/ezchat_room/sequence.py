"""
Message sequence: the canonical ordered list of room messages.

Orientation depends on `reverse_messages`:
- False: newest first. Live messages go to the front, older pages to the back.
- True:  newest last. Live messages go to the back, older pages (reversed)
  to the front.

Each mutation is a single cell update, so subscribers never observe a
half-applied merge.
"""

import logging
from typing import Optional

from ezchat_room.models.message import ChatMessage, MessageId
from ezchat_room.store import Writable

logger = logging.getLogger(__name__)


class MessageSequence:
    def __init__(self, reverse_messages: bool = False, max_messages: Optional[int] = None):
        self._reverse = reverse_messages
        self._max_messages = max_messages
        self.messages: Writable[list[ChatMessage]] = Writable([])

    def seed_initial_page(self, messages: list[ChatMessage]) -> None:
        page = list(messages)
        if self._reverse:
            page.reverse()
        self.messages.set(page)

    def append_older_page(self, messages: list[ChatMessage]) -> None:
        """Merge a page fetched through the cursor. Pages are trusted not to overlap."""
        page = list(messages)
        if self._reverse:
            page.reverse()
            self.messages.update(lambda prev: page + prev)
        else:
            self.messages.update(lambda prev: prev + page)

    def push_live_message(self, message: ChatMessage) -> None:
        """Insert a live message at the newest end, ignoring ids already present."""
        current = self.messages.get()
        if any(m.id == message.id for m in current):
            logger.debug(f"Ignoring duplicate live message {message.id!r}")
            return
        if self._reverse:
            updated = current + [message]
        else:
            updated = [message] + current
        self.messages.set(self._evict_oldest(updated, len(current)))

    def remove_message(self, message_id: MessageId) -> bool:
        """Remove the first message with this id. Returns False (and changes nothing) if absent."""
        current = self.messages.get()
        for index, message in enumerate(current):
            if message.id == message_id:
                self.messages.set(current[:index] + current[index + 1:])
                return True
        return False

    def ids(self) -> list[MessageId]:
        return [m.id for m in self.messages.get()]

    def __len__(self) -> int:
        return len(self.messages.get())

    def _evict_oldest(self, messages: list[ChatMessage], previous_length: int) -> list[ChatMessage]:
        if self._max_messages is None:
            return messages
        # Fetched history may exceed the cap; a push only displaces one entry then
        limit = max(self._max_messages, previous_length)
        if len(messages) <= limit:
            return messages
        overflow = len(messages) - limit
        logger.debug(f"Evicting {overflow} oldest message(s) over a limit of {limit}")
        if self._reverse:
            return messages[overflow:]
        return messages[:limit]
