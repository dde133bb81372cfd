"""
Chat log for a room.

Append-only, ordered by arrival. Outgoing messages are not appended
locally; they show up when the server echoes them back, so every member
sees the same order.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from utils.constants import CLIENT_EVENTS
from utils.helpers import clean_chat_message, now_ms
from .models import ChatEntry

logger = logging.getLogger(__name__)

ChatListener = Callable[[ChatEntry], None]

class ChatLog:
    """Ordered chat entries for the current room."""

    def __init__(self, connection, room_session, clock_ms: Callable[[], int] = now_ms):
        """
        Initialize chat log.

        Args:
            connection: ConnectionManager used to send messages
            room_session: RoomSession consulted for the active room
            clock_ms: Millisecond clock used for system entries
        """
        self.connection = connection
        self.room_session = room_session
        self.clock_ms = clock_ms
        self._entries: List[ChatEntry] = []
        self._last_system_id = 0
        self.listeners: List[ChatListener] = []

    @property
    def entries(self) -> Tuple[ChatEntry, ...]:
        """Snapshot of the log; callers cannot mutate it."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add_listener(self, listener: ChatListener) -> None:
        self.listeners.append(listener)

    def append(self, entry: ChatEntry) -> None:
        """Append one entry. The only way the log grows."""
        self._entries.append(entry)
        for listener in list(self.listeners):
            try:
                listener(entry)
            except Exception as e:
                logger.error(f"Error in chat listener: {e}")

    def append_system(self, message: str) -> ChatEntry:
        """Synthesize and append a system entry."""
        timestamp = self.clock_ms()
        # Several notices can land in the same millisecond
        entry_id = max(timestamp, self._last_system_id + 1)
        self._last_system_id = entry_id
        entry = ChatEntry.system(entry_id, message, timestamp)
        self.append(entry)
        return entry

    def seed(self, raw_entries: Optional[List[Dict[str, Any]]]) -> None:
        """Start the log from a join snapshot; listeners see each seeded entry."""
        self._entries = []
        for raw in raw_entries or []:
            self.append(ChatEntry.from_dict(raw))
        logger.debug(f"Chat seeded with {len(self._entries)} entries")

    def clear(self) -> None:
        """Drop the log with the room it belongs to."""
        self._entries = []

    def handle_chat_message(self, payload: Dict[str, Any]) -> None:
        """Inbound chatMessage: the payload is the full entry."""
        self.append(ChatEntry.from_dict(payload))

    def send_message(self, message: Optional[str]) -> Tuple[bool, str]:
        """
        Send a chat message to the room.

        Args:
            message: Raw text typed by the user

        Returns:
            tuple: (success, message)
        """
        text = clean_chat_message(message)
        if text is None:
            return False, "Message cannot be empty"
        if not self.room_session.in_room:
            return False, "Not in a room"

        if not self.connection.send(CLIENT_EVENTS['CHAT_MESSAGE'], {'message': text}):
            return False, "Not connected"
        return True, "Message sent"
