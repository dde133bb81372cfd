"""
Room session for the Watch Party client.

Tracks which room this client is in, whether it is the host and who else
is in the room. Membership is authoritative on the server: the local
member list is replaced wholesale on every notification, never patched.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from utils.constants import CLIENT_EVENTS, SYSTEM_MESSAGES
from utils.helpers import validate_nickname, validate_room_code
from .models import Member, NavigationIntent, SessionState, parse_members
from .navigation import build_watch_url, strip_room_param

logger = logging.getLogger(__name__)

class RoomSession:
    """
    Membership state machine.

    States: disconnected -> connected_no_room -> host_in_room / member_in_room.
    Host status is part of the state rather than a separate flag.
    """

    def __init__(self, connection, chat_log=None):
        """
        Initialize room session.

        Args:
            connection: ConnectionManager for outbound requests and own id
            chat_log: ChatLog receiving system notices and join snapshots
        """
        self.connection = connection
        self.chat_log = chat_log
        self.state = SessionState.DISCONNECTED
        self.room_code: Optional[str] = None
        self.members: List[Member] = []
        self.last_error: Optional[str] = None

    @property
    def is_host(self) -> bool:
        return self.state is SessionState.HOST_IN_ROOM

    @property
    def in_room(self) -> bool:
        return self.state.in_room

    # Outbound requests

    def create_room(self, nickname: Optional[str]) -> Tuple[bool, str]:
        """
        Ask the server for a new room with this client as host.

        Args:
            nickname: Display name of the local user

        Returns:
            tuple: (success, message)
        """
        is_valid, error_msg = validate_nickname(nickname)
        if not is_valid:
            return False, error_msg
        if not self.connection.is_connected:
            return False, "Not connected"

        self.connection.send(CLIENT_EVENTS['CREATE_ROOM'], {'nickname': nickname})
        logger.info(f"Requested new room as {nickname}")
        return True, "Room requested"

    def join_room(self, code: Optional[str], nickname: Optional[str]) -> Tuple[bool, str]:
        """
        Ask the server to join an existing room.

        Args:
            code: Room code to join
            nickname: Display name of the local user

        Returns:
            tuple: (success, message)
        """
        is_valid, error_msg = validate_room_code(code)
        if not is_valid:
            return False, error_msg
        is_valid, error_msg = validate_nickname(nickname)
        if not is_valid:
            return False, error_msg
        if not self.connection.is_connected:
            return False, "Not connected"

        code = code.strip()
        self.connection.send(CLIENT_EVENTS['JOIN_ROOM'], {'roomCode': code, 'nickname': nickname})
        logger.info(f"Requested to join room {code} as {nickname}")
        return True, "Join requested"

    def leave_room(self, location: str) -> Tuple[bool, str, Optional[NavigationIntent]]:
        """
        Leave the current room by ending the connection.

        Args:
            location: Current watch location

        Returns:
            tuple: (success, message, intent) where intent rewrites the
            location without its room parameter
        """
        if not self.connection.is_connected or not self.in_room:
            return False, "Not in a room", None

        room_code = self.room_code
        self.connection.disconnect()
        self.reset(SessionState.DISCONNECTED)

        logger.info(f"Left room {room_code}")
        return True, f"Left room {room_code}", NavigationIntent(strip_room_param(location), replace=True)

    # Inbound events

    def handle_connected(self, payload: Any = None) -> None:
        self.state = SessionState.CONNECTED_NO_ROOM
        logger.debug("Session connected, no room")

    def handle_disconnected(self, payload: Any = None) -> None:
        if self.in_room:
            logger.info(f"Connection lost while in room {self.room_code}")
        self.reset(SessionState.DISCONNECTED)

    def handle_room_created(self, payload: Dict[str, Any]) -> None:
        self._enter_room(payload, is_host=True)
        logger.info(f"Created room {self.room_code}")

    def handle_room_joined(self, payload: Dict[str, Any]) -> Optional[NavigationIntent]:
        """
        Enter a room we asked to join.

        Returns:
            A navigation intent when the room is already watching an episode
        """
        self._enter_room(payload, is_host=bool(payload.get('isHost', False)))
        if self.chat_log is not None:
            self.chat_log.seed(payload.get('chat'))
        logger.info(f"Joined room {self.room_code} ({len(self.members)} members)")

        current_episode = payload.get('currentEpisode')
        anime_id = payload.get('animeId')
        if current_episode and anime_id:
            return NavigationIntent(build_watch_url(anime_id, current_episode, self.room_code))
        return None

    def handle_user_joined(self, payload: Dict[str, Any]) -> None:
        self._replace_members(payload)
        self._system_notice('USER_JOINED', payload.get('nickname'))

    def handle_user_left(self, payload: Dict[str, Any]) -> None:
        self._replace_members(payload)
        self._system_notice('USER_LEFT', payload.get('nickname'))

    def handle_new_host(self, payload: Dict[str, Any]) -> None:
        """Host handoff: we are host iff the new host id is our own connection id."""
        self._replace_members(payload)
        own_id = self.connection.connection_id
        was_host = self.is_host
        is_host = own_id is not None and payload.get('newHostId') == own_id
        self.state = SessionState.HOST_IN_ROOM if is_host else SessionState.MEMBER_IN_ROOM
        if is_host != was_host:
            logger.info(f"Host status changed: {'now host' if is_host else 'no longer host'}")
        self._system_notice('NEW_HOST', payload.get('newHostNickname'))

    def handle_error(self, payload: Any) -> None:
        """Remote-reported failure; advisory only."""
        if isinstance(payload, dict):
            message = payload.get('message')
        else:
            message = payload
        self.last_error = str(message) if message is not None else "Unknown error"
        logger.warning(f"Room error: {self.last_error}")

    def reset(self, state: SessionState) -> None:
        """Back to the no-room baseline."""
        self.state = state
        self.room_code = None
        self.members = []
        self.last_error = None
        if self.chat_log is not None:
            self.chat_log.clear()

    def _enter_room(self, payload: Dict[str, Any], is_host: bool) -> None:
        self.room_code = payload['roomCode']
        self.state = SessionState.HOST_IN_ROOM if is_host else SessionState.MEMBER_IN_ROOM
        self.members = parse_members(payload.get('members'))
        self.last_error = None

    def _replace_members(self, payload: Dict[str, Any]) -> None:
        self.members = parse_members(payload.get('members'))

    def _system_notice(self, key: str, nickname: Optional[str]) -> None:
        if self.chat_log is not None:
            self.chat_log.append_system(SYSTEM_MESSAGES[key].format(nickname=nickname))
