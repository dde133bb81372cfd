"""
Multiplayer client for watching together.

One MultiplayerClient is one session: it owns the connection, the room
session, the chat log and both sync controllers, and routes every inbound
event through a single dispatch function.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from config.settings import DEFAULT_NICKNAME, MULTIPLAYER_SERVER_URL
from utils.helpers import generate_guest_nickname
from .chat_log import ChatLog
from .connection_manager import ConnectionManager
from .echo_suppressor import EchoSuppressor
from .episode_sync import EpisodeSyncController
from .event_routes import dispatch_event, register_event_routes
from .models import ChatEntry, Member, NavigationIntent
from .room_session import RoomSession
from .video_sync import VideoSyncController

logger = logging.getLogger(__name__)

NavigationHandler = Callable[[NavigationIntent], None]

class MultiplayerClient:
    """
    Client-side state of a watch party.

    Navigation is never performed here: intents are recorded, applied to
    ``location`` and handed to ``navigation_handler`` for the host
    environment to act on.
    """

    def __init__(self,
                 endpoint: Optional[str] = None,
                 nickname: Optional[str] = None,
                 location: str = '/',
                 connection: Optional[ConnectionManager] = None,
                 suppressor: Optional[EchoSuppressor] = None,
                 navigation_handler: Optional[NavigationHandler] = None):
        """
        Initialize the client.

        Args:
            endpoint: Server URL (defaults to MULTIPLAYER_SERVER_URL)
            nickname: Display name (a Guest-NNNN name is generated if empty)
            location: Current watch location
            connection: Connection manager (a new one is created if omitted)
            suppressor: Echo suppression window for host video actions
            navigation_handler: Called with every navigation intent
        """
        self.endpoint = endpoint or MULTIPLAYER_SERVER_URL
        self.nickname = nickname or DEFAULT_NICKNAME or generate_guest_nickname()
        self.location = location
        self.navigation_handler = navigation_handler
        self.last_navigation: Optional[NavigationIntent] = None

        self.connection = connection or ConnectionManager()
        self.session = RoomSession(self.connection)
        self.chat = ChatLog(self.connection, self.session)
        self.session.chat_log = self.chat
        self.video = VideoSyncController(self.connection, self.session, suppressor)
        self.episodes = EpisodeSyncController(self.connection, self.session)

        register_event_routes(self.connection, self)

    # Read-only view of the session

    @property
    def is_connected(self) -> bool:
        return self.connection.is_connected

    @property
    def room_code(self) -> Optional[str]:
        return self.session.room_code

    @property
    def is_host(self) -> bool:
        return self.session.is_host

    @property
    def is_in_room(self) -> bool:
        return self.session.in_room

    @property
    def members(self) -> List[Member]:
        return list(self.session.members)

    @property
    def chat_entries(self) -> Tuple[ChatEntry, ...]:
        return self.chat.entries

    @property
    def room_error(self) -> Optional[str]:
        return self.session.last_error

    @property
    def room_video_state(self) -> Any:
        return self.video.room_video_state

    @property
    def should_sync_video(self) -> bool:
        return self.video.should_sync_video

    # Session lifecycle

    def start(self, endpoint: Optional[str] = None) -> Tuple[bool, str]:
        """Open the connection for a new session."""
        if endpoint:
            self.endpoint = endpoint
        return self.connection.connect(self.endpoint)

    def stop(self) -> None:
        """End the session, leaving any room."""
        self.connection.disconnect()

    def set_nickname(self, nickname: Optional[str]) -> None:
        self.nickname = nickname or generate_guest_nickname()

    def set_location(self, location: str) -> None:
        """Tell the client where the host environment currently is."""
        self.location = location

    def set_navigation_handler(self, handler: Optional[NavigationHandler]) -> None:
        self.navigation_handler = handler

    def set_player_reference(self, player: Optional[Callable[[Any], None]]) -> None:
        self.video.set_player(player)

    # Outbound operations

    def create_room(self) -> Tuple[bool, str]:
        return self.session.create_room(self.nickname)

    def join_room(self, code: Optional[str]) -> Tuple[bool, str]:
        return self.session.join_room(code, self.nickname)

    def leave_room(self) -> Tuple[bool, str]:
        success, message, intent = self.session.leave_room(self.location)
        if intent is not None:
            self._navigate(intent)
        return success, message

    def send_chat_message(self, message: Optional[str]) -> Tuple[bool, str]:
        return self.chat.send_message(message)

    def sync_video_action(self, action: Any) -> Tuple[bool, str]:
        return self.video.broadcast_action(action)

    def sync_episode_change(self, episode_id: Any, anime_id: Any) -> Tuple[bool, str]:
        return self.episodes.broadcast_episode_change(episode_id, anime_id)

    def acknowledge_video_sync(self) -> None:
        self.video.acknowledge_sync()

    def room_status(self) -> Optional[Dict[str, Any]]:
        """
        Summary of the current room for display.

        Returns:
            None when not in a room, otherwise room code, member count,
            host flag and two display lines
        """
        if not self.is_in_room:
            return None
        count = len(self.session.members)
        return {
            'room_code': self.room_code,
            'member_count': count,
            'is_host': self.is_host,
            'headline': f"Watching together in room {self.room_code}",
            'subline': f"{count} {'person' if count == 1 else 'people'} watching"
        }

    # Inbound events

    def dispatch(self, event: str, payload: Any = None) -> bool:
        """Single entry point for every inbound event."""
        return dispatch_event(self, event, payload)

    def on_connect(self, payload: Any) -> None:
        self.session.handle_connected(payload)

    def on_disconnect(self, payload: Any) -> None:
        self.session.handle_disconnected(payload)
        self.video.reset()

    def on_room_created(self, payload: Dict[str, Any]) -> None:
        self.session.handle_room_created(payload)

    def on_room_joined(self, payload: Dict[str, Any]) -> None:
        intent = self.session.handle_room_joined(payload)
        if intent is not None:
            self._navigate(intent)

    def on_user_joined(self, payload: Dict[str, Any]) -> None:
        self.session.handle_user_joined(payload)

    def on_user_left(self, payload: Dict[str, Any]) -> None:
        self.session.handle_user_left(payload)

    def on_new_host(self, payload: Dict[str, Any]) -> None:
        self.session.handle_new_host(payload)

    def on_video_action(self, payload: Any) -> None:
        self.video.handle_video_action(payload)

    def on_change_episode(self, payload: Dict[str, Any]) -> None:
        intent = self.episodes.handle_change_episode(payload, self.location)
        if intent is not None:
            self._navigate(intent)

    def on_chat_message(self, payload: Dict[str, Any]) -> None:
        self.chat.handle_chat_message(payload)

    def on_error(self, payload: Any) -> None:
        self.session.handle_error(payload)

    def _navigate(self, intent: NavigationIntent) -> None:
        logger.info(f"Navigating to {intent.url}{' (replace)' if intent.replace else ''}")
        self.last_navigation = intent
        self.location = intent.url
        if self.navigation_handler is not None:
            self.navigation_handler(intent)
