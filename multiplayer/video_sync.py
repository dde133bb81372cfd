"""
Video sync controller.

The host's playback actions are broadcast to the room; inbound actions
drive the local player. Actions are opaque to this layer.
"""

import logging
from typing import Any, Callable, Optional, Tuple

from utils.constants import CLIENT_EVENTS
from .echo_suppressor import EchoSuppressor

logger = logging.getLogger(__name__)

PlayerCallback = Callable[[Any], None]

class VideoSyncController:
    """Translates local playback intents to broadcasts and back."""

    def __init__(self, connection, room_session, suppressor: Optional[EchoSuppressor] = None):
        """
        Initialize video sync.

        Args:
            connection: ConnectionManager used to broadcast
            room_session: RoomSession consulted for room and host status
            suppressor: Echo suppression window (defaults to configured window)
        """
        self.connection = connection
        self.room_session = room_session
        self.suppressor = suppressor or EchoSuppressor()
        self.player: Optional[PlayerCallback] = None
        self.room_video_state: Any = None
        self.should_sync_video = False

    def set_player(self, player: Optional[PlayerCallback]) -> None:
        """Register the callable that applies an action to the local player."""
        self.player = player

    def broadcast_action(self, action: Any) -> Tuple[bool, str]:
        """
        Broadcast a playback action from the host.

        Args:
            action: Opaque playback payload (play/pause/seek ...)

        Returns:
            tuple: (success, message)
        """
        if not self.room_session.in_room:
            return False, "Not in a room"
        if not self.room_session.is_host:
            return False, "Only the host can control playback"

        self.suppressor.mark_outbound_sent()
        if not self.connection.send(CLIENT_EVENTS['VIDEO_ACTION'], {'action': action}):
            return False, "Not connected"
        return True, "Action broadcast"

    def handle_video_action(self, action: Any) -> bool:
        """
        Inbound videoAction.

        Returns:
            True if the action was applied, False if it was suppressed
        """
        if not self.suppressor.should_apply_inbound_action():
            logger.debug("Suppressed echoed video action")
            return False

        self.room_video_state = action
        self.should_sync_video = True
        if self.player is not None:
            self.player(action)
        return True

    def acknowledge_sync(self) -> None:
        """The player has caught up with room_video_state."""
        self.should_sync_video = False

    def reset(self) -> None:
        self.room_video_state = None
        self.should_sync_video = False
        self.suppressor.reset()
