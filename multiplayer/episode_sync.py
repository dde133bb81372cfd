"""
Episode sync controller.

The host announces episode changes; members navigate to the announced
episode unless they are already on it.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from utils.constants import CLIENT_EVENTS
from .models import EpisodeChange, NavigationIntent
from .navigation import build_watch_url, location_target

logger = logging.getLogger(__name__)

class EpisodeSyncController:
    """Broadcasts and applies episode changes."""

    def __init__(self, connection, room_session):
        self.connection = connection
        self.room_session = room_session

    def broadcast_episode_change(self, episode_id: Any, anime_id: Any) -> Tuple[bool, str]:
        """
        Announce an episode change to the room (host only).

        Returns:
            tuple: (success, message)
        """
        if not self.room_session.in_room:
            return False, "Not in a room"
        if not self.room_session.is_host:
            return False, "Only the host can change episodes"

        change = EpisodeChange(episode_id=episode_id, anime_id=anime_id)
        if not self.connection.send(CLIENT_EVENTS['CHANGE_EPISODE'], change.to_dict()):
            return False, "Not connected"
        logger.info(f"Broadcast episode {episode_id} of {anime_id}")
        return True, "Episode change broadcast"

    def handle_change_episode(self, payload: Dict[str, Any], location: str) -> Optional[NavigationIntent]:
        """
        Inbound changeEpisode.

        Args:
            payload: Event payload with episodeId and animeId
            location: Current watch location

        Returns:
            A navigation intent, or None if already on that episode
        """
        change = EpisodeChange.from_dict(payload)
        target = build_watch_url(change.anime_id, change.episode_id, self.room_session.room_code)
        if location_target(location) == target:
            logger.debug(f"Already watching {target}")
            return None
        return NavigationIntent(target)
