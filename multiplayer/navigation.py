"""
Watch location helpers.

The watch location encodes the anime, the episode and the room code:
``/watch/<animeId>?ep=<episodeId>&room=<roomCode>``.
"""

from typing import Any, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from config.settings import WATCH_PATH_PREFIX
from utils.constants import EPISODE_PARAM, ROOM_PARAM

def build_watch_url(anime_id: Any, episode_id: Any, room_code: Optional[str],
                    prefix: str = WATCH_PATH_PREFIX) -> str:
    """
    Build the watch location for an episode within a room.

    Args:
        anime_id: Anime identifier (path segment)
        episode_id: Episode identifier (``ep`` query parameter)
        room_code: Room code (``room`` query parameter)
        prefix: Watch page path prefix

    Returns:
        Path and query string of the watch page
    """
    return f"{prefix.rstrip('/')}/{anime_id}?{EPISODE_PARAM}={episode_id}&{ROOM_PARAM}={room_code}"

def location_target(location: str) -> str:
    """Return the path plus query string of an absolute or relative location."""
    parts = urlsplit(location or '')
    path = parts.path or '/'
    return f"{path}?{parts.query}" if parts.query else path

def strip_room_param(location: str) -> str:
    """Remove the room parameter from a location, keeping everything else."""
    parts = urlsplit(location or '')
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != ROOM_PARAM]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))

def room_from_location(location: str) -> Optional[str]:
    """Read the room code carried by a location, if any."""
    for key, value in parse_qsl(urlsplit(location or '').query):
        if key == ROOM_PARAM and value:
            return value
    return None
