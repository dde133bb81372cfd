"""
Data models for the multiplayer session.

These are pure data structures passed between the connection layer,
the room session and the sync controllers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum

from utils.constants import SYSTEM_NICKNAME

class SessionState(Enum):
    """Session state enumeration."""
    DISCONNECTED = "disconnected"
    CONNECTED_NO_ROOM = "connected_no_room"
    HOST_IN_ROOM = "host_in_room"
    MEMBER_IN_ROOM = "member_in_room"

    @property
    def in_room(self) -> bool:
        return self in (SessionState.HOST_IN_ROOM, SessionState.MEMBER_IN_ROOM)

class ConnectionStatus(Enum):
    """Transport connection status."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"

@dataclass(frozen=True)
class Member:
    """Represents a member of a room, as reported by the server."""
    connection_id: str
    nickname: str
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Member':
        """Build a member from its wire representation."""
        extra = {k: v for k, v in data.items() if k not in ('id', 'nickname')}
        return cls(
            connection_id=str(data.get('id', '')),
            nickname=str(data.get('nickname', '')),
            extra=extra
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {**self.extra, 'id': self.connection_id, 'nickname': self.nickname}

@dataclass(frozen=True)
class ChatEntry:
    """A single line of the room chat."""
    id: Any
    nickname: str
    message: str
    timestamp: Any
    is_system: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChatEntry':
        """Build a chat entry from the server's chatMessage payload."""
        return cls(
            id=data.get('id'),
            nickname=str(data.get('nickname', '')),
            message=str(data.get('message', '')),
            timestamp=data.get('timestamp'),
            is_system=bool(data.get('isSystem', False))
        )

    @classmethod
    def system(cls, entry_id: int, message: str, timestamp: int) -> 'ChatEntry':
        """Build a synthesized system entry."""
        return cls(
            id=entry_id,
            nickname=SYSTEM_NICKNAME,
            message=message,
            timestamp=timestamp,
            is_system=True
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'nickname': self.nickname,
            'message': self.message,
            'timestamp': self.timestamp,
            'isSystem': self.is_system
        }

@dataclass(frozen=True)
class EpisodeChange:
    """An episode change broadcast by the host."""
    episode_id: Any
    anime_id: Any

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EpisodeChange':
        return cls(episode_id=data['episodeId'], anime_id=data['animeId'])

    def to_dict(self) -> Dict[str, Any]:
        return {'episodeId': self.episode_id, 'animeId': self.anime_id}

@dataclass(frozen=True)
class NavigationIntent:
    """
    A request for the host environment to change the watch location.

    ``replace`` means rewrite the current location in place (no page load),
    otherwise navigate to ``url``.
    """
    url: str
    replace: bool = False

def parse_members(raw: Optional[List[Dict[str, Any]]]) -> List[Member]:
    """Convert a wire members list into Member objects, keeping order."""
    return [Member.from_dict(m) for m in (raw or [])]
