"""
Multiplayer Module for the Watch Party client.

Contains the client-side session logic for watching together:
connection lifecycle, room membership, chat and playback/episode sync.
"""

from .models import (
    SessionState, ConnectionStatus, Member, ChatEntry, EpisodeChange, NavigationIntent
)
from .connection_manager import ConnectionManager
from .room_session import RoomSession
from .chat_log import ChatLog
from .echo_suppressor import EchoSuppressor
from .video_sync import VideoSyncController
from .episode_sync import EpisodeSyncController
from .client import MultiplayerClient

__all__ = [
    # Data models
    'SessionState',
    'ConnectionStatus',
    'Member',
    'ChatEntry',
    'EpisodeChange',
    'NavigationIntent',

    # Components
    'ConnectionManager',
    'RoomSession',
    'ChatLog',
    'EchoSuppressor',
    'VideoSyncController',
    'EpisodeSyncController',
    'MultiplayerClient'
]
