"""
Utilities module for the Watch Party client.

This module contains protocol constants and helper functions
used throughout the client.
"""

from .constants import CLIENT_EVENTS, SERVER_EVENTS, SYSTEM_NICKNAME
from .helpers import (
    generate_guest_nickname, validate_nickname, validate_room_code, clean_chat_message,
    now_ms
)

__all__ = [
    'CLIENT_EVENTS',
    'SERVER_EVENTS',
    'SYSTEM_NICKNAME',
    'generate_guest_nickname',
    'validate_nickname',
    'validate_room_code',
    'clean_chat_message',
    'now_ms'
]
