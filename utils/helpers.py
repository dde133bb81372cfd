"""
Helper utilities for the Watch Party client.

This module contains utility functions used throughout the client
for validation and generation.
"""

import random
import time
from typing import Optional, Tuple
from .constants import GUEST_PREFIX, GUEST_NUMBER_RANGE

def generate_guest_nickname() -> str:
    """Generate a random guest nickname such as Guest-4821."""
    low, high = GUEST_NUMBER_RANGE
    return f"{GUEST_PREFIX}-{random.randint(low, high)}"

def validate_nickname(nickname: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate a nickname before it is sent to the server.

    Args:
        nickname: Nickname to validate

    Returns:
        tuple: (is_valid, error_message)
    """
    if not nickname:
        return False, "Nickname cannot be empty"
    return True, None

def validate_room_code(code: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate a room code before joining.

    Args:
        code: Room code to validate

    Returns:
        tuple: (is_valid, error_message)
    """
    if not code or not code.strip():
        return False, "Room code cannot be empty"
    return True, None

def clean_chat_message(message: Optional[str]) -> Optional[str]:
    """
    Trim a chat message.

    Returns:
        The trimmed message, or None if nothing is left to send
    """
    if message is None:
        return None
    message = message.strip()
    return message or None

def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)
