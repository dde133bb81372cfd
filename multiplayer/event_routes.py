"""
Inbound event routing for the Watch Party client.

Pure routing layer: maps each inbound event name to the client handler
allowed to process it in the current session state.
Contains no session logic - only event routing.
"""

import logging
from typing import Any, Dict, FrozenSet, Tuple

from .models import SessionState
from utils.constants import SERVER_EVENTS

logger = logging.getLogger(__name__)

ANY_STATE = frozenset(SessionState)
CONNECTED = frozenset({
    SessionState.CONNECTED_NO_ROOM,
    SessionState.HOST_IN_ROOM,
    SessionState.MEMBER_IN_ROOM
})
IN_ROOM = frozenset({SessionState.HOST_IN_ROOM, SessionState.MEMBER_IN_ROOM})

# event name -> (states in which it is handled, client handler method)
EVENT_ROUTES: Dict[str, Tuple[FrozenSet[SessionState], str]] = {
    SERVER_EVENTS['CONNECT']: (frozenset({SessionState.DISCONNECTED}), 'on_connect'),
    SERVER_EVENTS['DISCONNECT']: (ANY_STATE, 'on_disconnect'),
    SERVER_EVENTS['ROOM_CREATED']: (CONNECTED, 'on_room_created'),
    SERVER_EVENTS['ROOM_JOINED']: (CONNECTED, 'on_room_joined'),
    SERVER_EVENTS['USER_JOINED']: (IN_ROOM, 'on_user_joined'),
    SERVER_EVENTS['USER_LEFT']: (IN_ROOM, 'on_user_left'),
    SERVER_EVENTS['NEW_HOST']: (IN_ROOM, 'on_new_host'),
    SERVER_EVENTS['VIDEO_ACTION']: (IN_ROOM, 'on_video_action'),
    SERVER_EVENTS['CHANGE_EPISODE']: (IN_ROOM, 'on_change_episode'),
    SERVER_EVENTS['CHAT_MESSAGE']: (IN_ROOM, 'on_chat_message'),
    SERVER_EVENTS['ERROR']: (CONNECTED, 'on_error')
}

def dispatch_event(client, event: str, payload: Any) -> bool:
    """
    Route one inbound event to the client.

    Args:
        client: MultiplayerClient receiving the event
        event: Event name
        payload: Event payload

    Returns:
        True if a handler ran, False if the event was ignored
    """
    route = EVENT_ROUTES.get(event)
    if route is None:
        logger.debug(f"Ignoring unknown event '{event}'")
        return False

    allowed_states, handler_name = route
    state = client.session.state
    if state not in allowed_states:
        logger.debug(f"Ignoring '{event}' in state {state.value}")
        return False

    getattr(client, handler_name)(payload)
    return True

def register_event_routes(connection, client) -> None:
    """
    Register all inbound event routes on a connection.

    Args:
        connection: ConnectionManager delivering events
        client: MultiplayerClient handling them
    """
    for event in EVENT_ROUTES:
        connection.subscribe(event, client.dispatch)
