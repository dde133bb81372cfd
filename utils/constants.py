"""
Protocol constants for the Watch Party client.

This module contains the Socket.IO event names exchanged with the
room-coordination server and the fixed strings used for system chat.
"""

# Events emitted by the client
CLIENT_EVENTS = {
    'CREATE_ROOM': 'createRoom',
    'JOIN_ROOM': 'joinRoom',
    'CHAT_MESSAGE': 'chatMessage',
    'VIDEO_ACTION': 'videoAction',
    'CHANGE_EPISODE': 'changeEpisode'
}

# Events received from the server (connect/disconnect come from the transport)
SERVER_EVENTS = {
    'CONNECT': 'connect',
    'DISCONNECT': 'disconnect',
    'ROOM_CREATED': 'roomCreated',
    'ROOM_JOINED': 'roomJoined',
    'USER_JOINED': 'userJoined',
    'USER_LEFT': 'userLeft',
    'NEW_HOST': 'newHost',
    'VIDEO_ACTION': 'videoAction',
    'CHANGE_EPISODE': 'changeEpisode',
    'CHAT_MESSAGE': 'chatMessage',
    'ERROR': 'error'
}

# System chat entries
SYSTEM_NICKNAME = 'System'
SYSTEM_MESSAGES = {
    'USER_JOINED': '{nickname} joined the room',
    'USER_LEFT': '{nickname} left the room',
    'NEW_HOST': '{nickname} is now the host'
}

# Query parameters of the watch location
EPISODE_PARAM = 'ep'
ROOM_PARAM = 'room'

# Guest nicknames are Guest-1000 .. Guest-9999
GUEST_PREFIX = 'Guest'
GUEST_NUMBER_RANGE = (1000, 9999)
