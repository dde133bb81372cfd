import os
from dotenv import load_dotenv

# Values already in the environment win over the .env file
load_dotenv()

# Multiplayer server the client connects to
MULTIPLAYER_SERVER_URL = os.getenv('MULTIPLAYER_SERVER_URL', 'http://localhost:3001')

# Host echo suppression window for video actions (seconds)
ECHO_SUPPRESSION_SECONDS = float(os.getenv('ECHO_SUPPRESSION_SECONDS', 0.1))

# Path prefix of the watch page, e.g. /watch/<anime>?ep=<n>&room=<code>
WATCH_PATH_PREFIX = os.getenv('WATCH_PATH_PREFIX', '/watch')

# Logging Configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
SOCKETIO_LOGGER = os.getenv('SOCKETIO_LOGGER', 'false').lower() == 'true'

# Optional fixed nickname; a Guest-NNNN name is generated when empty
DEFAULT_NICKNAME = os.getenv('NICKNAME', '')
