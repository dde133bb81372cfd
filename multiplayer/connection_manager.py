"""
Connection Manager for the Watch Party client.

Owns the single Socket.IO connection to the room-coordination server.
Contains no room logic - purely connection lifecycle and raw event I/O.
"""

import logging
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple

import socketio
from socketio.exceptions import BadNamespaceError, ConnectionError

from config.settings import SOCKETIO_LOGGER
from utils.constants import SERVER_EVENTS
from .models import ConnectionStatus

logger = logging.getLogger(__name__)

EventHandler = Callable[[str, Any], None]
StatusListener = Callable[[ConnectionStatus], None]

def default_client_factory() -> socketio.Client:
    """Create a transport client; a dropped connection is never retried."""
    return socketio.Client(
        reconnection=False,
        logger=SOCKETIO_LOGGER,
        engineio_logger=SOCKETIO_LOGGER
    )

class ConnectionManager:
    """
    Manages the lifecycle of one transport connection per session.

    Every call to ``connect`` builds a fresh client through ``client_factory``;
    the client is discarded on disconnect. Inbound events are delivered to
    the subscribed handler as ``handler(event_name, payload)``.
    """

    def __init__(self, client_factory: Callable[[], Any] = default_client_factory):
        """
        Initialize connection manager.

        Args:
            client_factory: Callable returning a new Socket.IO client
        """
        self.client_factory = client_factory
        self.client = None
        self.status = ConnectionStatus.DISCONNECTED
        self.endpoint: Optional[str] = None
        self.handlers: Dict[str, EventHandler] = {}
        self.status_listeners: List[StatusListener] = []
        logger.debug("Connection manager initialized")

    @property
    def is_connected(self) -> bool:
        return self.status is ConnectionStatus.CONNECTED

    @property
    def connection_id(self) -> Optional[str]:
        """Session id the server knows this client by, while connected."""
        if not self.is_connected or self.client is None:
            return None
        return self.client.get_sid()

    def subscribe(self, event: str, handler: EventHandler) -> None:
        """Route an inbound event name to a handler (one handler per name)."""
        if event in self.handlers:
            logger.warning(f"Replacing handler for event '{event}'")
        self.handlers[event] = handler
        if self.client is not None:
            self._register(self.client, event)

    def add_status_listener(self, listener: StatusListener) -> None:
        self.status_listeners.append(listener)

    def connect(self, endpoint: str) -> Tuple[bool, str]:
        """
        Establish the connection for this session.

        Args:
            endpoint: Server URL

        Returns:
            Tuple of (success, message)
        """
        if self.client is not None:
            return False, "Already connected"

        client = self.client_factory()
        client.on(SERVER_EVENTS['CONNECT'], partial(self._on_transport_connect, client))
        client.on(SERVER_EVENTS['DISCONNECT'], partial(self._on_transport_disconnect, client))
        for event in self.handlers:
            if event not in (SERVER_EVENTS['CONNECT'], SERVER_EVENTS['DISCONNECT']):
                self._register(client, event)

        self.client = client
        self.endpoint = endpoint
        try:
            client.connect(endpoint)
        except ConnectionError as e:
            logger.error(f"Could not connect to {endpoint}: {e}")
            self.client = None
            self._set_status(ConnectionStatus.DISCONNECTED)
            return False, f"Could not connect to {endpoint}"

        # The transport's own connect callback may fire from another thread
        self._set_status(ConnectionStatus.CONNECTED)
        logger.info(f"Connected to multiplayer server {endpoint}")
        return True, "Connected"

    def disconnect(self) -> None:
        """Release the connection. Safe to call when already disconnected."""
        client = self.client
        if client is None:
            return
        # Explicit close is reported like a transport drop, before the
        # transport is torn down
        self._mark_disconnected(None)
        try:
            client.disconnect()
        except Exception as e:
            logger.error(f"Error closing connection: {e}")

    def send(self, event: str, payload: Any) -> bool:
        """
        Emit an event to the server. Fire-and-forget, no acknowledgment.

        Returns:
            True if the event was handed to the transport, False otherwise
        """
        if not self.is_connected or self.client is None:
            logger.debug(f"Dropping '{event}': not connected")
            return False
        try:
            self.client.emit(event, payload)
            return True
        except BadNamespaceError as e:
            logger.error(f"Error sending '{event}': {e}")
            return False

    def _register(self, client: Any, event: str) -> None:
        client.on(event, partial(self._deliver, event))

    def _deliver(self, event: str, payload: Any = None) -> None:
        handler = self.handlers.get(event)
        if handler is None:
            logger.debug(f"No handler for event '{event}'")
            return
        try:
            handler(event, payload)
        except Exception as e:
            # Never let a bad payload kill the transport's reader thread
            logger.error(f"Error handling event '{event}': {e}")

    def _on_transport_connect(self, client: Any) -> None:
        if client is self.client:
            self._set_status(ConnectionStatus.CONNECTED)

    def _on_transport_disconnect(self, client: Any, *args: Any) -> None:
        # python-socketio passes a reason argument in newer releases
        if client is not self.client:
            return
        self._mark_disconnected(args[0] if args else None)

    def _mark_disconnected(self, reason: Any) -> None:
        self.client = None
        if self.status is ConnectionStatus.DISCONNECTED:
            return
        self._set_status(ConnectionStatus.DISCONNECTED)
        logger.info(f"Disconnected from multiplayer server ({reason or 'client'})")
        self._deliver(SERVER_EVENTS['DISCONNECT'], reason)

    def _set_status(self, status: ConnectionStatus) -> None:
        if status is self.status:
            return
        self.status = status
        if status is ConnectionStatus.CONNECTED:
            self._deliver(SERVER_EVENTS['CONNECT'], None)
        for listener in list(self.status_listeners):
            try:
                listener(status)
            except Exception as e:
                logger.error(f"Error in status listener: {e}")
