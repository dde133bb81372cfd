"""
tests.conftest
~~~~~~~~~~~~~~

Shared pytest fixtures: a fake Socket.IO client standing in for the
transport, a controllable clock, and a MultiplayerClient wired to both,
so the session logic runs without a server or real timers.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from socketio.exceptions import ConnectionError as SocketIOConnectionError

from multiplayer import ConnectionManager, EchoSuppressor, MultiplayerClient

LOCAL_SID = 'sid-local'

class FakeSocketClient:
    """Records handlers and emits the way ``socketio.Client`` exposes them."""

    def __init__(self, sid: str = LOCAL_SID, refuse: bool = False):
        self.sid = sid
        self.refuse = refuse
        self.handlers: Dict[str, Callable] = {}
        self.emitted: List[Tuple[str, Any]] = []
        self.connected = False
        self.url: Optional[str] = None

    def on(self, event: str, handler: Callable) -> None:
        self.handlers[event] = handler

    def connect(self, url: str) -> None:
        if self.refuse:
            raise SocketIOConnectionError('Connection refused by the server')
        self.url = url
        self.connected = True
        self.handlers['connect']()

    def disconnect(self) -> None:
        if self.connected:
            self.connected = False
            self.handlers['disconnect']('client disconnect')

    def emit(self, event: str, data: Any = None) -> None:
        self.emitted.append((event, data))

    def get_sid(self, namespace: Optional[str] = None) -> str:
        return self.sid

    # Test helpers

    def server_emit(self, event: str, data: Any = None) -> None:
        """Deliver an event as if the server had sent it."""
        self.handlers[event](data)

    def drop(self) -> None:
        """Simulate network loss."""
        self.connected = False
        self.handlers['disconnect']('transport close')

class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

class SocketFactory:
    """Hands out a fresh FakeSocketClient per connect, keeping them all."""

    def __init__(self):
        self.created: List[FakeSocketClient] = []
        self.refuse = False

    def __call__(self) -> FakeSocketClient:
        sock = FakeSocketClient(refuse=self.refuse)
        self.created.append(sock)
        return sock

    @property
    def current(self) -> FakeSocketClient:
        return self.created[-1]

@pytest.fixture()
def socket_factory() -> SocketFactory:
    return SocketFactory()

@pytest.fixture()
def connection(socket_factory: SocketFactory) -> ConnectionManager:
    return ConnectionManager(client_factory=socket_factory)

@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()

@pytest.fixture()
def navigations() -> list:
    return []

@pytest.fixture()
def client(connection: ConnectionManager, clock: FakeClock, navigations: list) -> MultiplayerClient:
    """A client that is connected but not yet in a room."""
    mp = MultiplayerClient(
        endpoint='http://test-server:3001',
        nickname='Alice',
        location='/watch/one-piece?ep=1',
        connection=connection,
        suppressor=EchoSuppressor(window=0.1, clock=clock),
        navigation_handler=navigations.append
    )
    success, _ = mp.start()
    assert success
    return mp

def members(*pairs: Tuple[str, str]) -> List[Dict[str, str]]:
    """Wire members list from (id, nickname) pairs."""
    return [{'id': sid, 'nickname': name} for sid, name in pairs]

@pytest.fixture()
def host_client(client: MultiplayerClient, socket_factory: SocketFactory) -> MultiplayerClient:
    """A client hosting room ABC123 alone."""
    client.create_room()
    socket_factory.current.server_emit('roomCreated', {
        'roomCode': 'ABC123',
        'isHost': True,
        'members': members((LOCAL_SID, 'Alice'))
    })
    socket_factory.current.emitted.clear()
    return client

@pytest.fixture()
def member_client(client: MultiplayerClient, socket_factory: SocketFactory) -> MultiplayerClient:
    """A client that joined room ABC123 hosted by Bob."""
    client.join_room('ABC123')
    socket_factory.current.server_emit('roomJoined', {
        'roomCode': 'ABC123',
        'isHost': False,
        'members': members(('sid-bob', 'Bob'), (LOCAL_SID, 'Alice'))
    })
    socket_factory.current.emitted.clear()
    return client
