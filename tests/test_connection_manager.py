"""
tests.test_connection_manager
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

ConnectionManager lifecycle: connect, send, explicit and transport-level
disconnect, and event delivery.
"""

from unittest.mock import MagicMock

from multiplayer import ConnectionManager, ConnectionStatus

class TestConnect:
    """Establishing the session's connection."""

    def test_connect_success(self, connection: ConnectionManager, socket_factory) -> None:
        success, _ = connection.connect('http://test-server:3001')

        assert success
        assert connection.is_connected
        assert connection.status is ConnectionStatus.CONNECTED
        assert socket_factory.current.url == 'http://test-server:3001'
        assert connection.connection_id == 'sid-local'

    def test_connect_refused(self, connection: ConnectionManager, socket_factory) -> None:
        socket_factory.refuse = True

        success, message = connection.connect('http://test-server:3001')

        assert not success
        assert 'Could not connect' in message
        assert connection.status is ConnectionStatus.DISCONNECTED
        assert connection.connection_id is None

    def test_connect_twice_rejected(self, connection: ConnectionManager, socket_factory) -> None:
        connection.connect('http://test-server:3001')

        success, _ = connection.connect('http://test-server:3001')

        assert not success
        assert len(socket_factory.created) == 1

    def test_fresh_transport_per_session(self, connection: ConnectionManager, socket_factory) -> None:
        connection.connect('http://test-server:3001')
        connection.disconnect()
        connection.connect('http://test-server:3001')

        assert len(socket_factory.created) == 2
        assert connection.is_connected

    def test_transport_created_without_reconnection(self) -> None:
        from multiplayer.connection_manager import default_client_factory

        sio = default_client_factory()

        assert sio.reconnection is False

class TestSend:
    """Fire-and-forget emits."""

    def test_send_when_connected(self, connection: ConnectionManager, socket_factory) -> None:
        connection.connect('http://test-server:3001')

        assert connection.send('chatMessage', {'message': 'hi'})
        assert socket_factory.current.emitted == [('chatMessage', {'message': 'hi'})]

    def test_send_when_disconnected_is_noop(self, connection: ConnectionManager) -> None:
        assert not connection.send('chatMessage', {'message': 'hi'})

class TestDisconnect:
    """Explicit close and network loss."""

    def test_transport_drop_notifies_subscribers(self, connection: ConnectionManager, socket_factory) -> None:
        handler = MagicMock()
        listener = MagicMock()
        connection.subscribe('disconnect', handler)
        connection.add_status_listener(listener)
        connection.connect('http://test-server:3001')

        socket_factory.current.drop()

        assert connection.status is ConnectionStatus.DISCONNECTED
        handler.assert_called_once_with('disconnect', 'transport close')
        assert listener.call_args_list[-1].args == (ConnectionStatus.DISCONNECTED,)

    def test_explicit_disconnect_notifies_once(self, connection: ConnectionManager, socket_factory) -> None:
        handler = MagicMock()
        connection.subscribe('disconnect', handler)
        connection.connect('http://test-server:3001')

        connection.disconnect()
        connection.disconnect()

        assert handler.call_count == 1
        assert not socket_factory.current.connected

    def test_stale_transport_disconnect_ignored(self, connection: ConnectionManager, socket_factory) -> None:
        connection.connect('http://test-server:3001')
        old = socket_factory.current
        connection.disconnect()
        connection.connect('http://test-server:3001')

        old.handlers['disconnect']('transport close')

        assert connection.is_connected

class TestDelivery:
    """Inbound events reach the subscribed handler."""

    def test_event_delivered_with_name(self, connection: ConnectionManager, socket_factory) -> None:
        handler = MagicMock()
        connection.subscribe('chatMessage', handler)
        connection.connect('http://test-server:3001')

        socket_factory.current.server_emit('chatMessage', {'message': 'yo'})

        handler.assert_called_once_with('chatMessage', {'message': 'yo'})

    def test_subscribe_after_connect(self, connection: ConnectionManager, socket_factory) -> None:
        connection.connect('http://test-server:3001')
        handler = MagicMock()
        connection.subscribe('error', handler)

        socket_factory.current.server_emit('error', {'message': 'nope'})

        handler.assert_called_once_with('error', {'message': 'nope'})

    def test_handler_failure_does_not_propagate(self, connection: ConnectionManager, socket_factory) -> None:
        connection.subscribe('chatMessage', MagicMock(side_effect=KeyError('id')))
        connection.connect('http://test-server:3001')

        socket_factory.current.server_emit('chatMessage', {})

        assert connection.is_connected
