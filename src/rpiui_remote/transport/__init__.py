"""Byte-stream transports: TCP sockets and an in-memory mock."""

from rpiui_remote.transport.mock_transport import MockConnection, MockTransportFactory
from rpiui_remote.transport.socket_transport import SocketConnection, SocketTransportFactory

__all__ = [
    "MockConnection",
    "MockTransportFactory",
    "SocketConnection",
    "SocketTransportFactory",
]
