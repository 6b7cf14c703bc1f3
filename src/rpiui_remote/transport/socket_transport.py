"""TCP socket transport.

The output channel serializes writers with a lock and refuses writes
once it has begun closing.  Closing it shuts the socket down in both
directions, so a writer blocked by a peer that stopped reading fails
instead of holding up shutdown.  Closing the inbound stream shuts down
the read direction, which makes a ``recv`` blocked in another thread
return end-of-stream.
"""

from __future__ import annotations

import logging
import socket
import threading

from rpiui_remote.core.errors import ChannelClosedError
from rpiui_remote.core.interfaces.transport import (
    ConnectionInterface,
    InboundStreamInterface,
    OutputChannelInterface,
    TransportFactory,
)

_log = logging.getLogger(__name__)


class SocketOutputChannel(OutputChannelInterface):
    """Outbound direction of a connected socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._lock = threading.Lock()
        self._close_lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> None:
        with self._lock:
            if self._closed:
                raise ChannelClosedError("output channel is closed")
            self._sock.sendall(data)

    def close(self) -> None:
        # Must not wait on the write lock: a writer blocked in sendall holds it
        # until the shutdown below makes that sendall fail.
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._sock.shutdown(socket.SHUT_RDWR)


class SocketInboundStream(InboundStreamInterface):
    """Inbound direction of a connected socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._closed = False

    def read(self, size: int = 1) -> bytes:
        return self._sock.recv(size)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._sock.shutdown(socket.SHUT_RD)


class SocketConnection(ConnectionInterface):
    """A connected TCP socket split into its two directions."""

    def __init__(self, sock: socket.socket, peer: str) -> None:
        self._sock = sock
        self._peer = peer
        self._output = SocketOutputChannel(sock)
        self._inbound = SocketInboundStream(sock)

    @property
    def peer(self) -> str:
        return self._peer

    @property
    def output_channel(self) -> SocketOutputChannel:
        return self._output

    @property
    def inbound_stream(self) -> SocketInboundStream:
        return self._inbound

    def close(self) -> None:
        self._sock.close()


class SocketTransportFactory(TransportFactory):
    """Opens :class:`SocketConnection` instances.

    Args:
        connect_timeout: Seconds allowed for the TCP handshake.  The
            connected socket is switched back to blocking mode.
    """

    def __init__(self, connect_timeout: float = 10.0) -> None:
        self._connect_timeout = connect_timeout

    def open_connection(self, address: str, port: int) -> SocketConnection:
        sock = socket.create_connection((address, port), timeout=self._connect_timeout)
        try:
            sock.settimeout(None)
            # One byte per event: do not let Nagle hold presses back.
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError:
            sock.close()
            raise
        _log.debug("Socket connected to %s:%d", address, port)
        return SocketConnection(sock, f"{address}:{port}")
