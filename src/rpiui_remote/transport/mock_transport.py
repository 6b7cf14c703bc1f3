"""In-memory transport for development and testing.

:class:`MockConnection` records every byte written and feeds its inbound
stream from a queue, with ``simulate_*`` helpers for peer behaviour.
"""

from __future__ import annotations

import queue
import threading

from rpiui_remote.core.errors import ChannelClosedError
from rpiui_remote.core.interfaces.transport import (
    ConnectionInterface,
    InboundStreamInterface,
    OutputChannelInterface,
    TransportFactory,
)

_EOF = b""


class MockOutputChannel(OutputChannelInterface):
    """Lock-serialized in-memory sink.

    Attributes:
        written: Every byte accepted, in write order.
        close_count: Number of :meth:`close` calls.
        fail_writes: When ``True``, :meth:`write` raises ``OSError``.
    """

    def __init__(self) -> None:
        self.written = bytearray()
        self.close_count = 0
        self.fail_writes = False
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> None:
        with self._lock:
            if self._closed:
                raise ChannelClosedError("output channel is closed")
            if self.fail_writes:
                raise OSError("simulated write failure")
            self.written.extend(data)

    def close(self) -> None:
        with self._lock:
            self.close_count += 1
            self._closed = True


class MockInboundStream(InboundStreamInterface):
    """Queue-backed inbound stream.  ``read`` blocks like a socket would."""

    def __init__(self) -> None:
        self.close_count = 0
        self._queue: queue.Queue[bytes | BaseException] = queue.Queue()

    def read(self, size: int = 1) -> bytes:
        item = self._queue.get()
        if isinstance(item, BaseException):
            raise item
        if item == _EOF:
            # Keep reporting end-of-stream to any later reader.
            self._queue.put(_EOF)
        return item[:size]

    def close(self) -> None:
        self.close_count += 1
        self._queue.put(_EOF)

    def feed(self, item: bytes | BaseException) -> None:
        self._queue.put(item)


class MockConnection(ConnectionInterface):
    """In-memory connection.

    Attributes:
        close_count: Number of :meth:`close` calls.
    """

    def __init__(self, peer: str = "mock:0") -> None:
        self._peer = peer
        self._output = MockOutputChannel()
        self._inbound = MockInboundStream()
        self.close_count = 0

    @property
    def peer(self) -> str:
        return self._peer

    @property
    def output_channel(self) -> MockOutputChannel:
        return self._output

    @property
    def inbound_stream(self) -> MockInboundStream:
        return self._inbound

    def close(self) -> None:
        self.close_count += 1

    # -- Simulation helpers --

    def simulate_peer_data(self, data: bytes) -> None:
        """Deliver *data* on the inbound stream (ignored by the monitor)."""
        for i in range(len(data)):
            self._inbound.feed(data[i:i + 1])

    def simulate_peer_close(self) -> None:
        """Deliver end-of-stream, as when the peer closes its socket."""
        self._inbound.feed(_EOF)

    def simulate_read_error(self, error: OSError | None = None) -> None:
        """Make the pending inbound read raise *error*."""
        self._inbound.feed(error or ConnectionResetError("simulated connection reset"))


class MockTransportFactory(TransportFactory):
    """Factory that hands out :class:`MockConnection` instances.

    Args:
        fail_connect: When ``True``, :meth:`open_connection` raises
            ``ConnectionRefusedError``.
    """

    def __init__(self, fail_connect: bool = False) -> None:
        self.fail_connect = fail_connect
        self.connections: list[MockConnection] = []

    @property
    def last_connection(self) -> MockConnection | None:
        return self.connections[-1] if self.connections else None

    def open_connection(self, address: str, port: int) -> MockConnection:
        if self.fail_connect:
            raise ConnectionRefusedError(f"simulated refusal from {address}:{port}")
        conn = MockConnection(f"{address}:{port}")
        self.connections.append(conn)
        return conn
