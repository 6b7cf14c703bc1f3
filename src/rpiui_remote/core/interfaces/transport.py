"""Transport abstraction interfaces (ABCs).

A :class:`ConnectionInterface` is one persistent byte stream to the
remote peer, split into its outbound :class:`OutputChannelInterface` and
inbound :class:`InboundStreamInterface` halves.  The socket and mock
backends both implement these.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class OutputChannelInterface(ABC):
    """Outbound half of a connection.  Safe for concurrent writers."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write *data* in full, atomically with respect to other writers.

        Raises:
            ChannelClosedError: the channel has begun closing.
            OSError: the transport failed.
        """

    @abstractmethod
    def close(self) -> None:
        """Stop accepting writes and release the outbound direction."""


class InboundStreamInterface(ABC):
    """Inbound half of a connection.  Has a single reader."""

    @abstractmethod
    def read(self, size: int = 1) -> bytes:
        """Block until data arrives; ``b""`` means end of stream.

        Raises:
            OSError: the read failed.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the inbound direction, unblocking a pending :meth:`read`."""


class ConnectionInterface(ABC):
    """A connected byte stream to one remote endpoint."""

    @property
    @abstractmethod
    def peer(self) -> str:
        """Human-readable ``host:port`` of the remote endpoint."""

    @property
    @abstractmethod
    def output_channel(self) -> OutputChannelInterface: ...

    @property
    @abstractmethod
    def inbound_stream(self) -> InboundStreamInterface: ...

    @abstractmethod
    def close(self) -> None:
        """Close the underlying connection."""


class TransportFactory(ABC):
    """Opens connections for the current platform."""

    @abstractmethod
    def open_connection(self, address: str, port: int) -> ConnectionInterface:
        """Connect to *address*:*port*.

        Raises:
            OSError: the endpoint is unreachable.
        """
