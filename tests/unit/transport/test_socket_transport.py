"""Tests for the TCP socket transport over real local sockets."""

from __future__ import annotations

import socket
import threading

import pytest

from rpiui_remote.core.errors import ChannelClosedError
from rpiui_remote.core.interfaces.transport import ConnectionInterface
from rpiui_remote.transport.socket_transport import SocketConnection, SocketTransportFactory
from tests.helpers.runtime import listen_on


@pytest.fixture
def pair():
    """A SocketConnection and the raw peer socket at the other end."""
    ours, theirs = socket.socketpair()
    theirs.settimeout(5.0)
    conn = SocketConnection(ours, "pair:0")
    yield conn, theirs
    conn.close()
    theirs.close()


class TestSocketConnection:
    def test_implements_interface(self, pair):
        conn, _ = pair
        assert isinstance(conn, ConnectionInterface)
        assert conn.peer == "pair:0"

    def test_write_reaches_peer(self, pair):
        conn, peer = pair
        conn.output_channel.write(b"\x02")
        assert peer.recv(1) == b"\x02"

    def test_write_after_close_raises(self, pair):
        conn, _ = pair
        conn.output_channel.close()
        assert conn.output_channel.closed
        with pytest.raises(ChannelClosedError):
            conn.output_channel.write(b"\x01")

    def test_closing_output_sends_eof(self, pair):
        conn, peer = pair
        conn.output_channel.close()
        assert peer.recv(1) == b""

    def test_output_close_is_idempotent(self, pair):
        conn, _ = pair
        conn.output_channel.close()
        conn.output_channel.close()

    def test_read_sees_peer_data_then_eof(self, pair):
        conn, peer = pair
        peer.sendall(b"x")
        assert conn.inbound_stream.read(1) == b"x"
        peer.shutdown(socket.SHUT_WR)
        assert conn.inbound_stream.read(1) == b""

    def test_closing_inbound_unblocks_reader(self, pair):
        conn, _ = pair
        result: list[bytes | Exception] = []

        def _reader() -> None:
            try:
                result.append(conn.inbound_stream.read(1))
            except OSError as exc:
                result.append(exc)

        reader = threading.Thread(target=_reader, daemon=True)
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()

        conn.inbound_stream.close()
        reader.join(timeout=5.0)

        assert not reader.is_alive()
        assert len(result) == 1


class TestSocketTransportFactory:
    def test_connects_to_listener(self):
        server = listen_on()
        try:
            port = server.getsockname()[1]
            conn = SocketTransportFactory(connect_timeout=2.0).open_connection("127.0.0.1", port)
            accepted, _ = server.accept()
            try:
                assert conn.peer == f"127.0.0.1:{port}"
                conn.output_channel.write(b"\x03")
                assert accepted.recv(1) == b"\x03"
            finally:
                conn.close()
                accepted.close()
        finally:
            server.close()

    def test_refused_raises_oserror(self):
        server = listen_on()
        port = server.getsockname()[1]
        server.close()
        with pytest.raises(OSError):
            SocketTransportFactory(connect_timeout=2.0).open_connection("127.0.0.1", port)


class TestPeerNotReading:
    """A peer that stops reading must not be able to hold up close()."""

    def test_close_fails_blocked_writer(self):
        server = listen_on()
        port = server.getsockname()[1]
        conn = SocketTransportFactory(connect_timeout=2.0).open_connection("127.0.0.1", port)
        accepted, _ = server.accept()  # never read from
        writer_result: list[BaseException | None] = []

        def _flood() -> None:
            try:
                conn.output_channel.write(b"\x01" * (50 * 1024 * 1024))
                writer_result.append(None)
            except OSError as exc:
                writer_result.append(exc)

        writer = threading.Thread(target=_flood, daemon=True)
        writer.start()
        try:
            writer.join(timeout=0.3)
            assert writer.is_alive()  # stuck in sendall

            closer = threading.Thread(target=conn.output_channel.close, daemon=True)
            closer.start()
            closer.join(timeout=2.0)
            assert not closer.is_alive()

            writer.join(timeout=5.0)
            assert not writer.is_alive()
            assert isinstance(writer_result[0], OSError)
        finally:
            conn.close()
            accepted.close()
            server.close()
