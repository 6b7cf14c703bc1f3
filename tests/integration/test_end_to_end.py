"""Integration test — real TCP peer, mock buttons, full lifecycle.

Starts the application against a listening peer on localhost, pushes
button 2, checks the byte that arrives, then closes the peer's socket and
waits for the application to stop by itself.
"""

from __future__ import annotations

import socket
import threading
from unittest.mock import MagicMock

import pytest

from rpiui_remote.app import RemoteControllerApp
from rpiui_remote.core.errors import ConnectionFailedError
from rpiui_remote.core.event_forwarder import EventForwarder
from rpiui_remote.core.lifecycle import LifecycleController
from rpiui_remote.core.models.config import ConnectionConfig, HardwareConfig, RemoteConfig, SystemConfig
from rpiui_remote.core.models.state import ButtonIdentity, LifecycleState
from rpiui_remote.hardware.mock.mock_factory import MockHardwareFactory
from rpiui_remote.transport.socket_transport import SocketTransportFactory
from tests.helpers.runtime import listen_on, wait_for_sync


@pytest.fixture
def peer_server():
    server = listen_on("127.0.0.1", preferred_port=19054)
    yield server
    server.close()


def _start_app(port: int, hardware: MockHardwareFactory, on_destroyed=None) -> RemoteControllerApp:
    config = RemoteConfig(
        connection=ConnectionConfig(address="localhost", port=port, connect_timeout=5.0),
        system=SystemConfig(shutdown_join_timeout=2.0),
    )
    app = RemoteControllerApp(
        config, hardware, SocketTransportFactory(connect_timeout=5.0), on_destroyed=on_destroyed,
    )
    app.on_start()
    return app


class TestEndToEnd:
    def test_button_push_then_peer_disconnect(self, peer_server):
        port = peer_server.getsockname()[1]
        hardware = MockHardwareFactory()
        destroyed = MagicMock()

        app = _start_app(port, hardware, destroyed)
        peer, _ = peer_server.accept()
        peer.settimeout(5.0)
        try:
            assert app.state is LifecycleState.RUNNING

            hardware.simulate_change(ButtonIdentity.BUTTON_2)
            assert peer.recv(1) == b"\x02"
        finally:
            peer.close()

        assert app.wait(timeout=5.0)
        assert app.state is LifecycleState.STOPPED
        wait_for_sync(lambda: destroyed.call_count == 1)
        assert len(hardware.pins) == 3
        assert all(p.closed for p in hardware.pins.values())

    def test_every_button_and_explicit_stop(self, peer_server):
        port = peer_server.getsockname()[1]
        hardware = MockHardwareFactory()

        app = _start_app(port, hardware)
        peer, _ = peer_server.accept()
        peer.settimeout(5.0)
        try:
            for identity in (1, 3, 2, 1):
                hardware.simulate_change(identity)

            received = b""
            while len(received) < 4:
                received += peer.recv(4 - len(received))
            assert received == b"\x01\x03\x02\x01"

            assert app.on_stop() is True
            # The peer sees an orderly close and nothing more.
            assert peer.recv(1) == b""
        finally:
            peer.close()

        assert all(p.closed for p in hardware.pins.values())

    def test_unreachable_peer_acquires_no_pins(self):
        probe = socket.socket()
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
        probe.close()
        hardware = MockHardwareFactory()

        with pytest.raises(ConnectionFailedError):
            _start_app(port, hardware)

        assert hardware.open_calls == []


class _RecordingSocketTransport(SocketTransportFactory):
    def __init__(self) -> None:
        super().__init__(connect_timeout=5.0)
        self.connection = None

    def open_connection(self, address, port):
        self.connection = super().open_connection(address, port)
        return self.connection


class TestBackpressure:
    def test_shutdown_completes_while_write_is_blocked(self, peer_server):
        port = peer_server.getsockname()[1]
        hardware = MockHardwareFactory()
        transport = _RecordingSocketTransport()
        ctl = LifecycleController(hardware, transport, HardwareConfig().button_pins, join_timeout=2.0)
        ctl.start("127.0.0.1", port)
        peer, _ = peer_server.accept()  # never read from

        flood = threading.Thread(
            target=EventForwarder(ButtonIdentity.BUTTON_1, _Flooding(transport.connection.output_channel))
            .on_input_changed,
            daemon=True,
        )
        flood.start()
        try:
            flood.join(timeout=0.3)
            assert flood.is_alive()

            stopper = threading.Thread(target=ctl.shutdown, daemon=True)
            stopper.start()
            stopper.join(timeout=5.0)

            assert not stopper.is_alive()
            assert ctl.state is LifecycleState.STOPPED
            assert all(p.closed for p in hardware.pins.values())
            flood.join(timeout=5.0)
            assert not flood.is_alive()
        finally:
            ctl.shutdown()
            peer.close()


class _Flooding:
    """Output channel wrapper that turns each event into a huge write."""

    def __init__(self, channel) -> None:
        self._channel = channel

    def write(self, data: bytes) -> None:
        self._channel.write(data * (50 * 1024 * 1024))
