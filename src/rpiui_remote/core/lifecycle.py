"""LifecycleController — startup & shutdown orchestration.

Startup acquires the connection, the three button inputs, the forwarders
and the connection monitor as one unit; shutdown releases them as one
unit, exactly once, whichever trigger gets there first (explicit stop,
peer disconnect, read error).
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Mapping

from rpiui_remote.core.connection_monitor import ConnectionMonitor
from rpiui_remote.core.errors import ConnectionFailedError, LifecycleError, PinAcquisitionError
from rpiui_remote.core.event_forwarder import EventForwarder
from rpiui_remote.core.interfaces.hardware import HardwareFactory, InputPinInterface
from rpiui_remote.core.interfaces.transport import ConnectionInterface, TransportFactory
from rpiui_remote.core.models.config import PinConfig
from rpiui_remote.core.models.state import ButtonIdentity, LifecycleState

_log = logging.getLogger(__name__)


class LifecycleController:
    """Owns the connection, the button inputs and the connection monitor.

    Args:
        hardware_factory: Opens the button inputs.
        transport_factory: Opens the connection to the peer.
        pin_configs: Pin location per button identity.
        on_stopped: Called once when the controller reaches ``STOPPED``,
            from whichever thread ran the shutdown.
        join_timeout: Seconds to wait for the monitor thread on shutdown.
    """

    def __init__(
        self,
        hardware_factory: HardwareFactory,
        transport_factory: TransportFactory,
        pin_configs: Mapping[int, PinConfig],
        on_stopped: Callable[[], None] | None = None,
        join_timeout: float = 2.0,
    ) -> None:
        self._hardware = hardware_factory
        self._transport = transport_factory
        self._pin_configs = {ButtonIdentity(k): v for k, v in pin_configs.items()}
        self._on_stopped = on_stopped
        self._join_timeout = join_timeout

        self._state = LifecycleState.NOT_STARTED
        self._state_lock = threading.Lock()
        self._stopped = threading.Event()

        # Created during start(), cleared by shutdown()
        self._connection: ConnectionInterface | None = None
        self._pins: dict[ButtonIdentity, InputPinInterface] = {}
        self._forwarders: dict[ButtonIdentity, EventForwarder] = {}
        self._monitor: ConnectionMonitor | None = None

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def forwarders(self) -> dict[ButtonIdentity, EventForwarder]:
        """Forwarder per button (empty outside ``RUNNING``)."""
        return dict(self._forwarders)

    @property
    def monitor(self) -> ConnectionMonitor | None:
        return self._monitor

    def wait_stopped(self, timeout: float | None = None) -> bool:
        """Block until ``STOPPED``.  Returns ``False`` on timeout."""
        return self._stopped.wait(timeout)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def start(self, address: str, port: int) -> None:
        """Connect → open inputs → wire forwarders → launch monitor.

        Returns once the monitor thread is running.  On failure every
        resource acquired so far is released and the state stays
        ``NOT_STARTED``.

        Raises:
            ConnectionFailedError: the peer is unreachable.
            PinAcquisitionError: a button input could not be opened.
            LifecycleError: the controller was already started.
        """
        with self._state_lock:
            if self._state is not LifecycleState.NOT_STARTED:
                raise LifecycleError(f"cannot start from state {self._state.value}")

            # 1. Connect
            try:
                connection = self._transport.open_connection(address, port)
            except (OSError, UnicodeError) as exc:
                # UnicodeError: host name rejected by the idna codec.
                _log.error("Unable to connect to RPIUIDemo on %s port %d: %s", address, port, exc)
                raise ConnectionFailedError(
                    f"Unable to connect to RPIUIDemo instance at {address}:{port}: {exc}"
                ) from exc
            _log.info("Connected to RPIUIDemo on %s port %d", address, port)

            # 2. Open inputs (release everything on failure)
            _log.info("Opening inputs for buttons %s", ", ".join(str(int(i)) for i in ButtonIdentity))
            pins: dict[ButtonIdentity, InputPinInterface] = {}
            try:
                for identity in ButtonIdentity:
                    pins[identity] = self._hardware.open_input_pin(
                        identity, self._pin_configs[identity]
                    )
            except Exception as exc:
                _log.error("Unable to open GPIO pin for button %d: %s", identity, exc)
                self._release_all(connection, pins)
                raise PinAcquisitionError(
                    f"Unable to open GPIO pin for button {int(identity)}: {exc}"
                ) from exc

            # 3. Wire forwarders
            forwarders: dict[ButtonIdentity, EventForwarder] = {}
            for identity, pin in pins.items():
                forwarder = EventForwarder(identity, connection.output_channel)
                pin.register_change_callback(forwarder.on_input_changed)
                forwarders[identity] = forwarder

            self._connection = connection
            self._pins = pins
            self._forwarders = forwarders
            self._state = LifecycleState.RUNNING

            # 4. Launch monitor
            self._monitor = ConnectionMonitor(
                connection.inbound_stream, self._on_peer_disconnected,
            )
            self._monitor.start()

        _log.info("LifecycleController running (peer=%s)", connection.peer)

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def shutdown(self, reason: str = "user request") -> bool:
        """Release every resource exactly once.

        Safe to call repeatedly and from several threads.  Only the first
        call made while ``RUNNING`` does the work and returns ``True``;
        every other call is a no-op returning ``False``.
        """
        with self._state_lock:
            if self._state is not LifecycleState.RUNNING:
                _log.debug("shutdown(%s) ignored in state %s", reason, self._state.value)
                return False
            self._state = LifecycleState.SHUTTING_DOWN
            connection, pins = self._connection, self._pins
            monitor = self._monitor
            self._connection = None
            self._pins = {}
            self._forwarders = {}

        _log.info("Stopping RemoteRPIUIController: %s", reason)
        self._release_all(connection, pins)

        if monitor is not None and monitor.thread is not threading.current_thread():
            if not monitor.join(self._join_timeout):
                _log.warning("Connection monitor did not exit within %.1fs", self._join_timeout)
        self._monitor = None

        with self._state_lock:
            self._state = LifecycleState.STOPPED
        self._stopped.set()
        _log.info("LifecycleController stopped")

        if self._on_stopped is not None:
            try:
                self._on_stopped()
            except Exception:
                _log.exception("on_stopped callback raised")
        return True

    def _on_peer_disconnected(self, reason: str) -> None:
        """Monitor thread: the peer went away."""
        self.shutdown(reason=f"peer disconnected ({reason})")

    @staticmethod
    def _release_all(
        connection: ConnectionInterface | None,
        pins: Mapping[ButtonIdentity, InputPinInterface],
    ) -> None:
        """Best-effort release: one failure never stops the rest."""
        steps: list[tuple[str, Callable[[], None]]] = []
        if connection is not None:
            steps += [
                ("output channel", connection.output_channel.close),
                ("inbound stream", connection.inbound_stream.close),
                ("connection", connection.close),
            ]
        steps += [(f"button {int(i)} pin", pin.close) for i, pin in pins.items()]

        for name, release in steps:
            try:
                release()
            except Exception:
                _log.exception("Error releasing %s", name)
