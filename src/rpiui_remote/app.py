"""RemoteControllerApp — the entry/exit hooks a supervising runtime calls.

``on_start`` connects and wires the buttons, ``on_stop`` tears down, and
``on_destroyed`` tells the host the application has stopped by itself
(peer disconnect) so it can finish its own teardown.
"""

from __future__ import annotations

import logging
from typing import Callable

from rpiui_remote.core.interfaces.hardware import HardwareFactory
from rpiui_remote.core.interfaces.transport import TransportFactory
from rpiui_remote.core.lifecycle import LifecycleController
from rpiui_remote.core.models.config import RemoteConfig
from rpiui_remote.core.models.state import LifecycleState

_log = logging.getLogger(__name__)


class RemoteControllerApp:
    """Host-facing wrapper around :class:`LifecycleController`.

    Args:
        config: Validated configuration (address/port already defaulted).
        hardware_factory: Platform hardware factory.
        transport_factory: Platform transport factory.
        on_destroyed: Called once when the application reaches ``STOPPED``.
    """

    def __init__(
        self,
        config: RemoteConfig,
        hardware_factory: HardwareFactory,
        transport_factory: TransportFactory,
        on_destroyed: Callable[[], None] | None = None,
    ) -> None:
        self._config = config
        self._hardware = hardware_factory
        self._on_destroyed = on_destroyed
        self._controller = LifecycleController(
            hardware_factory=hardware_factory,
            transport_factory=transport_factory,
            pin_configs=config.hardware.button_pins,
            on_stopped=self._notify_destroyed,
            join_timeout=config.system.shutdown_join_timeout,
        )

    @property
    def controller(self) -> LifecycleController:
        return self._controller

    @property
    def state(self) -> LifecycleState:
        return self._controller.state

    def on_start(self) -> None:
        """Start the application.  Startup errors propagate to the host."""
        _log.info("Starting RemoteRPIUIController application")
        conn = self._config.connection
        self._controller.start(conn.address, conn.port)

    def on_stop(self) -> bool:
        """Stop the application.  Returns ``True`` once it is stopped."""
        if self._controller.state is LifecycleState.NOT_STARTED:
            return True
        _log.info("Stopping RemoteRPIUIController application")
        self._controller.shutdown(reason="host stop")
        return self._controller.wait_stopped(self._config.system.shutdown_join_timeout + 1.0)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the application has stopped (for any reason)."""
        return self._controller.wait_stopped(timeout)

    def _notify_destroyed(self) -> None:
        try:
            self._hardware.cleanup()
        except Exception:
            _log.exception("Error cleaning up hardware factory")
        if self._on_destroyed is not None:
            self._on_destroyed()
