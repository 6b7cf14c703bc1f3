"""Mock input pins for development and testing.

:class:`MockInputPin` implements the input-pin ABC with in-memory state
and a ``simulate_change()`` helper for the dev console and tests.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from rpiui_remote.core.interfaces.hardware import InputPinInterface
from rpiui_remote.core.models.config import PinConfig
from rpiui_remote.core.models.state import ButtonIdentity

_log = logging.getLogger(__name__)


class MockInputPin(InputPinInterface):
    """In-memory button input.

    Attributes:
        config: The pin location it was opened with.
        value: Current logical level (starts ``False``, pull-down idle).
        close_count: Number of :meth:`close` calls, for double-close checks.
    """

    def __init__(self, identity: ButtonIdentity, config: PinConfig) -> None:
        self._identity = identity
        self.config = config
        self.value = False
        self.close_count = 0
        self._callback: Callable[[], None] | None = None
        self._lock = threading.Lock()

    @property
    def identity(self) -> ButtonIdentity:
        return self._identity

    @property
    def closed(self) -> bool:
        return self.close_count > 0

    def register_change_callback(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    def close(self) -> None:
        self.close_count += 1
        self._callback = None

    # -- Simulation helpers --

    def simulate_change(self) -> None:
        """Toggle the level and fire the change callback.

        Edges on one pin are delivered in order, as a GPIO driver would.
        """
        with self._lock:
            if self.closed:
                _log.debug("Pin %d is closed — edge ignored", self._identity)
                return
            self.value = not self.value
            cb = self._callback
            if cb:
                cb()
            else:
                _log.debug("No change callback registered for pin %d", self._identity)
