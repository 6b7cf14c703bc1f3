"""Hardware abstraction interfaces (ABCs).

The GPIO and Mock backends both implement these interfaces, ensuring
parity between production and development / test environments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from rpiui_remote.core.models.config import PinConfig
from rpiui_remote.core.models.state import ButtonIdentity


# ---------------------------------------------------------------------------
# Input pins
# ---------------------------------------------------------------------------

class InputPinInterface(ABC):
    """One open button input.

    The pin is configured input-only with a pull-down bias and notifies on
    both edges.  Notifications may arrive on a driver-owned thread.
    """

    @property
    @abstractmethod
    def identity(self) -> ButtonIdentity:
        """The button this pin is wired to."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """``True`` once :meth:`close` has released the pin."""

    @abstractmethod
    def register_change_callback(self, callback: Callable[[], None]) -> None:
        """Register *callback* to fire on every level transition."""

    @abstractmethod
    def close(self) -> None:
        """Release the pin.  Callbacks stop firing afterwards."""


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

class HardwareFactory(ABC):
    """Opens input pins for the current platform."""

    @abstractmethod
    def open_input_pin(self, identity: ButtonIdentity, config: PinConfig) -> InputPinInterface:
        """Open the input for *identity* at *config*.

        Raises:
            OSError / RuntimeError: the pin could not be acquired.
        """

    def cleanup(self) -> None:
        """Release platform resources.  No-op by default (mock)."""
