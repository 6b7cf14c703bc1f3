"""MockHardwareFactory — opens in-memory inputs for dev and test.

Every opened pin is kept in :attr:`MockHardwareFactory.pins` so the dev
console and tests can reach ``simulate_change()`` directly.
"""

from __future__ import annotations

from rpiui_remote.core.interfaces.hardware import HardwareFactory, InputPinInterface
from rpiui_remote.core.models.config import PinConfig
from rpiui_remote.core.models.state import ButtonIdentity
from rpiui_remote.hardware.mock.mock_hardware import MockInputPin


class MockHardwareFactory(HardwareFactory):
    """Factory that returns :class:`MockInputPin` instances.

    Args:
        fail_on: Identities whose acquisition raises ``OSError``, to
            exercise startup rollback.
    """

    def __init__(self, fail_on: set[ButtonIdentity] | None = None) -> None:
        self.pins: dict[ButtonIdentity, MockInputPin] = {}
        self.open_calls: list[ButtonIdentity] = []
        self._fail_on = set(fail_on or ())

    def open_input_pin(self, identity: ButtonIdentity, config: PinConfig) -> InputPinInterface:
        self.open_calls.append(identity)
        if identity in self._fail_on:
            raise OSError(f"simulated failure opening pin {int(identity)}")
        pin = MockInputPin(identity, config)
        self.pins[identity] = pin
        return pin

    def simulate_change(self, identity: ButtonIdentity | int) -> None:
        """Fire an edge on the pin for *identity*, if it is open."""
        pin = self.pins.get(ButtonIdentity(identity))
        if pin is not None:
            pin.simulate_change()
