"""GPIOHardwareFactory — opens real GPIO inputs on Raspberry Pi.

Sets the ``gpiozero`` pin factory to ``LGPIOFactory`` once during
construction; pins are opened on demand by the lifecycle controller,
which owns their release.
"""

from __future__ import annotations

import logging as _logging

from rpiui_remote.core.interfaces.hardware import HardwareFactory, InputPinInterface
from rpiui_remote.core.models.config import PinConfig
from rpiui_remote.core.models.state import ButtonIdentity
from rpiui_remote.hardware.gpio.gpio_hardware import GPIOInputPin

_log = _logging.getLogger(__name__)


def _setup_pin_factory() -> None:
    """Configure gpiozero to use ``LGPIOFactory`` (for Pi 5 compat)."""
    try:
        from gpiozero import Device  # type: ignore[import-untyped]
        from gpiozero.pins.lgpio import LGPIOFactory  # type: ignore[import-untyped]

        Device.pin_factory = LGPIOFactory()
        _log.info("gpiozero pin factory set to LGPIOFactory")
    except ImportError:
        _log.warning(
            "LGPIOFactory not available — using gpiozero default pin factory"
        )


class GPIOHardwareFactory(HardwareFactory):
    """Factory that opens gpiozero-backed button inputs."""

    def __init__(self) -> None:
        _setup_pin_factory()
        _log.info("GPIOHardwareFactory ready")

    def open_input_pin(self, identity: ButtonIdentity, config: PinConfig) -> InputPinInterface:
        return GPIOInputPin(identity, config)

    def cleanup(self) -> None:
        """Close the gpiozero pin factory."""
        try:
            from gpiozero import Device  # type: ignore[import-untyped]
        except ImportError:
            return
        if Device.pin_factory is not None:
            Device.pin_factory.close()
        _log.info("GPIOHardwareFactory cleanup complete")
