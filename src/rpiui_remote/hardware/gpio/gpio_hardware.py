"""GPIO input pins for Raspberry Pi.

:class:`GPIOInputPin` implements
:class:`~rpiui_remote.core.interfaces.hardware.InputPinInterface` using
``gpiozero.DigitalInputDevice``.

Pin factory (``LGPIOFactory``) is set **once** by
:class:`~rpiui_remote.hardware.gpio.gpio_factory.GPIOHardwareFactory`
before any pins are opened.

.. note::

   The ``gpiozero`` import is guarded so the module can be imported (but
   not instantiated) on non-Pi platforms for testing with
   ``unittest.mock.patch``.
"""

from __future__ import annotations

import logging as _logging
from typing import Callable

from rpiui_remote.core.interfaces.hardware import InputPinInterface
from rpiui_remote.core.models.config import PinConfig
from rpiui_remote.core.models.state import ButtonIdentity

_log = _logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lazy import, patched by unit tests on non-Pi platforms.
# ``@patch("rpiui_remote.hardware.gpio.gpio_hardware.DigitalInputDevice")``
# ---------------------------------------------------------------------------
try:
    from gpiozero import DigitalInputDevice  # type: ignore[import-untyped]
except ImportError:  # pragma: no cover (non-Pi)
    DigitalInputDevice = None  # type: ignore[assignment,misc]


class GPIOInputPin(InputPinInterface):
    """One button input via ``gpiozero.DigitalInputDevice``.

    ``pull_up=False`` selects the pull-down bias, so the idle level reads
    ``False``.  The same callback is attached to ``when_activated`` and
    ``when_deactivated`` to fire on both edges.
    """

    def __init__(self, identity: ButtonIdentity, config: PinConfig) -> None:
        if DigitalInputDevice is None:
            raise RuntimeError("gpiozero is not installed")
        self._identity = identity
        self._device = DigitalInputDevice(
            config.pin, pull_up=False, bounce_time=config.bounce_time,
        )
        _log.info(
            "GPIOInputPin %d opened (controller=%d, pin=%d)",
            identity, config.controller, config.pin,
        )

    @property
    def identity(self) -> ButtonIdentity:
        return self._identity

    @property
    def closed(self) -> bool:
        return bool(self._device.closed)

    def register_change_callback(self, callback: Callable[[], None]) -> None:
        self._device.when_activated = callback
        self._device.when_deactivated = callback

    def close(self) -> None:
        self._device.when_activated = None
        self._device.when_deactivated = None
        self._device.close()
        _log.debug("GPIOInputPin %d closed", self._identity)
