"""Hardware factory — platform detection and factory creation.

Selects GPIO on Raspberry Pi, Mock on everything else (Windows, Mac, CI).
"""

from __future__ import annotations

import logging

from rpiui_remote.core.interfaces.hardware import HardwareFactory
from rpiui_remote.core.models.config import RemoteConfig

_log = logging.getLogger(__name__)


def _is_raspberry_pi() -> bool:
    """Return ``True`` if running on a Raspberry Pi."""
    try:
        with open("/sys/firmware/devicetree/base/model") as f:
            model = f.read().lower()
        return "raspberry pi" in model
    except OSError:
        return False


def create_hardware_factory(config: RemoteConfig) -> HardwareFactory:
    """Return the appropriate :class:`HardwareFactory` for the platform.

    * On Raspberry Pi (detected via device-tree) → ``GPIOHardwareFactory``.
    * Everywhere else (or if ``dev_mode`` is ``True``) → ``MockHardwareFactory``.
    """
    is_pi = _is_raspberry_pi()
    if config.system.dev_mode or not is_pi:
        from rpiui_remote.hardware.mock.mock_factory import MockHardwareFactory

        _log.info("Using MockHardwareFactory (dev_mode=%s, is_pi=%s)",
                  config.system.dev_mode, is_pi)
        return MockHardwareFactory()

    from rpiui_remote.hardware.gpio.gpio_factory import GPIOHardwareFactory

    _log.info("Using GPIOHardwareFactory")
    return GPIOHardwareFactory()
