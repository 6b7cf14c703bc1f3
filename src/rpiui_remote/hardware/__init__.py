"""Hardware abstraction: factory + platform backends (gpio, mock)."""

from rpiui_remote.hardware.factory import create_hardware_factory

__all__ = ["create_hardware_factory"]
