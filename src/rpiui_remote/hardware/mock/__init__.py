"""Mock hardware backend for development and testing."""

from rpiui_remote.hardware.mock.mock_factory import MockHardwareFactory
from rpiui_remote.hardware.mock.mock_hardware import MockInputPin

__all__ = [
    "MockHardwareFactory",
    "MockInputPin",
]
