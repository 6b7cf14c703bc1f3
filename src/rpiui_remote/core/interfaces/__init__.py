"""Hardware and transport abstraction interfaces."""

from rpiui_remote.core.interfaces.hardware import HardwareFactory, InputPinInterface
from rpiui_remote.core.interfaces.transport import (
    ConnectionInterface,
    InboundStreamInterface,
    OutputChannelInterface,
    TransportFactory,
)

__all__ = [
    "ConnectionInterface",
    "HardwareFactory",
    "InboundStreamInterface",
    "InputPinInterface",
    "OutputChannelInterface",
    "TransportFactory",
]
