"""Core services: event forwarding, connection monitoring, lifecycle."""

from rpiui_remote.core.connection_monitor import ConnectionMonitor
from rpiui_remote.core.event_forwarder import EventForwarder
from rpiui_remote.core.lifecycle import LifecycleController

__all__ = [
    "ConnectionMonitor",
    "EventForwarder",
    "LifecycleController",
]
