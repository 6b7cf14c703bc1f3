"""Exception types raised by the controller.

Only startup failures are meant to reach the host; runtime I/O errors in
callback and monitor threads are logged where they happen.
"""

from __future__ import annotations


class RemoteControllerError(Exception):
    """Base class for controller errors."""


class LifecycleError(RemoteControllerError):
    """A lifecycle operation was called in the wrong state."""


class StartupError(RemoteControllerError):
    """Startup failed; nothing acquired during the attempt is left open."""


class ConnectionFailedError(StartupError):
    """The connection to the RPIUI demo could not be opened."""


class PinAcquisitionError(StartupError):
    """A button input could not be opened."""


class ChannelClosedError(OSError):
    """Write attempted on an output channel that has begun closing."""
