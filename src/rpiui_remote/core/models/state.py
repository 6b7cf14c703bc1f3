"""Runtime state enumerations."""

from __future__ import annotations

from enum import Enum, IntEnum


class ButtonIdentity(IntEnum):
    """The three monitored buttons.

    The numeric value is also the single byte written to the wire when
    the button's input changes.
    """

    BUTTON_1 = 1
    BUTTON_2 = 2
    BUTTON_3 = 3

    @property
    def wire_byte(self) -> bytes:
        return bytes([self.value])


class LifecycleState(str, Enum):
    """Coarse application state.  Transitions only ever move forward."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class MonitorState(str, Enum):
    """State of the :class:`ConnectionMonitor` read loop."""

    IDLE = "idle"
    MONITORING = "monitoring"
    TERMINATED = "terminated"
