"""EventForwarder — turns a button edge into one byte on the wire."""

from __future__ import annotations

import threading

from rpiui_remote.core.interfaces.transport import OutputChannelInterface
from rpiui_remote.core.models.state import ButtonIdentity
from rpiui_remote.log_config.logger import ContextualLogger, get_logger

_log = get_logger(__name__)


class EventForwarder:
    """Writes ``bytes([identity])`` to the shared output channel on every edge.

    One forwarder exists per button; all of them share one channel, which
    serializes concurrent writes.  :meth:`on_input_changed` is called on
    GPIO driver threads, so a failed write is logged and dropped here and
    never reaches the driver or affects the application lifecycle.

    Args:
        identity: The button this forwarder reports.
        output_channel: Shared outbound half of the connection.
    """

    def __init__(self, identity: ButtonIdentity, output_channel: OutputChannelInterface) -> None:
        self._identity = ButtonIdentity(identity)
        self._channel = output_channel
        self._log = ContextualLogger(_log, button=int(self._identity))
        self._count_lock = threading.Lock()
        self.events_forwarded = 0
        self.events_dropped = 0

    @property
    def identity(self) -> ButtonIdentity:
        return self._identity

    def on_input_changed(self) -> None:
        """Pin change callback (either edge)."""
        self._log.info("Button %d pushed", self._identity)
        try:
            self._channel.write(self._identity.wire_byte)
        except OSError as exc:
            self._log.warning("I/O error while sending data: %s", exc)
            with self._count_lock:
                self.events_dropped += 1
            return
        with self._count_lock:
            self.events_forwarded += 1
