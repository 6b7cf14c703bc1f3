"""ConnectionMonitor — detects peer disconnection with a blocking read.

The peer never sends anything meaningful, so reading the inbound stream
is only a way to learn that it closed.  The read loop runs in a daemon
thread; closing the inbound stream is the only way to stop it.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from rpiui_remote.core.interfaces.transport import InboundStreamInterface
from rpiui_remote.core.models.state import MonitorState

_log = logging.getLogger(__name__)


class ConnectionMonitor:
    """Runs ``read(1)`` until end-of-stream or an I/O error, then reports once.

    Args:
        inbound_stream: Inbound half of the connection (sole reader).
        on_disconnect: Called exactly once, on the monitor thread, with a
            short reason once the loop terminates.
    """

    def __init__(
        self,
        inbound_stream: InboundStreamInterface,
        on_disconnect: Callable[[str], None],
    ) -> None:
        self._stream = inbound_stream
        self._on_disconnect = on_disconnect
        self._state = MonitorState.IDLE
        self._thread: threading.Thread | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def thread(self) -> threading.Thread | None:
        return self._thread

    def start(self) -> None:
        """Launch the read loop and return immediately."""
        if self._thread is not None:
            raise RuntimeError("ConnectionMonitor already started")
        self._state = MonitorState.MONITORING
        self._thread = threading.Thread(
            target=self._run, name="connection-monitor", daemon=True,
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the loop to finish.  Returns ``True`` if it has."""
        if self._thread is None:
            return True
        self._thread.join(timeout=timeout)
        return not self._thread.is_alive()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(self) -> None:
        reason = "end of stream"
        try:
            while self._stream.read(1):
                pass  # inbound payload is ignored
        except OSError as exc:
            reason = f"read error: {exc}"
            _log.warning("I/O error while monitoring the connection: %s", exc)
        finally:
            self._state = MonitorState.TERMINATED
            _log.info("Stream has been closed (%s)", reason)
            try:
                self._on_disconnect(reason)
            except Exception:
                _log.exception("Disconnect handler raised")
