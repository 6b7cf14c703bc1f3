"""Dev console — press mock buttons by typing ``1``, ``2`` or ``3``.

Only used with :class:`MockHardwareFactory`, where there is no real
switch to push.  Reads lines from a text stream on a daemon thread.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import TextIO

from rpiui_remote.core.models.state import ButtonIdentity
from rpiui_remote.hardware.mock.mock_factory import MockHardwareFactory

_log = logging.getLogger(__name__)

_VALID = {str(int(i)) for i in ButtonIdentity}


class DevConsole:
    """Maps each input line to one simulated edge on a mock pin.

    Args:
        factory: The mock factory whose pins are pressed.
        stream: Line source (defaults to ``sys.stdin``).
    """

    def __init__(self, factory: MockHardwareFactory, stream: TextIO | None = None) -> None:
        self._factory = factory
        self._stream = stream if stream is not None else sys.stdin
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._thread = threading.Thread(target=self.run, name="dev-console", daemon=True)
        self._thread.start()
        _log.info("Dev console ready — type 1, 2 or 3 and press Enter to push a button")

    def run(self) -> None:
        """Process lines until the stream ends."""
        for line in self._stream:
            self.handle_line(line)

    def handle_line(self, line: str) -> bool:
        """Simulate the button named by *line*.  Returns ``False`` if ignored."""
        token = line.strip()
        if token not in _VALID:
            if token:
                _log.warning("Dev console: unknown button %r (expected 1, 2 or 3)", token)
            return False
        self._factory.simulate_change(int(token))
        return True
