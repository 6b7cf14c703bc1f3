"""rpiui-remote — command-line entry point (composition root).

Wires together: Config → logging → HardwareFactory + TransportFactory →
RemoteControllerApp.  Runs until the peer disconnects or the process is
asked to stop (SIGINT / SIGTERM).
"""

from __future__ import annotations

import argparse
import logging as _logging
import signal
import sys
import threading

from rpiui_remote import __version__
from rpiui_remote.app import RemoteControllerApp
from rpiui_remote.config.config_manager import load_config
from rpiui_remote.core.errors import StartupError
from rpiui_remote.hardware.factory import create_hardware_factory
from rpiui_remote.log_config.logger import setup_logging
from rpiui_remote.transport.socket_transport import SocketTransportFactory

_log = _logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rpiui-remote",
        description="Send button pushes to a remote RPIUI demo over TCP.",
    )
    parser.add_argument("--config", help="Path to remote_config.json")
    parser.add_argument("--address", help="RPIUI demo host (default from config)")
    parser.add_argument("--port", help="RPIUI demo port (default from config)")
    parser.add_argument("--dev", action="store_true", help="Mock hardware + stdin dev console")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Synchronous entry point.  Returns the process exit status."""
    args = _parse_args(argv)

    # 1. Load configuration (command line wins over file and env)
    try:
        config = load_config(
            args.config,
            overrides={
                "connection": {"address": args.address, "port": args.port},
                "system": {"dev_mode": True if args.dev else None},
            },
        )
    except (OSError, ValueError) as exc:
        # Missing file, malformed JSON, or a pydantic ValidationError.
        setup_logging(log_dir=None)
        _log.error("Invalid configuration: %s", exc)
        return 1
    setup_logging(config.system.log_level, config.system.log_dir)

    # 2. Create factories (mock on dev, GPIO on Pi)
    hardware = create_hardware_factory(config)
    transport = SocketTransportFactory(connect_timeout=config.connection.connect_timeout)

    # 3. Create the application
    app = RemoteControllerApp(config, hardware, transport)

    stop_requested = threading.Event()

    def _request_stop(signum: int, _frame: object) -> None:
        _log.info("Received signal %d", signum)
        stop_requested.set()

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)

    # 4. Start
    try:
        app.on_start()
    except StartupError as exc:
        _log.error("Startup failed: %s", exc)
        return 1

    from rpiui_remote.hardware.mock.mock_factory import MockHardwareFactory

    if isinstance(hardware, MockHardwareFactory):
        from rpiui_remote.dev_console import DevConsole

        DevConsole(hardware).start()

    # 5. Run until stopped by the peer or by a signal
    while not app.wait(timeout=0.5):
        if stop_requested.is_set():
            app.on_stop()
            break

    _log.info("RemoteRPIUIController exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())
