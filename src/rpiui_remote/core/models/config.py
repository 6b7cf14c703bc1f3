"""Configuration Pydantic models: RemoteConfig, ConnectionConfig, HardwareConfig, SystemConfig."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

_log = logging.getLogger(__name__)

DEFAULT_ADDRESS = "raspberrypi.local"  # RPi hostname with Zeroconf
DEFAULT_PORT = 19054


class ConnectionConfig(BaseModel):
    """Endpoint of the RPIUI demo application.

    Missing or unusable values never fail validation: an empty address or
    a port that is not an integer in ``1..65535`` is replaced by the
    default, matching the behaviour of the original MIDlet attributes.
    """

    model_config = ConfigDict(extra="forbid")

    address: str = Field(default=DEFAULT_ADDRESS, description="Host name or IP of the RPIUI demo")
    port: int = Field(default=DEFAULT_PORT, description="TCP port of the RPIUI demo")
    connect_timeout: float = Field(default=10.0, gt=0, description="Seconds to wait for connect()")

    @field_validator("address", mode="before")
    @classmethod
    def _default_address(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            _log.info("Note: using default address")
            return DEFAULT_ADDRESS
        return value.strip() if isinstance(value, str) else value

    @field_validator("port", mode="before")
    @classmethod
    def _default_port(cls, value: object) -> int:
        try:
            port = int(str(value).strip())
        except (TypeError, ValueError):
            _log.info("Note: using default port")
            return DEFAULT_PORT
        if not 0 < port < 65536:
            _log.info("Note: using default port (%d out of range)", port)
            return DEFAULT_PORT
        return port


class PinConfig(BaseModel):
    """Location of one button input.

    ``pin`` is the BCM GPIO number used by gpiozero.  ``controller`` is the
    GPIO controller number of the original board wiring; gpiozero drives a
    single chip so it is only reported in logs.
    """

    model_config = ConfigDict(extra="forbid")

    controller: int = Field(default=0, ge=0)
    pin: int = Field(ge=0)
    bounce_time: float | None = Field(
        default=None, gt=0, description="Optional debounce in seconds (None = every edge)"
    )


def _default_button_pins() -> dict[int, PinConfig]:
    return {
        1: PinConfig(controller=0, pin=0),
        2: PinConfig(controller=2, pin=13),
        3: PinConfig(controller=6, pin=15),
    }


class HardwareConfig(BaseModel):
    """Pin assignments for the three buttons.

    Every input is opened input-only with a pull-down bias, triggers on
    both edges and has an initial logical value of ``False``; only the
    pin location is configurable.
    """

    model_config = ConfigDict(extra="forbid")

    button_pins: dict[int, PinConfig] = Field(
        default_factory=_default_button_pins,
        description="Pin per button identity (1, 2, 3)",
    )

    @field_validator("button_pins")
    @classmethod
    def _exactly_three_buttons(cls, value: dict[int, PinConfig]) -> dict[int, PinConfig]:
        if set(value) != {1, 2, 3}:
            raise ValueError(f"button_pins must define buttons 1, 2 and 3 (got {sorted(value)})")
        # gpiozero addresses pins by BCM number alone; controller is not part of the key.
        pins = [cfg.pin for cfg in value.values()]
        if len(set(pins)) != len(pins):
            raise ValueError("button_pins must not share a pin")
        return value


class SystemConfig(BaseModel):
    """Non-hardware runtime settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    dev_mode: bool = Field(default=False, description="Use mock hardware and the stdin dev console")
    shutdown_join_timeout: float = Field(
        default=2.0, gt=0, description="Seconds to wait for the monitor thread on shutdown"
    )


class RemoteConfig(BaseModel):
    """Top-level configuration loaded from ``remote_config.json``."""

    model_config = ConfigDict(extra="forbid")

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    hardware: HardwareConfig = Field(default_factory=HardwareConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)
