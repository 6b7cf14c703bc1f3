"""Pydantic models and enumerations for configuration and runtime state."""
from rpiui_remote.core.models.config import (
    ConnectionConfig,
    HardwareConfig,
    PinConfig,
    RemoteConfig,
    SystemConfig,
)
from rpiui_remote.core.models.state import ButtonIdentity, LifecycleState, MonitorState

__all__ = [
    "ConnectionConfig",
    "HardwareConfig",
    "PinConfig",
    "RemoteConfig",
    "SystemConfig",
    "ButtonIdentity",
    "LifecycleState",
    "MonitorState",
]
