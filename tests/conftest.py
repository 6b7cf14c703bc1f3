"""Shared pytest fixtures for rpiui-remote tests."""

from __future__ import annotations

import pytest

from rpiui_remote.core.lifecycle import LifecycleController
from rpiui_remote.core.models.config import HardwareConfig, RemoteConfig
from rpiui_remote.hardware.mock.mock_factory import MockHardwareFactory
from rpiui_remote.transport.mock_transport import MockTransportFactory


@pytest.fixture(scope="session")
def remote_config() -> RemoteConfig:
    """Session-scoped default config (no file I/O)."""
    return RemoteConfig()


@pytest.fixture
def pin_configs():
    return HardwareConfig().button_pins


@pytest.fixture
def hardware() -> MockHardwareFactory:
    return MockHardwareFactory()


@pytest.fixture
def transport() -> MockTransportFactory:
    return MockTransportFactory()


@pytest.fixture
def controller(hardware, transport, pin_configs):
    """A LifecycleController on mock hardware, shut down after the test."""
    ctl = LifecycleController(hardware, transport, pin_configs, join_timeout=2.0)
    yield ctl
    ctl.shutdown(reason="test teardown")
