"""Configuration: config manager and shipped JSON defaults."""

from rpiui_remote.config.config_manager import load_config

__all__ = ["load_config"]
