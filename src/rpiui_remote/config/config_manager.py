"""Config manager — load JSON → apply env overrides → validate → RemoteConfig."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from rpiui_remote.core.models.config import RemoteConfig

_log = logging.getLogger(__name__)

# Default config file shipped next to this module.
_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "remote_config.json"

# Environment variable → config field mapping.
# Keys are env-var names; values are ``(section, field, type)`` tuples.
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "RPIUI_ADDRESS": ("connection", "address", str),
    # Left as a string: the model falls back to the default port when invalid.
    "RPIUI_PORT": ("connection", "port", str),
    "RPIUI_LOG_LEVEL": ("system", "log_level", str),
    "RPIUI_DEV_MODE": ("system", "dev_mode", bool),
}


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string env-var value to the expected Python type."""
    if target_type is bool:
        return value.strip().lower() in ("1", "true", "yes")
    return target_type(value)


def load_config(
    config_path: Path | str | None = None,
    overrides: dict[str, dict[str, object]] | None = None,
) -> RemoteConfig:
    """Load, override, and validate the controller configuration.

    Args:
        config_path: Path to ``remote_config.json``.  When *None*, falls back
            to ``RPIUI_CONFIG_FILE`` env-var and then the default location
            next to this module.
        overrides: ``{section: {field: value}}`` applied last (command line).
            ``None`` values are skipped.

    Returns:
        A fully-validated :class:`RemoteConfig` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    path = _resolve_config_path(config_path)
    _log.info("Loading config from %s", path)

    raw = json.loads(path.read_text(encoding="utf-8"))

    for env_key, (section, field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            raw.setdefault(section, {})[field] = _coerce(env_val, typ)
            _log.debug("Env override: %s → %s.%s = %r", env_key, section, field, env_val)

    for section, fields in (overrides or {}).items():
        for field, value in fields.items():
            if value is not None:
                raw.setdefault(section, {})[field] = value

    return RemoteConfig(**raw)


def _resolve_config_path(config_path: Path | str | None) -> Path:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get("RPIUI_CONFIG_FILE")
        p = Path(env) if env else _DEFAULT_CONFIG_PATH
    if not p.is_file():
        raise FileNotFoundError(
            f"Config file not found: {p}\n"
            "Create remote_config.json or set RPIUI_CONFIG_FILE to a valid path."
        )
    return p
