"""
Configuration management for gateway-sim.

Loads simulation settings from ~/.config/gateway-sim/settings.yaml.
Environment variables override values from the file.

Example settings.yaml:
---
timeout: 10.0          # seconds; omit or null to wait indefinitely
body_trim: 1000        # cap for response body dumps
value_trim: 300        # cap for structured value dumps
hooks_file: ~/hooks.yaml
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import yaml
except ImportError:
    yaml = None  # type: ignore

from .dump import BODY_TRIM, VALUE_TRIM


@dataclass
class SimSettings:
    """Settings for one simulation."""
    timeout: float | None = None
    body_trim: int = BODY_TRIM
    value_trim: int = VALUE_TRIM
    hooks_file: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimSettings:
        timeout = data.get("timeout")
        hooks_file = data.get("hooks_file")
        settings = cls(
            timeout=float(timeout) if timeout is not None else None,
            body_trim=int(data.get("body_trim", BODY_TRIM)),
            value_trim=int(data.get("value_trim", VALUE_TRIM)),
            hooks_file=Path(hooks_file).expanduser() if hooks_file else None,
        )
        if settings.body_trim <= 0 or settings.value_trim <= 0:
            raise ValueError("body_trim and value_trim must be positive")
        if settings.timeout is not None and settings.timeout <= 0:
            raise ValueError("timeout must be positive")
        return settings


def get_settings_file() -> Path:
    """Get path to the settings file.

    Priority order:
    1. $GATEWAY_SIM_HOME/settings.yaml (if set)
    2. $XDG_CONFIG_HOME/gateway-sim/settings.yaml (if set)
    3. ~/.config/gateway-sim/settings.yaml (default)
    """
    home = os.environ.get("GATEWAY_SIM_HOME")
    if home:
        return Path(home) / "settings.yaml"

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / "gateway-sim" / "settings.yaml"


def _require_yaml() -> None:
    """Raise error if PyYAML not installed."""
    if yaml is None:
        raise RuntimeError(
            "PyYAML is required for settings loading.\n"
            "Install with: pip install pyyaml"
        )


def load_settings(path: str | Path | None = None) -> SimSettings:
    """
    Load settings from a YAML file and the environment.

    A missing file yields defaults. Raises ValueError if the file is not a
    YAML mapping or holds invalid values.
    """
    settings_file = Path(path) if path else get_settings_file()

    data: dict[str, Any] = {}
    if settings_file.exists():
        _require_yaml()
        data = yaml.safe_load(settings_file.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must contain a YAML dictionary, got {type(data)}")

    env_timeout = os.environ.get("GATEWAY_SIM_TIMEOUT")
    if env_timeout:
        data = {**data, "timeout": env_timeout}

    return SimSettings.from_dict(data)
