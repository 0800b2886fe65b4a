"""YAML + environment variable configuration loading.

Config file: config/keyauth.yaml
Env var override prefix: KEYAUTH_
Nesting convention: double underscore (e.g. KEYAUTH_SERVER__PORT)
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

_DEFAULT_CONFIG_PATH = Path("config/keyauth.yaml")

_DEFAULTS: dict[str, Any] = {
    "server": {
        "port": 8081,
        "access_log": True,
        "shutdown_timeout": 60.0,
    },
    "auth": {
        "public_paths": ["/healthz"],
    },
    "logging": {
        "level": "INFO",
    },
}

ENV_PREFIX = "KEYAUTH_"

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off")


def _merge_into(target: dict, override: dict) -> None:
    """Merge override into target in place; nested sections merge, leaves replace."""
    for key, value in override.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _merge_into(current, value)
        else:
            target[key] = value


def _coerce_value(name: str, value: str, current: Any) -> Any:
    """Convert an env var string to the type of the setting it replaces.

    Settings without a known type stay strings.
    """
    if isinstance(current, bool):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"{name}: expected a boolean, got {value!r}")
    if isinstance(current, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(current, (int, float)):
        try:
            return type(current)(value)
        except ValueError:
            raise ValueError(
                f"{name}: expected {type(current).__name__}, got {value!r}"
            ) from None
    return value


def _apply_env_overrides(config: dict) -> dict:
    """Apply KEYAUTH_ prefixed environment variables as overrides.

    Double underscore separates nesting levels:
        KEYAUTH_SERVER__PORT=9090 -> config["server"]["port"] = 9090
    List-valued settings take a comma-separated string:
        KEYAUTH_AUTH__PUBLIC_PATHS=/healthz,/metrics
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = key[len(ENV_PREFIX) :].lower().split("__")
        target = config
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = _coerce_value(key, value, target.get(parts[-1]))
    return config


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file with env var overrides.

    Precedence (highest wins): env vars > YAML file > defaults.
    Raises ValueError when an env var does not parse as its setting's type.
    """
    config = copy.deepcopy(_DEFAULTS)

    path = config_path or _DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path) as f:
            _merge_into(config, yaml.safe_load(f) or {})

    return _apply_env_overrides(config)
