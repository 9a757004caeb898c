"""YAML config loader with environment overrides."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import ConfigError

DEFAULT_CONFIG = "config/weatherdesk.yaml"

ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "WEATHER_API_KEY": ("provider", "api_key"),
    "WEATHERDESK_DB": ("storage", "db_path"),
    "FRONTEND_URL": ("server", "cors_origins"),
    "PORT": ("server", "port"),
}


def load_config(
    path: str | Path | None = None, env: dict[str, str] | None = None
) -> AppConfig:
    """Load and validate config from a YAML file, then apply env overrides.

    A missing or empty file yields the defaults.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid config file {path}", str(e)) from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Invalid config file {path}", "Expected a mapping")

    if env is None:
        env = dict(os.environ)
    for var, (section, key) in ENV_OVERRIDES.items():
        value = env.get(var)
        if not value:
            continue
        if var == "FRONTEND_URL":
            raw.setdefault(section, {})[key] = [
                o.strip() for o in value.split(",") if o.strip()
            ]
        else:
            raw.setdefault(section, {})[key] = value

    try:
        return AppConfig(**raw)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid config: {problems}") from e


def require_api_key(config: AppConfig) -> str:
    """Return the provider credential or raise ConfigError if unset."""
    key = config.provider.api_key.strip()
    if not key:
        raise ConfigError("Missing WEATHER_API_KEY in environment variables")
    return key


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'history.recent_limit'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
