"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Optional

import yaml

from errors import ConfigurationError

from .config_models import ValidatorConfig

# Environment variable -> (section, key, converter)
ENV_OVERRIDES = {
    "CACHE_MAX_SIZE": ("cache", "max_size", int),
    "CACHE_TTL_HOURS": ("cache", "default_ttl_millis", lambda v: int(float(v) * 3600 * 1000)),
    "GITHUB_TOKEN": ("providers", "github_token", str),
    "STACKOVERFLOW_KEY": ("providers", "stackoverflow_key", str),
    "LOG_LEVEL": ("logging", "level", str),
    "PORT": ("server", "port", int),
}


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".skillgap" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def _apply_env_overrides(config: dict, environ=None) -> dict:
    environ = os.environ if environ is None else environ
    result = {section: dict(values) for section, values in config.items() if isinstance(values, dict)}
    for var, (section, key, convert) in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if not raw:
            continue
        try:
            result.setdefault(section, {})[key] = convert(raw)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {var}: {raw!r}") from e
    return result


def load_config_model(config_path: Optional[Path] = None, environ=None) -> ValidatorConfig:
    """Load configuration as Pydantic model: file, then env overrides, then validation."""
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")
        if not isinstance(base_config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

    merged = _apply_env_overrides(base_config, environ)
    try:
        return ValidatorConfig.from_dict(merged)
    except Exception as e:
        raise ConfigurationError(f"Config validation failed: {e}")


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration as a plain dict. Use load_config_model() for typed access."""
    return load_config_model(config_path).to_dict()
