"""
Configuration for Unravel.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/unravel/config.toml) if exists
3. Environment variables (UNRAVEL_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class TransformConfig:
    """Which rewrite passes run."""
    mode: str = "all"  # "all" or "component-only"


@dataclass
class IOConfig:
    """Tree formats on the way in and out."""
    input_format: str = "json"
    output_format: str = "json"
    indent: int = 2  # 0 = compact


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class Config:
    """Root config with all settings."""
    transform: TransformConfig = field(default_factory=TransformConfig)
    io: IOConfig = field(default_factory=IOConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "unravel" / "config.toml"
    return Path.home() / ".config" / "unravel" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", path, e)
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


def non_negative_int(value: int | str) -> int:
    """int() that also rejects negative numbers."""
    number = int(value)
    if number < 0:
        raise ValueError(f"expected a number >= 0, got {number}")
    return number


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "transform" in data:
        t = data["transform"]
        if "mode" in t:
            config.transform.mode = str(t["mode"])

    if "io" in data:
        io = data["io"]
        if "input_format" in io:
            config.io.input_format = str(io["input_format"])
        if "output_format" in io:
            config.io.output_format = str(io["output_format"])
        if "indent" in io:
            config.io.indent = non_negative_int(io["indent"])

    if "logging" in data:
        lg = data["logging"]
        if "level" in lg:
            config.logging.level = str(lg["level"]).upper()

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, Callable[[str], object]]] = {
        "UNRAVEL_MODE": ("transform", "mode", str),
        "UNRAVEL_INPUT_FORMAT": ("io", "input_format", str),
        "UNRAVEL_OUTPUT_FORMAT": ("io", "output_format", str),
        "UNRAVEL_INDENT": ("io", "indent", non_negative_int),
        "UNRAVEL_LOG_LEVEL": ("logging", "level", str.upper),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                setattr(getattr(config, section), attr, conv(val))

    return config


# Module-level config instance, loaded on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached config so the next get_config() reloads it."""
    global _config
    _config = None
