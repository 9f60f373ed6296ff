"""Configuration loader with TOML support and merge capability."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from jobtracker.config.schema import DEFAULT_KEYBINDINGS, JobTrackerConfig
from jobtracker.errors import ConfigError

logger = logging.getLogger(__name__)

LOCAL_CONFIG_NAME = "jobtracker.toml"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_path(path: str | Path) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expandvars(str(path))).expanduser().resolve()


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc


def user_config_path() -> Path:
    """~/.config/jobtracker/config.toml, or $JOBTRACKER_CONFIG/config.toml."""
    env_dir = os.environ.get("JOBTRACKER_CONFIG")
    if env_dir:
        return _expand_path(env_dir) / "config.toml"
    return Path.home() / ".config" / "jobtracker" / "config.toml"


def load_config(
    config_path: Optional[Path] = None,
    merge_user: bool = True,
) -> JobTrackerConfig:
    """Load configuration with precedence.

    Priority (highest to lowest):
    1. Provided config_path (or $JOBTRACKER_CONFIG_PATH)
    2. ~/.config/jobtracker/config.toml (user overrides)
    3. ./jobtracker.toml (project defaults)
    4. Built-in defaults (schema)

    $JOBTRACKER_DATA and $JOBTRACKER_CONFIG override the data and config
    directories from any file. Key bindings merge with the defaults; bind a
    sequence to "none" to drop a default.

    Args:
        config_path: Explicit path to config file.
        merge_user: Whether to merge the user config.

    Returns:
        Merged JobTrackerConfig instance.

    Raises:
        ConfigError: If a file is unreadable, is not valid TOML, or fails
            schema validation, or if an explicit path does not exist.
    """
    env_config = os.environ.get("JOBTRACKER_CONFIG_PATH")
    if config_path is None and env_config:
        config_path = Path(env_config).expanduser()

    config_data: dict[str, Any] = {"keybindings": dict(DEFAULT_KEYBINDINGS)}

    local_path = Path(LOCAL_CONFIG_NAME)
    if local_path.exists():
        config_data = _deep_merge(config_data, _read_toml(local_path))
        logger.debug("Merged project config %s", local_path)

    if merge_user:
        user_path = user_config_path()
        if user_path.exists():
            config_data = _deep_merge(config_data, _read_toml(user_path))
            logger.debug("Merged user config %s", user_path)

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        config_data = _deep_merge(config_data, _read_toml(config_path))
        logger.debug("Merged explicit config %s", config_path)

    general = config_data.setdefault("general", {})
    if os.environ.get("JOBTRACKER_DATA"):
        general["data_dir"] = os.environ["JOBTRACKER_DATA"]
    if os.environ.get("JOBTRACKER_CONFIG"):
        general["config_dir"] = os.environ["JOBTRACKER_CONFIG"]

    # Expand paths
    for key in ("data_dir", "config_dir", "database_path"):
        if general.get(key):
            general[key] = _expand_path(general[key])
    if "logging" in config_data and config_data["logging"].get("file"):
        config_data["logging"]["file"] = _expand_path(config_data["logging"]["file"])

    try:
        return JobTrackerConfig(**config_data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def render_default_config() -> str:
    """Commented starter config written by ``jobtracker config --init``."""
    lines = [
        "# jobtracker configuration.",
        "# Values shown are the defaults.",
        "",
        "[general]",
        '# data_dir = "~/.local/share/jobtracker"',
        '# database_path = "~/.local/share/jobtracker/job_tracker.db"',
        "",
        "[terminal]",
        "tick_rate = 4.0",
        "frame_rate = 60.0",
        "mouse = true",
        "",
        "[logging]",
        'level = "INFO"',
        "",
        "[ui]",
        "error_ticks = 20",
        "",
        "[keybindings]",
        '# "ctrl+q" = "none"  # disable a default',
    ]
    for keys, action in DEFAULT_KEYBINDINGS.items():
        lines.append(f'"{keys}" = "{action}"')
    return "\n".join(lines) + "\n"
