"""Configuration schema and loader."""

from jobtracker.config.loader import load_config, render_default_config, user_config_path
from jobtracker.config.schema import (
    DEFAULT_KEYBINDINGS,
    GeneralConfig,
    JobTrackerConfig,
    LoggingConfig,
    TerminalConfig,
    UiConfig,
)

__all__ = [
    "DEFAULT_KEYBINDINGS",
    "GeneralConfig",
    "JobTrackerConfig",
    "LoggingConfig",
    "TerminalConfig",
    "UiConfig",
    "load_config",
    "render_default_config",
    "user_config_path",
]
