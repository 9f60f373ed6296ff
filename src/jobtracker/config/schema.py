"""Pydantic configuration models for jobtracker."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from jobtracker.errors import ConfigError
from jobtracker.ui.core.action import Action, parse_action
from jobtracker.ui.core.keys import KeySequence, parse_key_sequence

# Key sequence -> action notation. A value of "none" disables a default.
DEFAULT_KEYBINDINGS: dict[str, str] = {
    "ctrl+q": "quit",
    "ctrl+c": "quit",
    "ctrl+z": "suspend",
    "f1": "help",
    "ctrl+n": "index_next",
    "ctrl+p": "index_previous",
    "ctrl+x h": "help",
    "ctrl+x r": "dispatch_job_search",
}

DISABLED_BINDING = "none"


def _default_data_dir() -> Path:
    return Path.home() / ".local" / "share" / "jobtracker"


def _default_config_dir() -> Path:
    return Path.home() / ".config" / "jobtracker"


class GeneralConfig(BaseModel):
    """Where jobtracker keeps its files."""

    data_dir: Path = Field(default_factory=_default_data_dir)
    config_dir: Path = Field(default_factory=_default_config_dir)
    database_path: Optional[Path] = None

    @property
    def resolved_database_path(self) -> Path:
        return self.database_path or self.data_dir / "job_tracker.db"


class TerminalConfig(BaseModel):
    """Terminal driver timing."""

    tick_rate: float = Field(default=4.0, gt=0)
    frame_rate: float = Field(default=60.0, gt=0)
    mouse: bool = True


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[Path] = None


class UiConfig(BaseModel):
    """Component behaviour."""

    error_ticks: int = Field(default=20, ge=1)  # how long an error stays in the status bar
    initial_mode: str = "home"


class JobTrackerConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    ui: UiConfig = Field(default_factory=UiConfig)
    keybindings: dict[str, Union[str, dict[str, Any]]] = Field(
        default_factory=lambda: dict(DEFAULT_KEYBINDINGS)
    )

    @property
    def log_file(self) -> Path:
        return self.logging.file or self.general.data_dir / "jobtracker.log"

    def key_bindings(self) -> dict[KeySequence, Action]:
        """Build the key sequence matcher map.

        Raises:
            ConfigError: If a key sequence or action is malformed.
        """
        bindings: dict[KeySequence, Action] = {}
        for keys, notation in self.keybindings.items():
            if isinstance(notation, str) and notation.strip().lower() in ("", DISABLED_BINDING):
                continue
            try:
                sequence = parse_key_sequence(keys)
                bindings[sequence] = parse_action(notation)
            except ConfigError as exc:
                raise ConfigError(f"Bad key binding '{keys}': {exc.message}") from exc
        return bindings
