"""One-line status bar, one instance per mode."""

from __future__ import annotations

from typing import Optional

from rich.text import Text

from jobtracker.ui.components.styles import DIM
from jobtracker.ui.core.action import Action, Error, Tick
from jobtracker.ui.core.component import Component
from jobtracker.ui.core.layout import Dock, Rect
from jobtracker.ui.core.mode import Mode, ModeKind
from jobtracker.ui.terminal.frame import Frame

DEFAULT_ERROR_TICKS = 20

HINTS = {
    ModeKind.HOME: "↑/↓ select  ←/→ field  enter edit  n new  d delete  f1 help  ctrl+q quit",
    ModeKind.EDIT_JOB: "tab/shift+tab move  ↑/↓ choose  ctrl+s save  esc cancel  f1 help",
    ModeKind.POPUP: "esc close",
}


class StatusBar(Component):
    """Shows the mode, key hints, and the last error for a few ticks."""

    dock = Dock.BOTTOM
    dock_size = 1

    def __init__(self, mode: Mode) -> None:
        super().__init__()
        self._mode = mode
        self._error: Optional[str] = None
        self._ticks_left = 0

    def owning_mode(self) -> Mode:
        return self._mode

    def identifier(self) -> str:
        return f"StatusBar[{self._mode}]"

    @property
    def error(self) -> Optional[str]:
        return self._error

    def update(self, action: Action) -> Optional[Action]:
        if isinstance(action, Error):
            self._error = action.message
            self._ticks_left = (
                self._config.ui.error_ticks if self._config is not None else DEFAULT_ERROR_TICKS
            )
        elif isinstance(action, Tick) and self._ticks_left:
            self._ticks_left -= 1
            if not self._ticks_left:
                self._error = None
        return None

    def draw(self, frame: Frame, region: Rect) -> None:
        line = Text(no_wrap=True, overflow="ellipsis")
        line.append(f" {self._mode} ", style="reverse bold")
        line.append(" ")
        if self._error:
            line.append(self._error, style="bold red")
        else:
            line.append(HINTS[self._mode.kind], style=DIM)
        frame.render(line, region)
