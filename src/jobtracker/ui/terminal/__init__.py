"""Terminal driver boundary: input events, frames and drivers."""

from jobtracker.ui.terminal.driver import TerminalDriver
from jobtracker.ui.terminal.events import (
    Event,
    KeyEvent,
    MouseEvent,
    MouseKind,
    QuitEvent,
    RenderEvent,
    ResizeEvent,
    TickEvent,
)
from jobtracker.ui.terminal.frame import Frame

__all__ = [
    "Event",
    "Frame",
    "KeyEvent",
    "MouseEvent",
    "MouseKind",
    "QuitEvent",
    "RenderEvent",
    "ResizeEvent",
    "TerminalDriver",
    "TickEvent",
]
