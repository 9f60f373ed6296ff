"""Contract between the app loop and a terminal implementation."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from jobtracker.ui.core.layout import Rect
from jobtracker.ui.terminal.events import Event
from jobtracker.ui.terminal.frame import Frame


class TerminalDriver(Protocol):
    """What the app loop needs from a terminal.

    The driver owns the real screen and input devices, produces Tick and
    Render events on its own timers, and paints frames on request.
    """

    async def enter(self) -> None:
        """Acquire the terminal (idempotent)."""

    async def exit(self) -> None:
        """Release the terminal for good."""

    async def suspend(self) -> None:
        """Release the terminal and block until an external resume signal."""

    async def next_event(self) -> Optional[Event]:
        """Wait for the next input or timer event."""

    def size(self) -> Rect:
        """Current drawable area."""

    def resize(self, width: int, height: int) -> None:
        """Adopt a new drawable area."""

    def clear(self) -> None:
        """Blank the screen."""

    def draw(self, paint: Callable[[Frame], None]) -> None:
        """Build a frame with ``paint`` and show it."""
