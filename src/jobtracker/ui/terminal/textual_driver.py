"""Terminal driver backed by Textual.

Textual owns the real terminal: raw mode, input parsing, mouse reporting,
resize handling and screen output. A single full-screen canvas widget
shows the latest :class:`Frame`; every key, mouse and resize event is
translated into a driver event and queued for the app loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import signal
from typing import Callable, Optional

from rich.console import RenderableType
from textual import events
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.widget import Widget

from jobtracker.errors import TerminalError
from jobtracker.ui.core.keys import KeyPress
from jobtracker.ui.core.layout import Rect
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

logger = logging.getLogger(__name__)


def key_from_textual(event: events.Key) -> KeyPress:
    """Translate a Textual key event.

    Printable characters are keyed by the character itself, so a binding
    for ``?`` matches even though Textual names the key ``question_mark``.
    """
    character = event.character
    if event.is_printable and character and len(character) == 1 and character != " ":
        return KeyPress(key=character, character=character)
    return KeyPress.parse(event.key, character=character)


def _mouse_modifiers(event: events.MouseEvent) -> frozenset[str]:
    modifiers = set()
    if event.shift:
        modifiers.add("shift")
    if event.ctrl:
        modifiers.add("ctrl")
    if event.meta:
        modifiers.add("alt")
    return frozenset(modifiers)


class FrameCanvas(Widget):
    """Full-screen widget showing the last drawn frame."""

    DEFAULT_CSS = """
    FrameCanvas {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, terminal: "TextualTerminal") -> None:
        super().__init__()
        self._terminal = terminal
        self.frame: Optional[Frame] = None

    def render(self) -> RenderableType:
        return self.frame if self.frame is not None else ""

    def _forward(self, kind: MouseKind, event: events.MouseEvent) -> None:
        self._terminal.push(
            MouseEvent(
                kind=kind,
                column=event.screen_x,
                row=event.screen_y,
                modifiers=_mouse_modifiers(event),
            )
        )

    def on_mouse_move(self, event: events.MouseMove) -> None:
        kind = MouseKind.DRAG if event.button else MouseKind.MOVED
        self._forward(kind, event)

    def on_mouse_down(self, event: events.MouseDown) -> None:
        self._forward(MouseKind.DOWN, event)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        self._forward(MouseKind.UP, event)

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self._forward(MouseKind.SCROLL_UP, event)

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self._forward(MouseKind.SCROLL_DOWN, event)


class TerminalApp(App[None], inherit_bindings=False):
    """Textual application that only hosts the canvas.

    Bindings are not inherited so that every key, including ``ctrl+q``
    and ``tab``, reaches the jobtracker key handling.
    """

    CSS = """
    Screen {
        overflow: hidden;
    }
    """

    def __init__(self, terminal: "TextualTerminal") -> None:
        super().__init__()
        self._terminal = terminal
        self.canvas = FrameCanvas(terminal)

    def compose(self) -> ComposeResult:
        yield self.canvas

    def on_mount(self) -> None:
        self.set_interval(1 / self._terminal.tick_rate, self._tick)
        self.set_interval(1 / self._terminal.frame_rate, self._render_tick)
        self._terminal.mounted(self.size.width, self.size.height)

    def on_unmount(self) -> None:
        self._terminal.push(QuitEvent())

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self._terminal.push(KeyEvent(key=key_from_textual(event)))

    def on_resize(self, event: events.Resize) -> None:
        self._terminal.push(ResizeEvent(width=event.size.width, height=event.size.height))

    def _tick(self) -> None:
        self._terminal.push(TickEvent())

    def _render_tick(self) -> None:
        self._terminal.push(RenderEvent())


class TextualTerminal:
    """:class:`TerminalDriver` implementation running a Textual app.

    Example:
        terminal = TextualTerminal(tick_rate=4.0, frame_rate=60.0)
        await terminal.enter()
        event = await terminal.next_event()
    """

    def __init__(self, tick_rate: float = 4.0, frame_rate: float = 60.0, mouse: bool = True):
        if tick_rate <= 0 or frame_rate <= 0:
            raise ValueError("tick_rate and frame_rate must be positive")
        self.tick_rate = tick_rate
        self.frame_rate = frame_rate
        self.mouse = mouse
        self._app: Optional[TerminalApp] = None
        self._task: Optional[asyncio.Task[None]] = None
        self._events: asyncio.Queue[Event] = asyncio.Queue()
        self._ready = asyncio.Event()
        self._area = Rect()

    def push(self, event: Event) -> None:
        self._events.put_nowait(event)

    def mounted(self, width: int, height: int) -> None:
        self._area = Rect(0, 0, width, height)
        self._ready.set()

    async def enter(self) -> None:
        if self._app is not None:
            return
        self._ready = asyncio.Event()
        self._app = TerminalApp(self)
        self._task = asyncio.create_task(self._app.run_async(mouse=self.mouse))

        ready = asyncio.create_task(self._ready.wait())
        done, _ = await asyncio.wait(
            {ready, self._task}, return_when=asyncio.FIRST_COMPLETED
        )
        if self._task in done:
            ready.cancel()
            self._app = None
            error = self._task.exception()
            raise TerminalError("Terminal exited during startup") from error
        logger.debug("Terminal acquired (%dx%d)", self._area.width, self._area.height)

    async def exit(self) -> None:
        if self._app is None:
            return
        app, task = self._app, self._task
        self._app = None
        self._task = None
        app.exit()
        if task is not None:
            await task
        logger.debug("Terminal released")

    async def suspend(self) -> None:
        """Hand the terminal back to the shell and stop the process.

        Returns once the process is continued (``fg``), with the terminal
        re-acquired.
        """
        app = self._require_app()
        stop_signal = getattr(signal, "SIGTSTP", None)
        if stop_signal is None:
            raise TerminalError("Suspend is not supported on this platform")
        try:
            with app.suspend():
                os.kill(os.getpid(), stop_signal)
        except SuspendNotSupported as exc:
            raise TerminalError("Terminal does not support suspend") from exc

    async def next_event(self) -> Optional[Event]:
        return await self._events.get()

    def size(self) -> Rect:
        if self._area.is_empty:
            columns, lines = shutil.get_terminal_size()
            return Rect(0, 0, columns, lines)
        return self._area

    def resize(self, width: int, height: int) -> None:
        self._area = Rect(0, 0, width, height)

    def clear(self) -> None:
        app = self._require_app()
        app.canvas.frame = None
        app.canvas.refresh()

    def draw(self, paint: Callable[[Frame], None]) -> None:
        app = self._require_app()
        area = self.size()
        frame = Frame(area.width, area.height)
        paint(frame)
        app.canvas.frame = frame
        app.canvas.refresh()

    def _require_app(self) -> TerminalApp:
        if self._app is None:
            raise TerminalError("Terminal is not acquired")
        return self._app
