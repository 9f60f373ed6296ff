"""Test doubles shared by the loop and component tests."""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, Optional

from jobtracker.errors import TerminalError
from jobtracker.ui.core.action import Action
from jobtracker.ui.core.component import Component
from jobtracker.ui.core.keys import KeyPress
from jobtracker.ui.core.layout import Rect
from jobtracker.ui.core.mode import Mode
from jobtracker.ui.terminal.events import Event, KeyEvent, QuitEvent
from jobtracker.ui.terminal.frame import Frame


def key(text: str) -> KeyEvent:
    """Key event as a terminal would deliver it ("a", "ctrl+x", "enter")."""
    if len(text) == 1:
        return KeyEvent(KeyPress(key=text, character=text))
    return KeyEvent(KeyPress.parse(text))


class FakeDriver:
    """Scripted terminal: replays events, then reports Quit."""

    def __init__(
        self,
        events: Iterable[Event] = (),
        width: int = 100,
        height: int = 40,
        fail_suspend: bool = False,
    ):
        self.events = deque(events)
        self.area = Rect(0, 0, width, height)
        self.fail_suspend = fail_suspend
        self.calls: list[str] = []
        self.frames: list[Frame] = []

    async def enter(self) -> None:
        self.calls.append("enter")

    async def exit(self) -> None:
        self.calls.append("exit")

    async def suspend(self) -> None:
        self.calls.append("suspend")
        if self.fail_suspend:
            raise TerminalError("no job control")

    async def next_event(self) -> Optional[Event]:
        if self.events:
            return self.events.popleft()
        return QuitEvent()

    def size(self) -> Rect:
        return self.area

    def resize(self, width: int, height: int) -> None:
        self.calls.append("resize")
        self.area = Rect(0, 0, width, height)

    def clear(self) -> None:
        self.calls.append("clear")

    def draw(self, paint: Callable[[Frame], None]) -> None:
        self.calls.append("draw")
        frame = Frame(self.area.width, self.area.height)
        paint(frame)
        self.frames.append(frame)


class Recorder(Component):
    """Component that records everything it is shown."""

    def __init__(self, mode: Mode, name: str = "Recorder"):
        super().__init__()
        self._mode = mode
        self._name = name
        self.seen: list[Action] = []
        self.events: list[Event] = []
        self.regions: list[Rect] = []

    def owning_mode(self) -> Mode:
        return self._mode

    def identifier(self) -> str:
        return self._name

    def handle_event(self, event: Event) -> Optional[Action]:
        self.events.append(event)
        return super().handle_event(event)

    def update(self, action: Action) -> Optional[Action]:
        self.seen.append(action)
        return None

    def draw(self, frame: Frame, region: Rect) -> None:
        self.regions.append(region)

    def kinds(self) -> list[str]:
        return [action.kind for action in self.seen]
