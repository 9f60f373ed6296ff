"""Component contract.

A component is a self-contained piece of UI behaviour. It belongs to one
mode, reacts to raw input events and to dispatched actions, and paints
itself into the region the layout policy assigns it.

Subclass and override what you need:

    class Clock(Component):
        dock = Dock.TOP
        dock_size = 1

        def owning_mode(self) -> Mode:
            return Mode.home()

        def update(self, action: Action) -> Optional[Action]:
            if isinstance(action, Tick):
                self.ticks += 1
            return None
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from jobtracker.errors import ChannelClosedError
from jobtracker.ui.core.action import Action
from jobtracker.ui.core.channel import ActionSender
from jobtracker.ui.core.keys import KeyPress
from jobtracker.ui.core.layout import Dock, Rect
from jobtracker.ui.core.mode import Mode
from jobtracker.ui.terminal.events import Event, KeyEvent, MouseEvent
from jobtracker.ui.terminal.frame import Frame

if TYPE_CHECKING:
    from jobtracker.config.schema import JobTrackerConfig


class Component(ABC):
    """Base class for all UI components."""

    dock: Dock = Dock.FILL
    dock_size: int = 0

    def __init__(self) -> None:
        self._sender: Optional[ActionSender] = None
        self._config: Optional["JobTrackerConfig"] = None

    @abstractmethod
    def owning_mode(self) -> Mode:
        """The mode in which this component is visible. Must not change."""

    def identifier(self) -> str:
        """Name used in logs and diagnostics."""
        return type(self).__name__

    # Wiring

    def register_action_sink(self, sender: ActionSender) -> None:
        self._sender = sender

    def register_config(self, config: "JobTrackerConfig") -> None:
        self._config = config

    def initialize(self, size: Rect) -> None:
        """Called once before the first cycle. Raising aborts startup."""

    def send(self, action: Action) -> None:
        """Emit an action through the registered sink.

        Raises:
            ChannelClosedError: If no sink is registered or the loop is gone.
        """
        if self._sender is None:
            raise ChannelClosedError(action.kind)
        self._sender.send(action)

    # Input

    def handle_event(self, event: Event) -> Optional[Action]:
        if isinstance(event, KeyEvent):
            return self.handle_key_event(event.key)
        if isinstance(event, MouseEvent):
            return self.handle_mouse_event(event)
        return None

    def handle_key_event(self, key: KeyPress) -> Optional[Action]:
        return None

    def handle_mouse_event(self, mouse: MouseEvent) -> Optional[Action]:
        return None

    # Actions and painting

    def update(self, action: Action) -> Optional[Action]:
        """React to a dispatched action. Unknown actions are ignored."""
        return None

    def draw(self, frame: Frame, region: Rect) -> None:
        """Paint into ``region``. Must not depend on earlier draws."""

    def __repr__(self) -> str:
        return f"<{self.identifier()} mode={self.owning_mode()}>"

