"""Popup listing the configured key bindings."""

from __future__ import annotations

from typing import Optional

from rich.panel import Panel
from rich.table import Table

from jobtracker.ui.core.action import Action, ExitPopup
from jobtracker.ui.core.component import Component
from jobtracker.ui.core.keys import KeyPress, format_key_sequence
from jobtracker.ui.core.layout import Rect
from jobtracker.ui.core.mode import Mode
from jobtracker.ui.terminal.frame import Frame

HELP_POPUP = Mode.popup("help")

# Keys handled by components rather than the keymap.
SCREEN_KEYS = (
    ("up / down, j / k", "select application"),
    ("left / right", "focus a field of the application"),
    ("enter", "edit application, or open its notes"),
    ("n", "new application"),
    ("d", "delete application"),
    ("esc", "clear field focus, cancel, close popup"),
    ("tab / shift+tab", "next / previous form field"),
    ("ctrl+s", "save the form"),
)


class HelpPopup(Component):
    def __init__(self) -> None:
        super().__init__()
        self._bindings: list[tuple[str, str]] = []

    def owning_mode(self) -> Mode:
        return HELP_POPUP

    def register_config(self, config) -> None:
        super().register_config(config)
        self._bindings = sorted(
            (format_key_sequence(keys), action.notation)
            for keys, action in config.key_bindings().items()
        )

    @property
    def bindings(self) -> list[tuple[str, str]]:
        return list(self._bindings)

    def handle_key_event(self, key: KeyPress) -> Optional[Action]:
        if key.key in ("escape", "q"):
            return ExitPopup()
        return None

    def draw(self, frame: Frame, region: Rect) -> None:
        table = Table(box=None, expand=True, show_header=True, header_style="bold")
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Action")
        for keys, action in self._bindings:
            table.add_row(keys, action)
        table.add_section()
        for keys, description in SCREEN_KEYS:
            table.add_row(keys, description)

        area = region.inner(horizontal=6, vertical=2)
        frame.clear(area)
        frame.render(Panel(table, title="Help", subtitle="esc to close"), area)
