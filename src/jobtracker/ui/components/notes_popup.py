"""Popup for editing the notes of one application."""

from __future__ import annotations

from typing import Optional

from rich.panel import Panel

from jobtracker.ui.components.text_field import TextField
from jobtracker.ui.core.action import Action, DispatchNotesPopupData, ExitPopup, NotesPopupData
from jobtracker.ui.core.component import Component
from jobtracker.ui.core.keys import KeyPress
from jobtracker.ui.core.layout import Rect
from jobtracker.ui.core.mode import Mode
from jobtracker.ui.terminal.frame import Frame

NOTES_POPUP = Mode.popup("notes")


class NotesPopup(Component):
    """Esc hands the edited notes back, then closes the popup."""

    def __init__(self) -> None:
        super().__init__()
        self._job_id: Optional[int] = None
        self._editor = TextField(placeholder="No notes", multiline=True)

    def owning_mode(self) -> Mode:
        return NOTES_POPUP

    @property
    def job_id(self) -> Optional[int]:
        return self._job_id

    @property
    def notes(self) -> str:
        return self._editor.value

    def handle_key_event(self, key: KeyPress) -> Optional[Action]:
        if key.key == "escape":
            self.send(NotesPopupData(job_id=self._job_id, notes=self._editor.value))
            return ExitPopup()
        self._editor.handle_key(key)
        return None

    def update(self, action: Action) -> Optional[Action]:
        if isinstance(action, DispatchNotesPopupData):
            self._job_id = action.job_id
            self._editor.set_value(action.notes)
        return None

    def draw(self, frame: Frame, region: Rect) -> None:
        area = region.inner(horizontal=8, vertical=4)
        frame.clear(area)
        frame.render(
            Panel(
                self._editor.text(focused=True),
                title="Notes",
                subtitle="esc to save and close",
                style="white on red",
            ),
            area,
        )
