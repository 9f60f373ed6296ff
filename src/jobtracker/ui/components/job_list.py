"""Scrollable list of job applications on the home screen."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from rich.rule import Rule
from rich.text import Text

from jobtracker.models.job import JobApplication
from jobtracker.ui.components.job_item import ITEM_HEIGHT, ItemField, JobItem
from jobtracker.ui.components.notes_popup import NOTES_POPUP
from jobtracker.ui.components.styles import DIM
from jobtracker.ui.core.action import (
    Action,
    ChangeMode,
    DeleteJob,
    DispatchJobSearch,
    DispatchNotesPopupData,
    EnterPopup,
    IndexNext,
    IndexPrevious,
    JobResults,
    PopulateEditJobForm,
    UnFocusField,
)
from jobtracker.ui.core.component import Component
from jobtracker.ui.core.focus import FocusIndex, centered_window_start
from jobtracker.ui.core.keys import KeyPress
from jobtracker.ui.core.layout import Rect
from jobtracker.ui.core.mode import Mode, ModeKind
from jobtracker.ui.terminal.events import MouseEvent, MouseKind
from jobtracker.ui.terminal.frame import Frame

logger = logging.getLogger(__name__)


class JobList(Component):
    """Home screen list.

    Two cursors: the selected row, and the focused sub-field of that row
    (unfocused until Left/Right or the pointer picks one). The visible
    window keeps the selected row centered.
    """

    def __init__(self) -> None:
        super().__init__()
        self._jobs: tuple[JobApplication, ...] = ()
        self._rows = FocusIndex(0)
        self._field = FocusIndex(len(ItemField), index=None)
        self._rows_area = Rect()
        self._window_start = 0

    def owning_mode(self) -> Mode:
        return Mode.home()

    def initialize(self, size: Rect) -> None:
        self.send(DispatchJobSearch())

    @property
    def jobs(self) -> tuple[JobApplication, ...]:
        return self._jobs

    @property
    def selected_index(self) -> Optional[int]:
        return self._rows.current()

    @property
    def selected_job(self) -> Optional[JobApplication]:
        index = self._rows.current()
        return self._jobs[index] if index is not None else None

    @property
    def focused_field(self) -> Optional[ItemField]:
        index = self._field.current()
        return ItemField(index) if index is not None else None

    @property
    def window_start(self) -> int:
        return self._window_start

    # Input

    def handle_key_event(self, key: KeyPress) -> Optional[Action]:
        if key.modifiers - {"shift"}:
            return None
        name = key.key
        if name in ("down", "j"):
            self._rows.advance()
        elif name in ("up", "k"):
            self._rows.retreat()
        elif name == "right":
            self._field.advance()
        elif name == "left":
            self._field.retreat()
        elif name == "escape":
            return UnFocusField()
        elif name == "enter":
            return self._activate()
        elif name == "n":
            self.send(ChangeMode(mode=Mode.edit_job()))
            return PopulateEditJobForm(job=JobApplication(application_date=date.today().isoformat()))
        elif name == "d":
            job = self.selected_job
            if job is not None and job.id is not None:
                return DeleteJob(job_id=job.id)
        return None

    def _activate(self) -> Optional[Action]:
        job = self.selected_job
        if job is None:
            return None
        if self.focused_field == ItemField.NOTES:
            return EnterPopup(name=NOTES_POPUP.name)
        self.send(ChangeMode(mode=Mode.edit_job()))
        return PopulateEditJobForm(job=job)

    def handle_mouse_event(self, mouse: MouseEvent) -> Optional[Action]:
        if mouse.kind == MouseKind.SCROLL_UP:
            self._rows.retreat()
        elif mouse.kind == MouseKind.SCROLL_DOWN:
            self._rows.advance()
        elif mouse.kind in (MouseKind.MOVED, MouseKind.DOWN):
            self._hover(mouse.column, mouse.row)
        return None

    def _row_rects(self) -> list[Rect]:
        area = self._rows_area
        return area.split_rows([ITEM_HEIGHT] * (area.height // ITEM_HEIGHT))

    def _hover(self, column: int, row: int) -> None:
        for offset, rect in enumerate(self._row_rects()):
            if not rect.contains(column, row):
                continue
            index = self._window_start + offset
            if index >= len(self._jobs):
                return
            self._rows.set(index)
            field = JobItem(self._jobs[index]).field_at(rect, column, row)
            if field is None:
                self._field.clear()
            else:
                self._field.set(field)
            return

    # Actions

    def update(self, action: Action) -> Optional[Action]:
        if isinstance(action, JobResults):
            self._jobs = action.jobs
            self._rows.resize(len(self._jobs))
            logger.debug("Job list holds %d applications", len(self._jobs))
        elif isinstance(action, IndexNext):
            self._rows.advance()
        elif isinstance(action, IndexPrevious):
            self._rows.retreat()
        elif isinstance(action, UnFocusField):
            self._field.clear()
        elif isinstance(action, EnterPopup) and action.name == NOTES_POPUP.name:
            # Sent from here so it is queued behind the popup's ChangeMode.
            job = self.selected_job
            if job is not None:
                self.send(DispatchNotesPopupData(job_id=job.id, notes=job.notes or ""))
        elif isinstance(action, ChangeMode) and action.mode.kind == ModeKind.HOME:
            return DispatchJobSearch()
        return None

    # Drawing

    def draw(self, frame: Frame, region: Rect) -> None:
        body = region.inner(horizontal=2, vertical=1)
        title_area, self._rows_area = body.take_top(1)
        frame.render(Rule("Job Applications", style="bold"), title_area)

        if not self._jobs:
            frame.render(
                Text("No applications yet. Press n to add one.", style=DIM, justify="center"),
                self._rows_area,
            )
            return

        rows = self._row_rects()
        selected = self._rows.current()
        self._window_start = centered_window_start(selected or 0, len(self._jobs), len(rows))
        field = self.focused_field
        for rect, index in zip(rows, range(self._window_start, len(self._jobs))):
            focused = index == selected
            JobItem(self._jobs[index]).draw(frame, rect, focused, field if focused else None)
