"""Form for creating and editing an application."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional

from rich.panel import Panel
from rich.text import Text

from jobtracker.models.job import (
    ApplicationStatus,
    Files,
    JobApplication,
    LocationType,
    PositionCategory,
    WorkType,
)
from jobtracker.ui.components.help_popup import HELP_POPUP
from jobtracker.ui.components.select_box import SelectBox
from jobtracker.ui.components.text_field import TextField
from jobtracker.ui.core.action import (
    Action,
    ChangeMode,
    EnterPopup,
    FocusNext,
    FocusPrevious,
    Help,
    PopulateEditJobForm,
    SaveJob,
)
from jobtracker.ui.core.component import Component
from jobtracker.ui.core.focus import FocusIndex
from jobtracker.ui.core.keys import KeyPress
from jobtracker.ui.core.layout import Rect
from jobtracker.ui.core.mode import Mode
from jobtracker.ui.terminal.frame import Frame

logger = logging.getLogger(__name__)

FIELD_HEIGHT = 3


class FormField(IntEnum):
    """Form fields in focus order."""
    POSITION = 0
    POSITION_CATEGORY = 1
    COMPANY_NAME = 2
    WORK_TYPE = 3
    LOCATION = 4
    LOCATION_TYPE = 5
    APPLICATION_DATE = 6
    STATUS = 7
    CONTACT_INFO = 8
    URL = 9
    FILES = 10
    NOTES = 11

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title()


SELECT_FIELDS = (
    FormField.POSITION_CATEGORY,
    FormField.WORK_TYPE,
    FormField.LOCATION_TYPE,
    FormField.STATUS,
)


class EditJob(Component):
    """Twelve-field form.

    Tab and Enter move to the next field, Shift+Tab to the previous one.
    Text fields edit in place, select fields cycle with Up/Down. Ctrl+S
    saves and returns home; Esc returns home without saving.
    """

    def __init__(self) -> None:
        super().__init__()
        self._job = JobApplication()
        self._focus = FocusIndex(len(FormField))
        self._text: dict[FormField, TextField] = {
            field: TextField(placeholder=field.title)
            for field in FormField
            if field not in SELECT_FIELDS
        }
        self._select: dict[FormField, SelectBox] = {
            FormField.POSITION_CATEGORY: SelectBox(list(PositionCategory)),
            FormField.WORK_TYPE: SelectBox(list(WorkType)),
            FormField.LOCATION_TYPE: SelectBox(list(LocationType)),
            FormField.STATUS: SelectBox(list(ApplicationStatus)),
        }
        self._text[FormField.FILES].placeholder = "cv, cover letter, other documents"
        self.load(self._job)

    def owning_mode(self) -> Mode:
        return Mode.edit_job()

    @property
    def focused_field(self) -> FormField:
        return FormField(self._focus.current() or 0)

    def text_field(self, field: FormField) -> TextField:
        return self._text[field]

    def select_box(self, field: FormField) -> SelectBox:
        return self._select[field]

    def load(self, job: JobApplication) -> None:
        """Fill the form from ``job`` and focus the first field."""
        self._job = job
        values = {
            FormField.POSITION: job.position,
            FormField.COMPANY_NAME: job.company_name,
            FormField.LOCATION: job.location,
            FormField.APPLICATION_DATE: job.application_date,
            FormField.CONTACT_INFO: job.contact_info or "",
            FormField.URL: job.url or "",
            FormField.FILES: job.files.to_storage() if job.files != Files() else "",
            FormField.NOTES: job.notes or "",
        }
        for field, value in values.items():
            self._text[field].set_value(value)
        self._select[FormField.POSITION_CATEGORY].select(job.position_category)
        self._select[FormField.WORK_TYPE].select(job.work_type)
        self._select[FormField.LOCATION_TYPE].select(job.location_type)
        self._select[FormField.STATUS].select(job.status)
        self._focus.set(0)

    def to_job(self) -> JobApplication:
        """The record described by the current form contents."""
        text = {field: editor.value.strip() for field, editor in self._text.items()}
        status = self._select[FormField.STATUS].value
        return self._job.model_copy(
            update={
                "position": text[FormField.POSITION],
                "position_category": self._select[FormField.POSITION_CATEGORY].value,
                "company_name": text[FormField.COMPANY_NAME],
                "work_type": self._select[FormField.WORK_TYPE].value,
                "location": text[FormField.LOCATION],
                "location_type": self._select[FormField.LOCATION_TYPE].value,
                "application_date": text[FormField.APPLICATION_DATE],
                "status": status,
                "is_active": not status.is_final,
                "contact_info": text[FormField.CONTACT_INFO] or None,
                "url": text[FormField.URL] or None,
                "files": Files.from_storage(text[FormField.FILES]),
                "notes": text[FormField.NOTES] or None,
            }
        )

    # Input

    def handle_key_event(self, key: KeyPress) -> Optional[Action]:
        if key.key == "tab":
            return FocusPrevious() if "shift" in key.modifiers else FocusNext()
        if key.key == "enter":
            return FocusNext()
        if key.key == "escape":
            return ChangeMode(mode=Mode.home())
        if key.key == "s" and key.modifiers == frozenset({"ctrl"}):
            job = self.to_job()
            logger.info("Saving application %s", job.id if job.id is not None else "(new)")
            self.send(SaveJob(job=job))
            return ChangeMode(mode=Mode.home())

        field = self.focused_field
        if field in self._select:
            if key.key == "up":
                self._select[field].previous()
            elif key.key == "down":
                self._select[field].next()
        else:
            self._text[field].handle_key(key)
        return None

    def update(self, action: Action) -> Optional[Action]:
        if isinstance(action, FocusNext):
            self._focus.advance()
        elif isinstance(action, FocusPrevious):
            self._focus.retreat()
        elif isinstance(action, PopulateEditJobForm):
            self.load(action.job)
        elif isinstance(action, Help):
            return EnterPopup(name=HELP_POPUP.name)
        return None

    # Drawing

    def _field_regions(self, area: Rect) -> dict[FormField, Rect]:
        half = area.width // 2
        left, right = area.split_columns([half, area.width - half])
        left_rows = left.split_rows([FIELD_HEIGHT] * 6)
        right_rows = right.split_rows([FIELD_HEIGHT] * 4)

        layout: list[tuple[FormField, ...]] = [
            (FormField.POSITION, FormField.POSITION_CATEGORY),
            (FormField.COMPANY_NAME,),
            (FormField.WORK_TYPE,),
            (FormField.LOCATION, FormField.LOCATION_TYPE),
            (FormField.APPLICATION_DATE,),
            (FormField.STATUS,),
            (FormField.CONTACT_INFO,),
            (FormField.URL,),
            (FormField.FILES,),
            (FormField.NOTES,),
        ]
        regions: dict[FormField, Rect] = {}
        for fields, row in zip(layout, left_rows + right_rows):
            if len(fields) == 1:
                regions[fields[0]] = row
            else:
                wide = row.width * 7 // 10
                main, side = row.split_columns([wide, row.width - wide])
                regions[fields[0]] = main
                regions[fields[1]] = side
        return regions

    def draw(self, frame: Frame, region: Rect) -> None:
        title = "Edit Job" if self._job.id is not None else "New Job"
        frame.render(
            Panel(Text(""), title=title, subtitle="ctrl+s save  esc cancel"),
            region,
        )
        focused = self.focused_field
        for field, rect in self._field_regions(region.inner(horizontal=2, vertical=2)).items():
            is_focused = field == focused
            if field in self._select:
                widget = self._select[field].render(field.title, is_focused)
            else:
                widget = self._text[field].render(field.title, is_focused)
            frame.render(widget, rect)