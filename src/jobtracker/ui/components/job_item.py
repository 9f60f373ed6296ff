"""One application rendered as three panels: info, notes and links."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional
from urllib.parse import urlsplit

from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from jobtracker.models.job import JobApplication
from jobtracker.ui.components.styles import border_style, highlight
from jobtracker.ui.core.layout import Rect
from jobtracker.ui.terminal.frame import Frame

ITEM_HEIGHT = 8
INFO_WIDTH = 40

# Border plus one row of padding above the first link.
_LINKS_TOP = 2


class ItemField(IntEnum):
    """Focusable parts of a job item, in focus order."""
    STATUS = 0
    NOTES = 1
    APPLICATION_LINK = 2
    COMPANY_WEBSITE = 3
    CV = 4
    COVER_LETTER = 5


_LINK_LABELS = {
    ItemField.APPLICATION_LINK: "Application Link",
    ItemField.COMPANY_WEBSITE: "Company Website",
    ItemField.CV: "CV",
    ItemField.COVER_LETTER: "Cover Letter",
}


class JobItem:
    """Widget drawing a single :class:`JobApplication`."""

    def __init__(self, job: JobApplication):
        self.job = job

    @staticmethod
    def columns(region: Rect) -> tuple[Rect, Rect, Rect]:
        """Info (fixed width), notes and links (2:1 split of the rest)."""
        info_width = min(INFO_WIDTH, region.width)
        rest = region.width - info_width
        notes_width = rest * 2 // 3
        info, notes, links = region.split_columns([info_width, notes_width, rest - notes_width])
        return info, notes, links

    def field_at(self, region: Rect, column: int, row: int) -> Optional[ItemField]:
        """The sub-field under a pointer position inside ``region``."""
        info, notes, links = self.columns(region)
        if info.contains(column, row):
            return ItemField.STATUS
        if notes.contains(column, row):
            return ItemField.NOTES
        if links.contains(column, row):
            offset = row - (links.y + _LINKS_TOP)
            if 0 <= offset < len(_LINK_LABELS):
                return ItemField(ItemField.APPLICATION_LINK + offset)
        return None

    def _links(self) -> dict[ItemField, Optional[str]]:
        url = self.job.url or None
        website = None
        if url:
            parts = urlsplit(url)
            if parts.scheme and parts.netloc:
                website = f"{parts.scheme}://{parts.netloc}"
        files = self.job.files
        return {
            ItemField.APPLICATION_LINK: url,
            ItemField.COMPANY_WEBSITE: website,
            ItemField.CV: f"file://{files.cv}" if files.cv else None,
            ItemField.COVER_LETTER: f"file://{files.cover_letter}" if files.cover_letter else None,
        }

    def info_panel(self, focused: bool, field: Optional[ItemField]) -> Panel:
        job = self.job
        status_style = Style(
            color=job.status.colour,
            reverse=focused and field == ItemField.STATUS,
        )
        body = Text(justify="center")
        body.append(f"{job.position}\n")
        body.append(f"{job.company_name}\n\n")
        body.append(job.location)
        return Panel(
            body,
            title=Text(job.status.value, style=status_style),
            subtitle=job.application_date,
            subtitle_align="left",
            border_style=border_style(focused),
            padding=(1, 1),
        )

    def notes_panel(self, focused: bool, field: Optional[ItemField]) -> Panel:
        return Panel(
            Text(self.job.notes or "", justify="center"),
            title="Notes",
            border_style=border_style(focused, field == ItemField.NOTES),
            padding=(1, 1),
        )

    def links_panel(self, focused: bool, field: Optional[ItemField]) -> Panel:
        lines = Text(justify="center")
        links = self._links()
        for index, (item, label) in enumerate(_LINK_LABELS.items()):
            if index:
                lines.append("\n")
            lines.append(
                label,
                style=Style(
                    color="blue",
                    underline=True,
                    bgcolor=highlight(focused, field == item) or None,
                    link=links[item],
                ),
            )
        active = field is not None and field >= ItemField.APPLICATION_LINK
        return Panel(
            lines,
            title="Links",
            border_style=border_style(focused, active),
            padding=(1, 1),
        )

    def draw(
        self,
        frame: Frame,
        region: Rect,
        focused: bool = False,
        field: Optional[ItemField] = None,
    ) -> None:
        info, notes, links = self.columns(region)
        frame.render(self.info_panel(focused, field), info)
        frame.render(self.notes_panel(focused, field), notes)
        frame.render(self.links_panel(focused, field), links)
