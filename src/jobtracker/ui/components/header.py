"""Title bar with application counts."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from rich.panel import Panel
from rich.text import Text

from jobtracker.models.job import ApplicationStatus
from jobtracker.ui.components.help_popup import HELP_POPUP
from jobtracker.ui.components.styles import DIM
from jobtracker.ui.core.action import Action, EnterPopup, Help, JobResults
from jobtracker.ui.core.component import Component
from jobtracker.ui.core.layout import Dock, Rect
from jobtracker.ui.core.mode import Mode
from jobtracker.ui.terminal.frame import Frame


class Header(Component):
    dock = Dock.TOP
    dock_size = 3

    def __init__(self) -> None:
        super().__init__()
        self._counts: Counter[ApplicationStatus] = Counter()
        self._total = 0

    def owning_mode(self) -> Mode:
        return Mode.home()

    @property
    def total(self) -> int:
        return self._total

    def count(self, status: ApplicationStatus) -> int:
        return self._counts[status]

    def update(self, action: Action) -> Optional[Action]:
        if isinstance(action, JobResults):
            self._counts = Counter(job.status for job in action.jobs)
            self._total = len(action.jobs)
        elif isinstance(action, Help):
            return EnterPopup(name=HELP_POPUP.name)
        return None

    def draw(self, frame: Frame, region: Rect) -> None:
        line = Text()
        line.append("Job Tracker", style="bold")
        line.append(f"   {self._total} applications", style=DIM)
        for status in ApplicationStatus:
            count = self._counts[status]
            if count:
                line.append("   ")
                line.append(f"{status.value} {count}", style=status.colour)
        frame.render(Panel(line, border_style=DIM, padding=(0, 1)), region)
