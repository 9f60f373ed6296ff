"""Screens and widgets of the job tracker."""

from jobtracker.ui.components.edit_job import EditJob
from jobtracker.ui.components.header import Header
from jobtracker.ui.components.help_popup import HelpPopup
from jobtracker.ui.components.job_list import JobList
from jobtracker.ui.components.notes_popup import NotesPopup
from jobtracker.ui.components.status_bar import StatusBar

__all__ = ["EditJob", "Header", "HelpPopup", "JobList", "NotesPopup", "StatusBar"]
