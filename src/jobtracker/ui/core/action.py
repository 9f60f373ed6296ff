"""Action union - every intent that flows through the dispatch queue.

Actions are frozen pydantic models discriminated on ``kind``. They never
reference component-owned state, so they can be queued, copied and logged
safely, and they round-trip through JSON:

    action = ChangeMode(mode=Mode.edit_job())
    assert load_action(dump_action(action)) == action
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from jobtracker.errors import ConfigError
from jobtracker.models.job import ApplicationStatus, JobApplication
from jobtracker.ui.core.mode import Mode


class BaseAction(BaseModel):
    """Common base for all actions."""

    model_config = ConfigDict(frozen=True)

    kind: str

    def __str__(self) -> str:
        return self.kind

    @property
    def notation(self) -> str:
        """Keymap form of the action, as accepted by :func:`parse_action`."""
        return self.kind


# Loop control

class Tick(BaseAction):
    kind: Literal["tick"] = "tick"


class Render(BaseAction):
    kind: Literal["render"] = "render"


class Resize(BaseAction):
    kind: Literal["resize"] = "resize"
    width: int
    height: int


class Suspend(BaseAction):
    kind: Literal["suspend"] = "suspend"


class Resume(BaseAction):
    kind: Literal["resume"] = "resume"


class Quit(BaseAction):
    kind: Literal["quit"] = "quit"


class ClearScreen(BaseAction):
    kind: Literal["clear_screen"] = "clear_screen"


class Error(BaseAction):
    kind: Literal["error"] = "error"
    message: str

    @property
    def notation(self) -> str:
        return f"{self.kind}:{self.message}"


class Help(BaseAction):
    kind: Literal["help"] = "help"


# Navigation and focus

class ChangeMode(BaseAction):
    kind: Literal["change_mode"] = "change_mode"
    mode: Mode

    @property
    def notation(self) -> str:
        return f"{self.kind}:{self.mode}"


class FocusNext(BaseAction):
    kind: Literal["focus_next"] = "focus_next"


class FocusPrevious(BaseAction):
    kind: Literal["focus_previous"] = "focus_previous"


class IndexNext(BaseAction):
    kind: Literal["index_next"] = "index_next"


class IndexPrevious(BaseAction):
    kind: Literal["index_previous"] = "index_previous"


class UnFocusField(BaseAction):
    kind: Literal["unfocus_field"] = "unfocus_field"


class EnterPopup(BaseAction):
    kind: Literal["enter_popup"] = "enter_popup"
    name: str

    @property
    def notation(self) -> str:
        return f"{self.kind}:{self.name}"


class ExitPopup(BaseAction):
    kind: Literal["exit_popup"] = "exit_popup"


# Domain data

class DispatchJobSearch(BaseAction):
    """Ask the store for the application list."""
    kind: Literal["dispatch_job_search"] = "dispatch_job_search"
    status: Optional[ApplicationStatus] = None

    @property
    def notation(self) -> str:
        if self.status is None:
            return self.kind
        return f"{self.kind}:{self.status.value}"


class JobResults(BaseAction):
    """Application list delivered by the store."""
    kind: Literal["job_results"] = "job_results"
    jobs: tuple[JobApplication, ...] = ()


class PopulateEditJobForm(BaseAction):
    kind: Literal["populate_edit_job_form"] = "populate_edit_job_form"
    job: JobApplication


class SaveJob(BaseAction):
    """Write intent: insert when ``job.id`` is None, update otherwise."""
    kind: Literal["save_job"] = "save_job"
    job: JobApplication


class DeleteJob(BaseAction):
    kind: Literal["delete_job"] = "delete_job"
    job_id: int


class DispatchNotesPopupData(BaseAction):
    kind: Literal["dispatch_notes_popup_data"] = "dispatch_notes_popup_data"
    job_id: Optional[int] = None
    notes: str = ""


class NotesPopupData(BaseAction):
    kind: Literal["notes_popup_data"] = "notes_popup_data"
    job_id: Optional[int] = None
    notes: str = ""


Action = Annotated[
    Union[
        Tick,
        Render,
        Resize,
        Suspend,
        Resume,
        Quit,
        ClearScreen,
        Error,
        Help,
        ChangeMode,
        FocusNext,
        FocusPrevious,
        IndexNext,
        IndexPrevious,
        UnFocusField,
        EnterPopup,
        ExitPopup,
        DispatchJobSearch,
        JobResults,
        PopulateEditJobForm,
        SaveJob,
        DeleteJob,
        DispatchNotesPopupData,
        NotesPopupData,
    ],
    Field(discriminator="kind"),
]

_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)

# Actions that carry no payload, addressable by name from the keymap.
SIMPLE_ACTIONS: dict[str, type[BaseAction]] = {
    cls.model_fields["kind"].default: cls
    for cls in (
        Tick,
        Render,
        Suspend,
        Resume,
        Quit,
        ClearScreen,
        Help,
        FocusNext,
        FocusPrevious,
        IndexNext,
        IndexPrevious,
        UnFocusField,
        ExitPopup,
        DispatchJobSearch,
    )
}


def dump_action(action: BaseAction) -> str:
    """Serialize an action to JSON."""
    return action.model_dump_json()


def load_action(data: str | bytes) -> Action:
    """Deserialize an action produced by :func:`dump_action`."""
    return _ADAPTER.validate_json(data)


def action_from_dict(data: dict[str, Any]) -> Action:
    """Validate a mapping such as ``{"kind": "resize", "width": 80, ...}``."""
    return _ADAPTER.validate_python(data)


def parse_action(notation: str | dict[str, Any]) -> Action:
    """Parse the keymap notation for an action.

    Accepts a bare name ("quit", "focus_next"), a name with an argument
    ("change_mode:edit_job", "enter_popup:help", "error:boom",
    "dispatch_job_search:Applied"), or a full mapping with a ``kind`` key.

    Raises:
        ConfigError: If the notation names no action or the argument is
            invalid.
    """
    if isinstance(notation, dict):
        try:
            return action_from_dict(notation)
        except ValidationError as exc:
            raise ConfigError(f"Invalid action table {notation!r}: {exc}") from exc

    name, sep, arg = notation.strip().partition(":")
    name = name.strip().lower().replace("-", "_")
    arg = arg.strip()
    try:
        if name == "change_mode" and arg:
            return ChangeMode(mode=Mode.parse(arg))
        if name == "enter_popup" and arg:
            return EnterPopup(name=arg)
        if name == "error" and arg:
            return Error(message=arg)
        if name == "dispatch_job_search" and arg:
            return DispatchJobSearch(status=ApplicationStatus.parse(arg))
    except ValueError as exc:
        raise ConfigError(f"Invalid argument in action '{notation}': {exc}") from exc

    if sep or name not in SIMPLE_ACTIONS:
        raise ConfigError(f"Unknown action '{notation}'")
    return SIMPLE_ACTIONS[name]()
