from __future__ import annotations

from rich.console import Console

from jobtracker.config.schema import JobTrackerConfig, UiConfig
from jobtracker.models.job import ApplicationStatus, JobApplication, PositionCategory
from jobtracker.ui.components import EditJob, Header, HelpPopup, JobList, NotesPopup, StatusBar
from jobtracker.ui.components.edit_job import FormField
from jobtracker.ui.components.job_item import ItemField, JobItem
from jobtracker.ui.components.select_box import SelectBox
from jobtracker.ui.components.text_field import TextField
from jobtracker.ui.core.action import (
    ChangeMode,
    DeleteJob,
    DispatchJobSearch,
    DispatchNotesPopupData,
    EnterPopup,
    Error,
    ExitPopup,
    FocusNext,
    FocusPrevious,
    Help,
    IndexNext,
    JobResults,
    NotesPopupData,
    PopulateEditJobForm,
    SaveJob,
    Tick,
    UnFocusField,
)
from jobtracker.ui.core.channel import ActionChannel
from jobtracker.ui.core.keys import KeyPress
from jobtracker.ui.core.layout import Rect
from jobtracker.ui.core.mode import Mode
from jobtracker.ui.terminal.events import MouseEvent, MouseKind
from jobtracker.ui.terminal.frame import Frame


def press(text: str) -> KeyPress:
    if len(text) == 1:
        return KeyPress(key=text, character=text)
    return KeyPress.parse(text)


def wire(component, config: JobTrackerConfig | None = None) -> ActionChannel:
    channel = ActionChannel()
    component.register_action_sink(channel.sender())
    component.register_config(config or JobTrackerConfig())
    return channel


def render_text(frame: Frame) -> str:
    console = Console(width=frame.area.width, color_system=None, legacy_windows=False)
    with console.capture() as capture:
        console.print(frame)
    return capture.get()


def jobs(count: int) -> tuple[JobApplication, ...]:
    return tuple(JobApplication.sample(n) for n in range(1, count + 1))


# Widgets

def test_text_field_editing() -> None:
    field = TextField("abc")
    assert field.cursor == 3
    field.handle_key(press("d"))
    field.handle_key(press("left"))
    field.handle_key(press("backspace"))
    assert field.value == "abd"
    field.handle_key(press("home"))
    field.handle_key(press("delete"))
    field.handle_key(KeyPress("space", character=" "))
    assert field.value == " bd"
    field.handle_key(press("end"))
    assert field.cursor == 3
    assert not field.handle_key(press("ctrl+s"))
    assert not field.handle_key(press("enter"))
    assert field.value == " bd"


def test_multiline_text_field_accepts_enter() -> None:
    field = TextField("a", multiline=True)
    field.handle_key(press("enter"))
    field.handle_key(press("b"))
    assert field.value == "a\nb"


def test_select_box_cycles() -> None:
    box = SelectBox(list(ApplicationStatus))
    assert box.value is ApplicationStatus.APPLIED
    assert box.previous() is ApplicationStatus.ACCEPTED
    assert box.next() is ApplicationStatus.APPLIED
    box.select(ApplicationStatus.OFFERED)
    assert box.next() is ApplicationStatus.REJECTED


def test_job_item_field_hit_testing() -> None:
    item = JobItem(JobApplication.sample(1))
    region = Rect(0, 0, 100, 8)
    info, notes, links = JobItem.columns(region)
    assert (info.width, notes.width, links.width) == (40, 40, 20)

    assert item.field_at(region, 5, 3) == ItemField.STATUS
    assert item.field_at(region, 50, 3) == ItemField.NOTES
    assert item.field_at(region, 85, 2) == ItemField.APPLICATION_LINK
    assert item.field_at(region, 85, 3) == ItemField.COMPANY_WEBSITE
    assert item.field_at(region, 85, 5) == ItemField.COVER_LETTER
    assert item.field_at(region, 85, 1) is None
    assert item.field_at(region, 85, 6) is None
    assert item.field_at(region, 5, 9) is None


# Job list

def test_job_list_requests_records_on_start() -> None:
    job_list = JobList()
    channel = wire(job_list)
    job_list.initialize(Rect(0, 0, 100, 40))
    assert channel.try_recv() == DispatchJobSearch()


def test_job_list_row_navigation_wraps() -> None:
    job_list = JobList()
    wire(job_list)
    assert job_list.selected_job is None
    job_list.update(JobResults(jobs=jobs(3)))
    assert job_list.selected_index == 0

    job_list.handle_key_event(press("down"))
    assert job_list.selected_index == 1
    job_list.handle_key_event(press("k"))
    job_list.handle_key_event(press("up"))
    assert job_list.selected_index == 2
    job_list.update(IndexNext())
    assert job_list.selected_index == 0
    assert job_list.handle_key_event(press("ctrl+n")) is None


def test_job_list_keeps_selection_when_count_unchanged() -> None:
    job_list = JobList()
    wire(job_list)
    job_list.update(JobResults(jobs=jobs(3)))
    job_list.update(IndexNext())
    job_list.update(JobResults(jobs=jobs(3)))
    assert job_list.selected_index == 1
    job_list.update(JobResults(jobs=jobs(4)))
    assert job_list.selected_index == 0


def test_job_list_field_focus() -> None:
    job_list = JobList()
    wire(job_list)
    job_list.update(JobResults(jobs=jobs(2)))
    assert job_list.focused_field is None
    job_list.handle_key_event(press("right"))
    assert job_list.focused_field == ItemField.STATUS
    job_list.handle_key_event(press("left"))
    assert job_list.focused_field == ItemField.COVER_LETTER
    assert job_list.handle_key_event(press("escape")) == UnFocusField()
    job_list.update(UnFocusField())
    assert job_list.focused_field is None


def test_job_list_enter_edits_selected_job() -> None:
    job_list = JobList()
    channel = wire(job_list)
    records = jobs(2)
    job_list.update(JobResults(jobs=records))
    job_list.handle_key_event(press("j"))

    assert job_list.handle_key_event(press("enter")) == PopulateEditJobForm(job=records[1])
    assert channel.try_recv() == ChangeMode(mode=Mode.edit_job())


def test_job_list_enter_on_notes_opens_popup_then_sends_notes() -> None:
    job_list = JobList()
    channel = wire(job_list)
    records = jobs(1)
    job_list.update(JobResults(jobs=records))
    job_list.handle_key_event(press("right"))
    job_list.handle_key_event(press("right"))
    assert job_list.focused_field == ItemField.NOTES

    action = job_list.handle_key_event(press("enter"))
    assert action == EnterPopup(name="notes")
    assert channel.try_recv() is None

    job_list.update(action)
    assert channel.try_recv() == DispatchNotesPopupData(job_id=1, notes=records[0].notes)


def test_job_list_new_and_delete() -> None:
    job_list = JobList()
    channel = wire(job_list)
    job_list.update(JobResults(jobs=jobs(2)))

    assert job_list.handle_key_event(press("d")) == DeleteJob(job_id=1)

    action = job_list.handle_key_event(press("n"))
    assert isinstance(action, PopulateEditJobForm)
    assert action.job.id is None
    assert action.job.application_date
    assert channel.try_recv() == ChangeMode(mode=Mode.edit_job())


def test_job_list_refreshes_when_home_returns() -> None:
    job_list = JobList()
    wire(job_list)
    assert job_list.update(ChangeMode(mode=Mode.home())) == DispatchJobSearch()
    assert job_list.update(Tick()) is None


def test_job_list_draw_centers_selection_and_maps_pointer() -> None:
    job_list = JobList()
    wire(job_list)
    job_list.update(JobResults(jobs=jobs(10)))
    frame = Frame(100, 40)

    # body starts at row 2: four 8-row items fit in 40 rows
    job_list.draw(frame, frame.area)
    assert job_list.window_start == 0
    for _ in range(6):
        job_list.update(IndexNext())
    job_list.draw(Frame(100, 40), frame.area)
    assert job_list.window_start == 4

    # second visible row, notes column
    job_list.handle_mouse_event(MouseEvent(MouseKind.MOVED, column=50, row=2 + 8 + 3))
    assert job_list.selected_index == 5
    assert job_list.focused_field == ItemField.NOTES
    job_list.handle_mouse_event(MouseEvent(MouseKind.SCROLL_DOWN, column=0, row=0))
    assert job_list.selected_index == 6

    text = render_text(frame)
    assert "Job Applications" in text
    assert "Acme Inc 1" in text


def test_job_list_draws_empty_state() -> None:
    job_list = JobList()
    frame = Frame(80, 20)
    job_list.draw(frame, frame.area)
    assert "No applications yet" in render_text(frame)


# Edit form

def test_edit_form_round_trips_a_record() -> None:
    form = EditJob()
    job = JobApplication.sample(1)
    form.update(PopulateEditJobForm(job=job))
    assert form.focused_field == FormField.POSITION
    assert form.to_job() == job


def test_edit_form_navigation_keys_emit_focus_actions() -> None:
    form = EditJob()
    assert form.handle_key_event(press("tab")) == FocusNext()
    assert form.handle_key_event(press("enter")) == FocusNext()
    assert form.handle_key_event(press("shift+tab")) == FocusPrevious()
    assert form.handle_key_event(press("escape")) == ChangeMode(mode=Mode.home())

    form.update(FocusPrevious())
    assert form.focused_field == FormField.NOTES
    form.update(FocusNext())
    assert form.focused_field == FormField.POSITION


def test_edit_form_typing_and_selecting() -> None:
    form = EditJob()
    form.update(PopulateEditJobForm(job=JobApplication.sample(1)))
    form.handle_key_event(press("!"))
    form.update(FocusNext())
    form.handle_key_event(press("down"))
    for _ in range(6):
        form.update(FocusNext())
    assert form.focused_field == FormField.STATUS
    form.handle_key_event(press("down"))
    form.handle_key_event(press("down"))
    form.handle_key_event(press("down"))

    job = form.to_job()
    assert job.position == "Backend Developer 1!"
    assert job.position_category is PositionCategory.DEVELOPMENT
    assert job.status is ApplicationStatus.WITHDRAWN
    assert job.is_active is False


def test_edit_form_save_sends_job_and_goes_home() -> None:
    form = EditJob()
    channel = wire(form)
    job = JobApplication.sample(4)
    form.update(PopulateEditJobForm(job=job))
    assert form.handle_key_event(press("ctrl+s")) == ChangeMode(mode=Mode.home())
    assert channel.try_recv() == SaveJob(job=job)


def test_edit_form_opens_help_and_draws() -> None:
    form = EditJob()
    assert form.update(Help()) == EnterPopup(name="help")
    form.update(PopulateEditJobForm(job=JobApplication.sample(1)))
    frame = Frame(100, 30)
    form.draw(frame, frame.area)
    text = render_text(frame)
    assert "Edit Job" in text
    assert "Backend Developer 1" in text
    assert "Company Name" in text


# Popups and bars

def test_notes_popup_returns_notes_then_exits() -> None:
    popup = NotesPopup()
    channel = wire(popup)
    assert popup.owning_mode() == Mode.popup("notes")
    popup.update(DispatchNotesPopupData(job_id=3, notes="abc"))
    popup.handle_key_event(press("d"))

    assert popup.handle_key_event(press("escape")) == ExitPopup()
    assert channel.try_recv() == NotesPopupData(job_id=3, notes="abcd")

    frame = Frame(60, 20)
    popup.draw(frame, frame.area)
    assert "abcd" in render_text(frame)


def test_help_popup_lists_bindings() -> None:
    popup = HelpPopup()
    wire(popup)
    assert ("ctrl+q", "quit") in popup.bindings
    assert ("ctrl+x h", "help") in popup.bindings
    assert popup.handle_key_event(press("escape")) == ExitPopup()
    assert popup.handle_key_event(press("x")) is None

    frame = Frame(80, 30)
    popup.draw(frame, frame.area)
    assert "ctrl+q" in render_text(frame)


def test_help_popup_shows_action_arguments() -> None:
    popup = HelpPopup()
    wire(popup, JobTrackerConfig(keybindings={"g": "change_mode:edit_job", "?": "enter_popup:help"}))
    assert popup.bindings == [("?", "enter_popup:help"), ("g", "change_mode:edit_job")]


def test_header_counts_and_help() -> None:
    header = Header()
    records = jobs(2) + (
        JobApplication.sample(3).model_copy(update={"status": ApplicationStatus.OFFERED}),
    )
    header.update(JobResults(jobs=records))
    assert header.total == 3
    assert header.count(ApplicationStatus.INTERVIEWING) == 2
    assert header.count(ApplicationStatus.OFFERED) == 1
    assert header.update(Help()) == EnterPopup(name="help")

    frame = Frame(100, 3)
    header.draw(frame, frame.area)
    assert "3 applications" in render_text(frame)


def test_status_bar_shows_errors_for_a_few_ticks() -> None:
    bar = StatusBar(Mode.edit_job())
    wire(bar, JobTrackerConfig(ui=UiConfig(error_ticks=2)))
    assert bar.identifier() == "StatusBar[edit_job]"

    bar.update(Error(message="disk full"))
    assert bar.error == "disk full"
    frame = Frame(80, 1)
    bar.draw(frame, frame.area)
    assert "disk full" in render_text(frame)

    bar.update(Tick())
    assert bar.error == "disk full"
    bar.update(Tick())
    assert bar.error is None
