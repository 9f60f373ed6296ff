"""Application controller.

The :class:`App` owns the action queue, the mode registry and the key
sequence matcher, and drives one cycle per terminal event:

1. translate the event into actions and hand it to visible components;
2. drain the queue, applying global effects, then services, then the
   visible components of the (possibly new) mode;
3. quit or suspend if asked;
4. render once if anything requested it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence

from jobtracker.config.schema import JobTrackerConfig
from jobtracker.errors import ConfigError, TerminalError
from jobtracker.ui.core.action import (
    Action,
    ChangeMode,
    ClearScreen,
    EnterPopup,
    Error,
    ExitPopup,
    Quit,
    Render,
    Resize,
    Resume,
    Suspend,
    Tick,
)
from jobtracker.ui.core.channel import ActionChannel, ActionSender
from jobtracker.ui.core.component import Component
from jobtracker.ui.core.keys import KeySequence, KeySequenceMatcher
from jobtracker.ui.core.layout import Rect
from jobtracker.ui.core.mode import DEFAULT_MODE, Mode
from jobtracker.ui.core.registry import ModeRegistry
from jobtracker.ui.terminal.driver import TerminalDriver
from jobtracker.ui.terminal.events import (
    Event,
    KeyEvent,
    QuitEvent,
    RenderEvent,
    ResizeEvent,
    TickEvent,
)
from jobtracker.ui.terminal.frame import Frame

logger = logging.getLogger(__name__)

# Too frequent to log one line each.
_QUIET_ACTIONS = (Tick, Render)


class ActionService(Protocol):
    """Non-visual collaborator that sees every action in every mode."""

    def register_action_sink(self, sender: ActionSender) -> None: ...

    def update(self, action: Action) -> Optional[Action]: ...


class App:
    """Event loop tying the terminal, the components and the services together."""

    def __init__(
        self,
        config: JobTrackerConfig,
        components: Iterable[Component],
        services: Sequence[ActionService] = (),
        initial_mode: Mode = DEFAULT_MODE,
    ):
        self.config = config
        self._channel = ActionChannel()
        self._sender = self._channel.sender()
        self._registry = ModeRegistry(initial_mode)
        for component in components:
            self._registry.register(component)
        self._services = list(services)
        self._matcher = KeySequenceMatcher(config.key_bindings())
        self._popup_stack: list[Mode] = []

        self.should_quit = False
        self.should_suspend = False
        self._render_requested = False

    # Introspection

    @property
    def sender(self) -> ActionSender:
        return self._sender

    @property
    def registry(self) -> ModeRegistry:
        return self._registry

    @property
    def mode(self) -> Mode:
        return self._registry.mode

    @property
    def visible_components(self) -> tuple[Component, ...]:
        return self._registry.visible

    @property
    def key_buffer(self) -> KeySequence:
        return self._matcher.buffer

    @property
    def popup_stack(self) -> tuple[Mode, ...]:
        return tuple(self._popup_stack)

    @property
    def render_requested(self) -> bool:
        return self._render_requested

    def dispatch(self, action: Action) -> None:
        """Queue an action for the next drain."""
        self._sender.send(action)

    # Lifecycle

    async def run(self, driver: TerminalDriver) -> None:
        """Run until a Quit action is processed.

        Raises:
            ChannelClosedError: If a component sends after shutdown.
            TerminalError: If the terminal cannot be acquired.
            Exception: Whatever a component's ``initialize`` raises.
        """
        await driver.enter()
        try:
            self.initialize(driver.size())
            while True:
                event = await driver.next_event()
                if event is not None:
                    self.handle_event(event)
                self.handle_actions(driver)
                if self.should_quit:
                    break
                if self.should_suspend:
                    await self._suspend(driver)
                if self._render_requested:
                    self.render(driver)
        finally:
            self._channel.close()
            await driver.exit()
        logger.info("Application stopped")

    def initialize(self, size: Rect) -> None:
        """Wire every component and service, then initialize components."""
        for component in self._registry.components():
            component.register_action_sink(self._sender)
        for service in self._services:
            service.register_action_sink(self._sender)
        for component in self._registry.components():
            component.register_config(self.config)
        for component in self._registry.components():
            component.initialize(size)
        logger.info(
            "Initialized %d components in mode %s",
            len(self._registry.entries),
            self.mode,
        )

    # Events

    def handle_event(self, event: Event) -> None:
        """Turn one terminal event into queued actions."""
        if isinstance(event, TickEvent):
            self._sender.send(Tick())
        elif isinstance(event, RenderEvent):
            self._sender.send(Render())
        elif isinstance(event, ResizeEvent):
            self._sender.send(Resize(width=event.width, height=event.height))
        elif isinstance(event, QuitEvent):
            self._sender.send(Quit())
        elif isinstance(event, KeyEvent):
            action = self._matcher.feed(event.key)
            if action is not None:
                self._sender.send(action)

        for component in self._registry.visible:
            action = component.handle_event(event)
            if action is not None:
                self._sender.send(action)

    # Actions

    def handle_actions(self, driver: TerminalDriver) -> None:
        """Drain the queue, including actions enqueued while draining."""
        while True:
            action = self._channel.try_recv()
            if action is None:
                break
            if not isinstance(action, _QUIET_ACTIONS):
                logger.debug("Dispatch %s", action)

            self._apply(action, driver)

            for service in self._services:
                follow_up = service.update(action)
                if follow_up is not None:
                    self._sender.send(follow_up)

            for component in self._registry.visible:
                follow_up = component.update(action)
                if follow_up is not None:
                    self._sender.send(follow_up)

    def _apply(self, action: Action, driver: TerminalDriver) -> None:
        if isinstance(action, Tick):
            self._matcher.reset()
        elif isinstance(action, Quit):
            self.should_quit = True
        elif isinstance(action, Suspend):
            self.should_suspend = True
        elif isinstance(action, Resume):
            self.should_suspend = False
        elif isinstance(action, ClearScreen):
            driver.clear()
        elif isinstance(action, Resize):
            driver.resize(action.width, action.height)
            self._render_requested = True
        elif isinstance(action, Render):
            self._render_requested = True
        elif isinstance(action, ChangeMode):
            if not action.mode.is_popup:
                self._popup_stack.clear()
            self._registry.transition(action.mode)
        elif isinstance(action, EnterPopup):
            target = Mode.popup(action.name)
            if target != self.mode:
                self._popup_stack.append(self.mode)
                self._sender.send(ChangeMode(mode=target))
        elif isinstance(action, ExitPopup):
            if not self.mode.is_popup:
                logger.debug("Ignoring exit_popup in mode %s", self.mode)
                return
            previous = self._popup_stack.pop() if self._popup_stack else DEFAULT_MODE
            self._sender.send(ChangeMode(mode=previous))
        elif isinstance(action, Error):
            logger.warning("Error action: %s", action.message)

    # Output

    def render(self, driver: TerminalDriver) -> None:
        """Draw the visible components once, in registration order."""
        self._render_requested = False
        failures: list[Error] = []

        def paint(frame: Frame) -> None:
            for component, region in self._registry.regions_for(frame.area):
                try:
                    component.draw(frame, region)
                except Exception as exc:
                    logger.exception("Draw failed in %s", component.identifier())
                    failures.append(Error(message=f"{component.identifier()}: {exc}"))

        driver.draw(paint)
        for failure in failures:
            self._sender.send(failure)

    async def _suspend(self, driver: TerminalDriver) -> None:
        logger.info("Suspending")
        try:
            await driver.suspend()
        except TerminalError as exc:
            logger.warning("Suspend failed: %s", exc.message)
            self._sender.send(Error(message=exc.message))
        self._sender.send(Resume())
        self._sender.send(ClearScreen())
        await driver.enter()
        logger.info("Resumed")


def build_app(config: JobTrackerConfig, database) -> App:
    """Assemble the standard component set around ``database``."""
    from jobtracker.store.bridge import JobStoreBridge
    from jobtracker.ui.components import (
        EditJob,
        Header,
        HelpPopup,
        JobList,
        NotesPopup,
        StatusBar,
    )
    from jobtracker.ui.components.help_popup import HELP_POPUP
    from jobtracker.ui.components.notes_popup import NOTES_POPUP

    try:
        initial_mode = Mode.parse(config.ui.initial_mode)
    except ValueError as exc:
        raise ConfigError(f"Invalid ui.initial_mode '{config.ui.initial_mode}'") from exc

    components: list[Component] = [
        Header(),
        JobList(),
        StatusBar(Mode.home()),
        EditJob(),
        StatusBar(Mode.edit_job()),
        NotesPopup(),
        StatusBar(NOTES_POPUP),
        HelpPopup(),
        StatusBar(HELP_POPUP),
    ]
    return App(
        config,
        components,
        services=[JobStoreBridge(database)],
        initial_mode=initial_mode,
    )


async def run_app(config: JobTrackerConfig, database_path: Optional[Path] = None) -> None:
    """Open the database and run the TUI in a Textual terminal."""
    from jobtracker.store.database import Database
    from jobtracker.ui.terminal.textual_driver import TextualTerminal

    path = database_path or config.general.resolved_database_path
    with Database(path) as database:
        database.create()
        app = build_app(config, database)
        terminal = TextualTerminal(
            tick_rate=config.terminal.tick_rate,
            frame_rate=config.terminal.frame_rate,
            mouse=config.terminal.mouse,
        )
        await app.run(terminal)
