"""Mode registry - which components are live in the current mode."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from jobtracker.ui.core.component import Component
from jobtracker.ui.core.layout import Rect, assign_regions
from jobtracker.ui.core.mode import DEFAULT_MODE, Mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    """A component paired with the mode it belongs to."""
    component: Component
    mode: Mode


class ModeRegistry:
    """Tracks the current mode and its visible components.

    Registration order is also dispatch and draw order, so layering and
    action application are deterministic. The visible set is recomputed
    only on :meth:`transition`; reads are O(1).
    """

    def __init__(self, initial_mode: Mode = DEFAULT_MODE):
        self._entries: list[RegistryEntry] = []
        self._mode = initial_mode
        self._visible: tuple[Component, ...] = ()

    def register(self, component: Component) -> RegistryEntry:
        entry = RegistryEntry(component=component, mode=component.owning_mode())
        self._entries.append(entry)
        if entry.mode == self._mode:
            self._visible = self._visible + (component,)
        logger.debug("Registered %s for mode %s", component.identifier(), entry.mode)
        return entry

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def visible(self) -> tuple[Component, ...]:
        return self._visible

    @property
    def entries(self) -> tuple[RegistryEntry, ...]:
        return tuple(self._entries)

    def components(self) -> Iterator[Component]:
        for entry in self._entries:
            yield entry.component

    def transition(self, mode: Mode) -> tuple[Component, ...]:
        """Make ``mode`` current and return its visible components."""
        previous = self._mode
        self._mode = mode
        self._visible = tuple(
            entry.component for entry in self._entries if entry.mode == mode
        )
        logger.debug(
            "Mode %s -> %s (%d visible)", previous, mode, len(self._visible)
        )
        return self._visible

    def regions_for(self, area: Rect) -> list[tuple[Component, Rect]]:
        """Visible components with their draw regions, in draw order."""
        visible = self._visible
        return list(zip(visible, assign_regions(area, visible)))
