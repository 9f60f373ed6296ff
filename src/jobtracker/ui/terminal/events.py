"""Raw input events produced by a terminal driver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from jobtracker.ui.core.keys import KeyPress


class MouseKind(str, Enum):
    MOVED = "moved"
    DOWN = "down"
    UP = "up"
    DRAG = "drag"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"


@dataclass(frozen=True)
class KeyEvent:
    key: KeyPress


@dataclass(frozen=True)
class MouseEvent:
    kind: MouseKind
    column: int
    row: int
    modifiers: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class TickEvent:
    pass


@dataclass(frozen=True)
class RenderEvent:
    pass


@dataclass(frozen=True)
class QuitEvent:
    pass


Event = Union[KeyEvent, MouseEvent, ResizeEvent, TickEvent, RenderEvent, QuitEvent]
