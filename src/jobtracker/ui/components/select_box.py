"""Option cycler widget for enum-valued form fields."""

from __future__ import annotations

from enum import Enum
from typing import Generic, Sequence, TypeVar

from rich.panel import Panel
from rich.text import Text

from jobtracker.ui.components.styles import field_border
from jobtracker.ui.core.focus import FocusIndex

T = TypeVar("T")


def option_label(option: object) -> str:
    if isinstance(option, Enum):
        return str(option.value)
    return str(option)


class SelectBox(Generic[T]):
    """Holds one of a fixed list of options; Up/Down cycle through them."""

    def __init__(self, options: Sequence[T]):
        if not options:
            raise ValueError("SelectBox needs at least one option")
        self._options = tuple(options)
        self._index = FocusIndex(len(self._options))

    @property
    def options(self) -> tuple[T, ...]:
        return self._options

    @property
    def value(self) -> T:
        return self._options[self._index.current() or 0]

    def select(self, value: T) -> None:
        self._index.set(self._options.index(value))

    def next(self) -> T:
        self._index.advance()
        return self.value

    def previous(self) -> T:
        self._index.retreat()
        return self.value

    def render(self, title: str, focused: bool) -> Panel:
        text = Text(option_label(self.value))
        text.append(" ↕", style="bold" if focused else "")
        return Panel(
            text,
            title=title,
            title_align="left",
            border_style=field_border(focused),
            padding=(0, 1),
        )
