"""Screen geometry and the per-mode layout policy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from jobtracker.ui.core.component import Component


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells."""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, column: int, row: int) -> bool:
        return self.x <= column < self.right and self.y <= row < self.bottom

    def inner(self, horizontal: int = 0, vertical: int = 0) -> "Rect":
        """Shrink by a margin on each side, never below zero size."""
        width = max(self.width - 2 * horizontal, 0)
        height = max(self.height - 2 * vertical, 0)
        return Rect(self.x + horizontal, self.y + vertical, width, height)

    def intersection(self, other: "Rect") -> "Rect":
        x = max(self.x, other.x)
        y = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect(x, y, max(right - x, 0), max(bottom - y, 0))

    def split_rows(self, heights: Iterable[int]) -> list["Rect"]:
        """Stack fixed-height rows from the top; rows that do not fit are dropped."""
        rows = []
        y = self.y
        for height in heights:
            if y + height > self.bottom:
                break
            rows.append(Rect(self.x, y, self.width, height))
            y += height
        return rows

    def split_columns(self, widths: Sequence[int]) -> list["Rect"]:
        """Place fixed-width columns left to right, clipped to this rect."""
        columns = []
        x = self.x
        for width in widths:
            width = max(min(width, self.right - x), 0)
            columns.append(Rect(x, self.y, width, self.height))
            x += width
        return columns

    def take_top(self, height: int) -> tuple["Rect", "Rect"]:
        height = min(max(height, 0), self.height)
        return (
            Rect(self.x, self.y, self.width, height),
            Rect(self.x, self.y + height, self.width, self.height - height),
        )

    def take_bottom(self, height: int) -> tuple["Rect", "Rect"]:
        height = min(max(height, 0), self.height)
        return (
            Rect(self.x, self.bottom - height, self.width, height),
            Rect(self.x, self.y, self.width, self.height - height),
        )


class Dock(str, Enum):
    """Where a component sits inside its mode's screen."""
    TOP = "top"
    BOTTOM = "bottom"
    FILL = "fill"


def assign_regions(area: Rect, components: Sequence["Component"]) -> list[Rect]:
    """Give each component its draw region, in the order given.

    Top-docked components stack downward from the top edge and
    bottom-docked ones upward from the bottom edge, each taking
    ``dock_size`` rows. Fill components all receive the remaining body.
    """
    regions: list[Rect] = [Rect()] * len(components)
    body = area
    for index, component in enumerate(components):
        if component.dock == Dock.TOP:
            regions[index], body = body.take_top(component.dock_size)
        elif component.dock == Dock.BOTTOM:
            regions[index], body = body.take_bottom(component.dock_size)
    for index, component in enumerate(components):
        if component.dock == Dock.FILL:
            regions[index] = body
    return regions
