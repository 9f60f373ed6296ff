"""Off-screen frame that components draw into.

Components place rich renderables into rectangular regions; the frame
itself is a rich renderable that composes those layers, in draw order,
into a screen of exactly ``width`` x ``height`` cells.
"""

from __future__ import annotations

from rich.console import Console, ConsoleOptions, RenderableType, RenderResult
from rich.segment import Segment
from rich.text import Text

from jobtracker.ui.core.layout import Rect


class Frame:
    """A screen being drawn during one render pass."""

    def __init__(self, width: int, height: int):
        self.area = Rect(0, 0, max(width, 0), max(height, 0))
        self._layers: list[tuple[Rect, RenderableType]] = []

    @property
    def layers(self) -> list[tuple[Rect, RenderableType]]:
        return list(self._layers)

    def render(self, renderable: RenderableType, region: Rect) -> None:
        """Paint ``renderable`` into ``region``, over anything drawn before."""
        self._layers.append((region, renderable))

    def clear(self, region: Rect) -> None:
        """Blank ``region``."""
        self._layers.append((region, Text("")))

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        width, height = self.area.width, self.area.height
        lines: list[list[Segment]] = [[Segment(" " * width)] for _ in range(height)]

        for region, renderable in self._layers:
            region = region.intersection(self.area)
            if region.is_empty:
                continue
            rendered = console.render_lines(
                renderable,
                options.update_dimensions(region.width, region.height),
                pad=True,
            )
            for offset, segments in enumerate(rendered[: region.height]):
                row = region.y + offset
                parts = list(Segment.divide(lines[row], [region.x, region.right, width]))
                left = parts[0] if parts else []
                right = parts[2] if len(parts) > 2 else []
                lines[row] = [*left, *segments, *right]

        new_line = Segment.line()
        for line in lines:
            yield from line
            yield new_line
