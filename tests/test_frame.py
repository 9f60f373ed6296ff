from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from jobtracker.ui.core.layout import Rect
from jobtracker.ui.terminal.frame import Frame


def screen(frame: Frame) -> list[str]:
    console = Console(width=frame.area.width, color_system=None, legacy_windows=False)
    with console.capture() as capture:
        console.print(frame)
    return capture.get().splitlines()[: frame.area.height]


def test_blank_frame_has_exact_size() -> None:
    lines = screen(Frame(6, 2))
    assert lines == ["      ", "      "]


def test_renderable_lands_in_its_region() -> None:
    frame = Frame(10, 3)
    frame.render(Text("hello"), Rect(2, 1, 5, 1))
    assert screen(frame) == ["          ", "  hello   ", "          "]


def test_later_layers_paint_over_earlier_ones() -> None:
    frame = Frame(10, 1)
    frame.render(Text("a" * 10), Rect(0, 0, 10, 1))
    frame.render(Text("bb"), Rect(3, 0, 2, 1))
    assert screen(frame) == ["aaabbaaaaa"]


def test_regions_are_clipped_to_the_frame() -> None:
    frame = Frame(10, 1)
    frame.render(Text("xyzzy"), Rect(8, 0, 5, 1))
    frame.render(Text("never"), Rect(20, 5, 5, 1))
    assert screen(frame) == ["        xy"]


def test_clear_blanks_a_region() -> None:
    frame = Frame(6, 1)
    frame.render(Text("abcdef"), frame.area)
    frame.clear(Rect(1, 0, 3, 1))
    assert screen(frame) == ["a   ef"]


def test_panel_fills_region_height() -> None:
    frame = Frame(12, 4)
    frame.render(Panel("hi"), frame.area)
    lines = screen(frame)
    assert len(lines) == 4
    assert lines[0].startswith("╭")
    assert lines[3].startswith("╰")
    assert "hi" in lines[1]
    assert len(frame.layers) == 1
