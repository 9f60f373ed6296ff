from __future__ import annotations

import pytest

from jobtracker.ui.core.component import Component
from jobtracker.ui.core.layout import Dock, Rect, assign_regions
from jobtracker.ui.core.mode import Mode
from jobtracker.ui.core.registry import ModeRegistry

from helpers import Recorder


class TopBar(Recorder):
    dock = Dock.TOP
    dock_size = 3


class BottomBar(Recorder):
    dock = Dock.BOTTOM
    dock_size = 1


def test_visible_set_follows_mode_in_registration_order() -> None:
    first = Recorder(Mode.home(), "first")
    editor = Recorder(Mode.edit_job(), "editor")
    second = Recorder(Mode.home(), "second")
    notes = Recorder(Mode.popup("notes"), "notes")

    registry = ModeRegistry()
    for component in (first, editor, second, notes):
        registry.register(component)

    assert registry.mode == Mode.home()
    assert registry.visible == (first, second)
    assert registry.transition(Mode.edit_job()) == (editor,)
    assert registry.transition(Mode.popup("notes")) == (notes,)
    assert registry.transition(Mode.popup("help")) == ()
    assert registry.transition(Mode.home()) == (first, second)
    assert [entry.mode for entry in registry.entries] == [
        Mode.home(),
        Mode.edit_job(),
        Mode.home(),
        Mode.popup("notes"),
    ]
    assert list(registry.components()) == [first, editor, second, notes]


def test_regions_for_docks_bars_and_fills_body() -> None:
    top = TopBar(Mode.home())
    body = Recorder(Mode.home())
    overlay = Recorder(Mode.home())
    bottom = BottomBar(Mode.home())
    registry = ModeRegistry()
    for component in (top, body, bottom, overlay):
        registry.register(component)

    regions = dict(registry.regions_for(Rect(0, 0, 80, 24)))
    assert regions[top] == Rect(0, 0, 80, 3)
    assert regions[bottom] == Rect(0, 23, 80, 1)
    assert regions[body] == Rect(0, 3, 80, 20)
    assert regions[overlay] == Rect(0, 3, 80, 20)


def test_docks_clamp_to_small_area() -> None:
    top = TopBar(Mode.home())
    bottom = BottomBar(Mode.home())
    body = Recorder(Mode.home())
    regions = assign_regions(Rect(0, 0, 10, 2), [top, bottom, body])
    assert regions[0] == Rect(0, 0, 10, 2)
    assert regions[1].height == 0
    assert regions[2].is_empty


def test_rect_geometry() -> None:
    rect = Rect(2, 1, 10, 5)
    assert rect.right == 12
    assert rect.bottom == 6
    assert rect.contains(2, 1)
    assert not rect.contains(12, 1)
    assert rect.inner(1, 1) == Rect(3, 2, 8, 3)
    assert rect.inner(10, 10) == Rect(12, 11, 0, 0)
    assert rect.intersection(Rect(0, 0, 5, 3)) == Rect(2, 1, 3, 2)
    assert rect.intersection(Rect(50, 50, 1, 1)).is_empty
    assert rect.split_rows([2, 2, 2]) == [Rect(2, 1, 10, 2), Rect(2, 3, 10, 2)]
    assert rect.split_columns([4, 10]) == [Rect(2, 1, 4, 5), Rect(6, 1, 6, 5)]
    assert rect.take_top(2) == (Rect(2, 1, 10, 2), Rect(2, 3, 10, 3))
    assert rect.take_bottom(9) == (Rect(2, 1, 10, 5), Rect(2, 1, 10, 0))


def test_component_without_owning_mode_cannot_be_built() -> None:
    class Modeless(Component):
        pass

    with pytest.raises(TypeError):
        Modeless()
    assert Recorder(Mode.home()).owning_mode() == Mode.home()
