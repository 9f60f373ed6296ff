from __future__ import annotations

import pytest

from jobtracker.ui.core.focus import FocusIndex, centered_window_start


@pytest.mark.parametrize("count", [1, 2, 6, 12])
def test_advance_count_times_is_identity(count: int) -> None:
    focus = FocusIndex(count)
    focus.set(count // 2)
    start = focus.current()
    for _ in range(count):
        focus.advance()
    assert focus.current() == start


def test_retreat_after_advance_is_identity() -> None:
    focus = FocusIndex(5)
    for index in range(5):
        focus.set(index)
        focus.advance()
        focus.retreat()
        assert focus.current() == index


def test_wraps_at_both_ends() -> None:
    focus = FocusIndex(12)
    assert focus.retreat() == 11
    assert focus.advance() == 0


def test_set_wraps_into_range() -> None:
    focus = FocusIndex(12)
    assert focus.set(13) == 1
    assert focus.set(-1) == 11


def test_empty_cursor_is_unfocused_and_inert() -> None:
    focus = FocusIndex(0)
    assert focus.current() is None
    assert focus.advance() is None
    assert focus.retreat() is None
    assert focus.set(3) is None
    assert not focus.focused


def test_unfocused_cursor_enters_at_the_ends() -> None:
    focus = FocusIndex(6, index=None)
    assert focus.current() is None
    assert focus.advance() == 0
    focus.clear()
    assert focus.retreat() == 5


def test_resize_resets_only_when_count_changes() -> None:
    focus = FocusIndex(4)
    focus.set(3)
    focus.resize(4)
    assert focus.current() == 3
    focus.resize(7)
    assert focus.current() == 0
    focus.resize(0)
    assert focus.current() is None
    focus.resize(2)
    assert focus.current() == 0


def test_resize_keeps_unfocused_cursor_unfocused() -> None:
    focus = FocusIndex(6, index=None)
    focus.advance()
    focus.resize(3)
    assert focus.current() is None


def test_resize_after_clear_stays_unfocused() -> None:
    focus = FocusIndex(3)
    focus.clear()
    focus.resize(5)
    assert focus.current() is None
    assert focus.advance() == 0

    # an empty cursor that gains targets starts at its home index
    empty = FocusIndex(0)
    empty.resize(4)
    assert empty.current() == 0


def test_negative_count_rejected() -> None:
    with pytest.raises(ValueError):
        FocusIndex(-1)


@pytest.mark.parametrize(
    ("selected", "total", "visible", "expected"),
    [
        (3, 4, 4, 0),  # everything fits
        (3, 2, 5, 0),
        (5, 20, 1, 5),  # single row follows the selection
        (19, 20, 1, 19),
        (0, 20, 4, 0),  # clamped at the top
        (1, 20, 4, 0),
        (2, 20, 4, 0),
        (5, 20, 4, 3),  # even window: selection on the lower middle row
        (10, 20, 5, 8),  # odd window: selection in the middle
        (19, 20, 4, 16),  # clamped at the bottom
        (17, 20, 4, 15),
        (4, 10, 0, 0),
    ],
)
def test_centered_window_start(selected: int, total: int, visible: int, expected: int) -> None:
    assert centered_window_start(selected, total, visible) == expected
