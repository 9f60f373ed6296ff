"""Cyclic focus cursor shared by forms and lists."""

from __future__ import annotations

from typing import Optional


class FocusIndex:
    """A bounded cyclic cursor over ``count`` focusable targets.

    The index is always in ``[0, count)`` or ``None`` (unfocused). Moving
    past either end wraps around. With no targets the cursor is unfocused
    and every move is a no-op.

    Example:
        fields = FocusIndex(12)
        fields.retreat()   # wraps to 11
        fields.advance()   # back to 0
    """

    def __init__(self, count: int = 0, index: Optional[int] = 0):
        if count < 0:
            raise ValueError("count must be >= 0")
        self._count = count
        self._home = index
        self._index: Optional[int] = None
        if index is not None and count:
            self.set(index)

    @property
    def count(self) -> int:
        return self._count

    def current(self) -> Optional[int]:
        """Active index, or None when unfocused or empty."""
        if not self._count:
            return None
        return self._index

    @property
    def focused(self) -> bool:
        return self.current() is not None

    def advance(self) -> Optional[int]:
        if not self._count:
            return None
        if self._index is None:
            self._index = 0
        else:
            self._index = (self._index + 1) % self._count
        return self._index

    def retreat(self) -> Optional[int]:
        if not self._count:
            return None
        if self._index is None:
            self._index = self._count - 1
        else:
            self._index = (self._index - 1) % self._count
        return self._index

    def set(self, index: int) -> Optional[int]:
        """Focus ``index``, wrapping it into range (negative counts from the end)."""
        if not self._count:
            return None
        self._index = index % self._count
        return self._index

    def clear(self) -> None:
        """Drop focus without changing the target count."""
        self._index = None

    def resize(self, count: int) -> None:
        """Change the number of targets.

        A real change of shape resets the cursor to where it started (0,
        or unfocused for cursors created with ``index=None``). A cursor the
        user unfocused stays unfocused. An unchanged count keeps the cursor.
        """
        if count < 0:
            raise ValueError("count must be >= 0")
        if count == self._count:
            return
        was_unfocused = self._count > 0 and self._index is None
        self._count = count
        self._index = None
        if self._home is not None and count and not was_unfocused:
            self.set(self._home)

    def __repr__(self) -> str:
        return f"FocusIndex(count={self._count}, index={self._index})"


def centered_window_start(selected: int, total: int, visible: int) -> int:
    """First row of a scroll window that keeps ``selected`` centered.

    The selection sits on row ``visible // 2`` of the window (for an even
    window, the lower of the two middle rows). The window never runs past
    the first or last item.
    """
    if visible <= 0 or total <= visible:
        return 0
    last_start = total - visible
    start = selected - visible // 2
    return min(max(start, 0), last_start)
