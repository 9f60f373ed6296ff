"""Shared colours for focus states."""

from __future__ import annotations

DIM = "grey50"
ACTIVE = "white"
FOCUSED = "blue"
HIGHLIGHT_BG = "grey30"


def border_style(focused: bool, active: bool = False) -> str:
    """Border colour: dim when the owner is unfocused, blue for the active part."""
    if not focused:
        return DIM
    return FOCUSED if active else ACTIVE


def field_border(focused: bool) -> str:
    return FOCUSED if focused else ACTIVE


def highlight(focused: bool, active: bool) -> str:
    return HIGHLIGHT_BG if focused and active else ""
