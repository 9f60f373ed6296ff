"""Application modes.

Exactly one mode is active at a time. Popup modes carry the popup's name,
so ``Mode.popup("notes")`` and ``Mode.popup("help")`` are distinct.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class ModeKind(str, Enum):
    """Screens the application can show."""
    HOME = "home"
    EDIT_JOB = "edit_job"
    POPUP = "popup"


class Mode(BaseModel):
    """The active screen of the whole application."""

    model_config = ConfigDict(frozen=True)

    kind: ModeKind = ModeKind.HOME
    name: Optional[str] = None

    @model_validator(mode="after")
    def _check_name(self) -> "Mode":
        if self.kind == ModeKind.POPUP and not self.name:
            raise ValueError("popup mode requires a name")
        if self.kind != ModeKind.POPUP and self.name is not None:
            raise ValueError(f"{self.kind.value} mode does not take a name")
        return self

    @classmethod
    def home(cls) -> "Mode":
        return cls(kind=ModeKind.HOME)

    @classmethod
    def edit_job(cls) -> "Mode":
        return cls(kind=ModeKind.EDIT_JOB)

    @classmethod
    def popup(cls, name: str) -> "Mode":
        return cls(kind=ModeKind.POPUP, name=name)

    @classmethod
    def parse(cls, text: str) -> "Mode":
        """Parse "home", "edit_job" or "popup:<name>".

        Raises:
            ValueError: If the text names no mode.
        """
        kind, _, name = text.strip().partition(":")
        return cls(kind=ModeKind(kind.lower()), name=name or None)

    @property
    def is_popup(self) -> bool:
        return self.kind == ModeKind.POPUP

    def __str__(self) -> str:
        if self.name:
            return f"{self.kind.value}:{self.name}"
        return self.kind.value


DEFAULT_MODE = Mode.home()
