"""Single-line (or multi-line) text editor widget."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from jobtracker.ui.components.styles import DIM, field_border
from jobtracker.ui.core.keys import KeyPress


class TextField:
    """Editable text with a cursor.

    Not a component: forms own their fields and forward key presses.
    """

    def __init__(self, value: str = "", placeholder: str = "", multiline: bool = False):
        self.placeholder = placeholder
        self.multiline = multiline
        self._value = ""
        self._cursor = 0
        self.set_value(value)

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    def set_value(self, value: str) -> None:
        """Replace the text and put the cursor at the end."""
        self._value = value
        self._cursor = len(value)

    def insert(self, text: str) -> None:
        self._value = self._value[: self._cursor] + text + self._value[self._cursor :]
        self._cursor += len(text)

    def handle_key(self, key: KeyPress) -> bool:
        """Apply an editing key. Returns False if the key is not an edit."""
        name = key.key
        if name == "backspace":
            if self._cursor:
                self._value = self._value[: self._cursor - 1] + self._value[self._cursor :]
                self._cursor -= 1
        elif name == "delete":
            self._value = self._value[: self._cursor] + self._value[self._cursor + 1 :]
        elif name == "left":
            self._cursor = max(self._cursor - 1, 0)
        elif name == "right":
            self._cursor = min(self._cursor + 1, len(self._value))
        elif name == "home":
            self._cursor = 0
        elif name == "end":
            self._cursor = len(self._value)
        elif name == "enter" and self.multiline:
            self.insert("\n")
        elif key.is_printable:
            self.insert(key.character or "")
        else:
            return False
        return True

    def text(self, focused: bool) -> Text:
        if not self._value and not focused:
            return Text(self.placeholder, style=DIM)
        text = Text(self._value)
        if focused:
            if self._cursor < len(self._value) and self._value[self._cursor] != "\n":
                text.stylize("reverse", self._cursor, self._cursor + 1)
            else:
                text = Text(self._value[: self._cursor])
                text.append(" ", style="reverse")
                text.append(self._value[self._cursor :])
        return text

    def render(self, title: str, focused: bool) -> Panel:
        return Panel(
            self.text(focused),
            title=title,
            title_align="left",
            border_style=field_border(focused),
            padding=(0, 1),
        )
