"""Key presses, key sequences and the key sequence matcher.

Key notation follows the binding registry conventions: modifiers joined
with ``+`` and sorted (``ctrl+shift+tab``), chords separated by spaces
(``ctrl+x ctrl+c``). The space bar itself is written ``space``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from jobtracker.errors import ConfigError
from jobtracker.ui.core.action import Action

logger = logging.getLogger(__name__)

MODIFIERS = frozenset({"alt", "cmd", "ctrl", "shift"})

_MODIFIER_ALIASES = {
    "control": "ctrl",
    "command": "cmd",
    "meta": "cmd",
    "option": "alt",
}

_KEY_ALIASES = {
    "esc": "escape",
    "return": "enter",
    "del": "delete",
    "backtab": "tab",
}


@dataclass(frozen=True)
class KeyPress:
    """A single key press.

    ``character`` holds the text the key produces (for text entry) and is
    ignored by equality and hashing, so a bound ``KeyPress.parse("a")``
    matches a typed ``a`` regardless of how the driver filled it in.
    """
    key: str
    modifiers: frozenset[str] = frozenset()
    character: Optional[str] = field(default=None, compare=False, hash=False)

    @classmethod
    def parse(cls, text: str, character: Optional[str] = None) -> "KeyPress":
        """Parse ``"ctrl+q"``, ``"shift+tab"``, ``"a"``, ``"+"`` or ``"ctrl++"``."""
        text = text.strip()
        if not text:
            raise ConfigError("Empty key")

        if text == "+":
            parts = ["+"]
        elif text.endswith("++"):
            parts = text[:-2].split("+") + ["+"]
        else:
            parts = text.split("+")

        *raw_modifiers, raw_key = parts
        modifiers = set()
        for modifier in raw_modifiers:
            name = modifier.strip().lower()
            name = _MODIFIER_ALIASES.get(name, name)
            if name not in MODIFIERS:
                raise ConfigError(f"Unknown modifier '{modifier}' in key '{text}'")
            modifiers.add(name)

        key = raw_key.strip()
        if not key:
            raise ConfigError(f"Missing key in '{text}'")
        if len(key) > 1:
            key = key.lower()
            if key == "backtab":
                modifiers.add("shift")
            key = _KEY_ALIASES.get(key, key)
        elif key.isalpha() and "shift" in modifiers:
            # Terminals report shift+letter as the capital letter.
            key = key.upper()
            modifiers.discard("shift")
        return cls(key=key, modifiers=frozenset(modifiers), character=character)

    @property
    def is_printable(self) -> bool:
        """True when the press types text (no ctrl/alt/cmd held)."""
        if self.modifiers & {"ctrl", "alt", "cmd"}:
            return False
        return bool(self.character) and self.character.isprintable()

    def __str__(self) -> str:
        return "+".join(sorted(self.modifiers) + [self.key])


KeySequence = tuple[KeyPress, ...]
KeyBindings = Mapping[KeySequence, Action]


def parse_key_sequence(text: str) -> KeySequence:
    """Parse a space separated chord such as ``"ctrl+x ctrl+c"``.

    Raises:
        ConfigError: If the sequence is empty or a key is malformed.
    """
    parts = text.split()
    if not parts:
        raise ConfigError("Empty key sequence")
    return tuple(KeyPress.parse(part) for part in parts)


def format_key_sequence(sequence: KeySequence) -> str:
    return " ".join(str(key) for key in sequence)


class KeySequenceMatcher:
    """Resolves key presses to bound actions.

    Two states: idle (empty buffer) and accumulating. A single-key binding
    always wins and leaves the buffer alone. Any other press is appended
    and the whole buffer is looked up as a chord. Nothing clears the
    buffer except :meth:`reset`, which the app loop calls on every Tick.
    """

    def __init__(self, bindings: KeyBindings):
        self._bindings: dict[KeySequence, Action] = dict(bindings)
        self._buffer: list[KeyPress] = []

    @property
    def buffer(self) -> KeySequence:
        return tuple(self._buffer)

    @property
    def accumulating(self) -> bool:
        return bool(self._buffer)

    @property
    def bindings(self) -> Mapping[KeySequence, Action]:
        return self._bindings

    def feed(self, key: KeyPress) -> Optional[Action]:
        """Process one press and return the bound action, if any."""
        action = self._bindings.get((key,))
        if action is not None:
            logger.info("Key %s -> %s", key, action)
            return action

        self._buffer.append(key)
        action = self._bindings.get(tuple(self._buffer))
        if action is not None:
            logger.info("Keys %s -> %s", format_key_sequence(self.buffer), action)
        return action

    def reset(self) -> None:
        self._buffer.clear()
