from __future__ import annotations

import pytest

from jobtracker.errors import ConfigError
from jobtracker.ui.core.action import Help, Quit, Suspend
from jobtracker.ui.core.keys import (
    KeyPress,
    KeySequenceMatcher,
    format_key_sequence,
    parse_key_sequence,
)

A = KeyPress.parse("a")
B = KeyPress.parse("b")
C = KeyPress.parse("c")


def test_parse_modifiers_are_normalised() -> None:
    press = KeyPress.parse("Control+Shift+Tab")
    assert press.key == "tab"
    assert press.modifiers == frozenset({"ctrl", "shift"})
    assert str(press) == "ctrl+shift+tab"
    assert KeyPress.parse("option+x").modifiers == frozenset({"alt"})
    assert KeyPress.parse("meta+x").modifiers == frozenset({"cmd"})


def test_parse_key_aliases() -> None:
    assert KeyPress.parse("esc") == KeyPress.parse("escape")
    assert KeyPress.parse("return").key == "enter"
    assert KeyPress.parse("backtab") == KeyPress.parse("shift+tab")


def test_parse_plus_key() -> None:
    assert KeyPress.parse("+").key == "+"
    press = KeyPress.parse("ctrl++")
    assert press.key == "+"
    assert press.modifiers == frozenset({"ctrl"})


def test_single_characters_keep_case() -> None:
    assert KeyPress.parse("A").key == "A"
    assert KeyPress.parse("A") != KeyPress.parse("a")


def test_shift_letter_is_the_capital_letter() -> None:
    press = KeyPress.parse("shift+a")
    assert press == KeyPress("A", character="A")
    assert press.modifiers == frozenset()
    assert KeyPress.parse("ctrl+shift+a") == KeyPress("A", frozenset({"ctrl"}))
    assert KeyPress.parse("shift+tab").modifiers == frozenset({"shift"})

    matcher = KeySequenceMatcher({parse_key_sequence("shift+a"): Help()})
    assert matcher.feed(KeyPress("A", character="A")) == Help()


@pytest.mark.parametrize("text", ["", "   ", "hyper+x", "ctrl+"])
def test_parse_rejects_malformed_keys(text: str) -> None:
    with pytest.raises(ConfigError):
        KeyPress.parse(text)


def test_character_is_ignored_by_equality() -> None:
    assert KeyPress("a", character="a") == KeyPress.parse("a")
    assert hash(KeyPress("a", character="a")) == hash(KeyPress.parse("a"))


def test_is_printable() -> None:
    assert KeyPress("a", character="a").is_printable
    assert KeyPress("space", character=" ").is_printable
    assert not KeyPress("a", frozenset({"ctrl"}), character="a").is_printable
    assert not KeyPress("tab", character="\t").is_printable
    assert not KeyPress.parse("enter").is_printable


def test_key_sequences() -> None:
    sequence = parse_key_sequence("ctrl+x   ctrl+c")
    assert sequence == (KeyPress.parse("ctrl+x"), KeyPress.parse("ctrl+c"))
    assert format_key_sequence(sequence) == "ctrl+x ctrl+c"
    with pytest.raises(ConfigError):
        parse_key_sequence("  ")


def test_single_key_binding_wins_over_prefix() -> None:
    matcher = KeySequenceMatcher({(A,): Quit(), (A, B): Help()})
    assert matcher.feed(A) == Quit()
    assert matcher.buffer == ()
    assert not matcher.accumulating


def test_unmatched_key_accumulates_and_single_key_still_fires() -> None:
    matcher = KeySequenceMatcher({(A,): Quit(), (A, B): Help()})
    assert matcher.feed(B) is None
    assert matcher.buffer == (B,)
    assert matcher.feed(A) == Quit()
    assert matcher.buffer == (B,)


def test_whole_buffer_match() -> None:
    matcher = KeySequenceMatcher({(B, C): Help()})
    assert matcher.feed(B) is None
    assert matcher.feed(C) == Help()
    # left in place until the next tick
    assert matcher.buffer == (B, C)


def test_matched_sequence_can_extend_to_a_longer_one() -> None:
    matcher = KeySequenceMatcher({(B, C): Help(), (B, C, A): Suspend()})
    matcher.feed(B)
    assert matcher.feed(C) == Help()
    assert matcher.feed(A) == Suspend()


def test_reset_forgets_partial_sequence() -> None:
    matcher = KeySequenceMatcher({(A, B): Help()})
    assert matcher.feed(A) is None
    matcher.reset()
    assert matcher.feed(B) is None
    assert matcher.buffer == (B,)


def test_unbound_keys_produce_nothing() -> None:
    matcher = KeySequenceMatcher({})
    assert matcher.feed(A) is None
    assert matcher.feed(B) is None
    assert matcher.buffer == (A, B)
