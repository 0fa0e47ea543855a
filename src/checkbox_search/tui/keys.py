"""
Key model consumed by the prompt.

Decoding raw terminal bytes is the host's job; the host hands the prompt
one :class:`Key` per turn.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Key:
    """
    A single decoded key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (e.g. ``'enter'``, ``'up'``).
        For plain printable characters this equals *char*.
    char:
        The literal character, if printable.  Empty string otherwise.
    ctrl, alt, shift:
        Modifier flags.
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @classmethod
    def from_char(cls, ch: str) -> Key:
        """Key for a typed printable character."""
        if ch == " ":
            return KEY_SPACE
        return cls(name=ch, char=ch)


KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")

KEY_SPACE = Key(name="space", char=" ")
