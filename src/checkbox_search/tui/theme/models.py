"""
Theme data models.

Icons are a tagged variant: :class:`StaticIcon` renders fixed text, while
:class:`ComputedIcon` derives its text from the choice name.  Both are
resolved only when a row is rendered.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, Union

StyleFn = Callable[[str], str]
HelpMode = Literal["always", "never", "auto"]
HELP_MODES: tuple[str, ...] = ("always", "never", "auto")


@dataclass(frozen=True)
class StaticIcon:
    text: str

    def resolve(self, choice_name: str) -> str:
        return self.text


@dataclass(frozen=True)
class ComputedIcon:
    fn: Callable[[str], str]

    def resolve(self, choice_name: str) -> str:
        return self.fn(choice_name)


Icon = Union[StaticIcon, ComputedIcon]


def as_icon(value: Icon | str | Callable[[str], str]) -> Icon:
    """Coerce plain text or a callable into an icon variant."""
    if isinstance(value, (StaticIcon, ComputedIcon)):
        return value
    if isinstance(value, str):
        return StaticIcon(value)
    if callable(value):
        return ComputedIcon(value)
    raise TypeError(f"Icon must be a string or callable, got: {type(value).__name__}")


@dataclass(frozen=True)
class IconSet:
    checked: Icon
    unchecked: Icon
    cursor: Icon
    nocursor: Icon = StaticIcon(" ")


@dataclass(frozen=True)
class StyleSet:
    message: StyleFn
    error: StyleFn
    help: StyleFn
    highlight: StyleFn
    search_term: StyleFn
    description: StyleFn
    disabled: StyleFn
    checked: StyleFn
    separator: StyleFn


@dataclass(frozen=True)
class CheckboxSearchTheme:
    """
    Complete visual configuration of a prompt.

    Attributes
    ----------
    prefix:
        Prefix text per status (``idle``, ``loading``, ``done``).
    icon:
        Row icons.
    style:
        Text styling functions.
    help_mode:
        ``always`` shows the help tip, ``never`` hides it and ``auto``
        shows it until the first key press.
    """

    icon: IconSet
    style: StyleSet
    prefix: dict[str, str] = field(default_factory=dict)
    help_mode: HelpMode = "always"

    def prefix_for(self, status: str) -> str:
        return self.prefix.get(status, self.prefix.get("idle", "?"))
