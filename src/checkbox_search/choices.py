"""
Choice models and normalisation.

Raw choice input may be a plain string, a :class:`Choice`, a mapping with
the same keys (as loaded from YAML), or a :class:`Separator`.  Everything is
normalised into :class:`NormalizedChoice` / :class:`Separator` items before
the rest of the engine sees it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Union

# ---------------------------------------------------------------------------
# Separator
# ---------------------------------------------------------------------------

DEFAULT_SEPARATOR = "─" * 14


class Separator:
    """
    Non-selectable divider between groups of choices.

    Separators never match a search, can never be focused and are never
    part of a submitted result.
    """

    def __init__(self, separator: str | None = None) -> None:
        self.separator = DEFAULT_SEPARATOR if separator is None else separator

    @staticmethod
    def is_separator(item: object) -> bool:
        return isinstance(item, Separator)

    def __repr__(self) -> str:
        return f"Separator({self.separator!r})"


# ---------------------------------------------------------------------------
# Choice models
# ---------------------------------------------------------------------------

@dataclass
class Choice:
    """
    A raw choice as supplied by the caller.

    Attributes
    ----------
    value:
        Value emitted when the choice is submitted.
    name:
        Display text, defaults to ``str(value)``.
    description:
        Optional text shown below the list while the choice is active.
    short:
        Text shown in the completed prompt line, defaults to *name*.
    disabled:
        ``True`` or a reason string to make the choice unselectable.
    checked:
        Whether the choice starts out selected.
    """

    value: Any
    name: str | None = None
    description: str | None = None
    short: str | None = None
    disabled: bool | str = False
    checked: bool = False


@dataclass(eq=False)
class NormalizedChoice:
    """
    Canonical choice shape used by the engine.

    Equality is identity: two normalised choices are the same entry only if
    they are the same object.
    """

    value: Any
    name: str
    short: str
    disabled: bool | str = False
    checked: bool = False
    description: str | None = None


Item = Union[NormalizedChoice, Separator]
RawChoice = Union[str, Choice, Mapping[str, Any], NormalizedChoice, Separator]


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

# Values compared by type and equality; everything else is compared by identity.
_PRIMITIVES = (str, int, float, complex, bytes, bool, type(None), Enum)


def same_value(a: Any, b: Any) -> bool:
    """
    Value identity used for focus and selection lookups.

    Primitive values match when they have the same type and compare equal,
    so ``1`` and ``True`` or ``1`` and ``1.0`` stay distinct.  Any other
    value matches only itself.
    """
    if a is b:
        return True
    if isinstance(a, _PRIMITIVES) and type(a) is type(b):
        return a == b
    return False


def value_key(value: Any) -> tuple[Any, Any]:
    """Hashable key with the same matching rule as :func:`same_value`."""
    if isinstance(value, _PRIMITIVES):
        return (type(value), value)
    return (object, id(value))


def is_selectable(item: Item) -> bool:
    """``True`` for choices that are neither separators nor disabled."""
    return not Separator.is_separator(item) and not item.disabled


def is_checked(item: Item) -> bool:
    """``True`` for selectable choices whose checked flag is set."""
    return is_selectable(item) and bool(item.checked)


def toggle(item: NormalizedChoice) -> NormalizedChoice:
    """Return a copy of *item* with its checked flag flipped."""
    if not is_selectable(item):
        return item
    return replace(item, checked=not item.checked)


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def _normalize_one(choice: RawChoice) -> Item:
    if Separator.is_separator(choice):
        return choice

    if isinstance(choice, str):
        return NormalizedChoice(value=choice, name=choice, short=choice)

    if isinstance(choice, Mapping):
        if "separator" in choice and "value" not in choice:
            return Separator(choice["separator"])
        choice = Choice(
            value=choice.get("value"),
            name=choice.get("name"),
            description=choice.get("description"),
            short=choice.get("short"),
            disabled=choice.get("disabled", False),
            checked=choice.get("checked", False),
        )

    name = choice.name if choice.name is not None else str(choice.value)
    return NormalizedChoice(
        value=choice.value,
        name=name,
        short=choice.short if choice.short is not None else name,
        disabled=choice.disabled if choice.disabled is not None else False,
        checked=bool(choice.checked),
        description=choice.description or None,
    )


def normalize_choices(choices: Iterable[RawChoice]) -> list[Item]:
    """
    Normalise raw choices one-to-one, preserving order.

    >>> [c.name for c in normalize_choices(["a", Choice(value=1)])]
    ['a', '1']
    """
    return [_normalize_one(choice) for choice in choices]


def apply_defaults(items: Sequence[Item], defaults: Sequence[Any]) -> list[Item]:
    """Check every selectable item whose value is listed in *defaults*."""
    if not defaults:
        return list(items)
    result: list[Item] = []
    for item in items:
        if (
            is_selectable(item)
            and not item.checked
            and any(same_value(item.value, d) for d in defaults)
        ):
            result.append(replace(item, checked=True))
        else:
            result.append(item)
    return result
