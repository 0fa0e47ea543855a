"""
Filter engine.

Derives the visible, ordered subset of the master list for a search term.
Items are always kept by reference so that their checked and disabled state
stays live in the filtered view.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Sequence

from checkbox_search.choices import Item, NormalizedChoice, Separator, value_key

FilterFn = Callable[[Sequence[NormalizedChoice], str], Sequence[NormalizedChoice]]


def _fold(text: str) -> str:
    """Lower-case *text* and drop combining accents (``"Café"`` -> ``"cafe"``)."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def default_filter(
    items: Sequence[NormalizedChoice],
    term: str,
) -> Sequence[NormalizedChoice]:
    """
    Case-insensitive, accent-insensitive substring match.

    A choice matches when the term occurs in its name, its description or
    its stringified value.  A blank term matches everything.
    """
    if not term.strip():
        return items

    needle = _fold(term)
    return [
        item for item in items
        if needle in _fold(item.name)
        or needle in _fold(item.description or "")
        or needle in _fold(str(item.value))
    ]


def filter_items(
    items: Sequence[Item],
    term: str,
    *,
    source_driven: bool = False,
    predicate: FilterFn | None = None,
) -> list[Item]:
    """
    Build the display list for *term*.

    Parameters
    ----------
    items:
        The master list.
    term:
        Current search term.
    source_driven:
        When ``True`` the source already filtered, so *items* is returned
        unchanged.
    predicate:
        Optional replacement for :func:`default_filter`.  Only its result
        *values* are used; the master-list objects are what end up in the
        display list.
    """
    if source_driven or not term.strip():
        return list(items)

    choices = [item for item in items if not Separator.is_separator(item)]
    matched = (predicate or default_filter)(choices, term)
    wanted = {value_key(choice.value) for choice in matched}

    return [
        item for item in items
        if Separator.is_separator(item) or value_key(item.value) in wanted
    ]
