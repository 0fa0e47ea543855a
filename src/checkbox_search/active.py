"""
Active-item tracking.

Focus is remembered as the *value* of the active choice rather than a list
position, so the same choice stays focused while the filtered view around
it changes.  Positions are derived from the value on demand.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from checkbox_search.choices import Item, Separator, is_selectable, same_value


class _NoActive:
    """Sentinel type for "no active value stored"."""

    _instance: _NoActive | None = None

    def __new__(cls) -> _NoActive:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_ACTIVE"

    def __bool__(self) -> bool:
        return False


NO_ACTIVE: Any = _NoActive()


def first_selectable_index(view: Sequence[Item]) -> int:
    """Position of the first selectable item, or ``0`` when there is none."""
    for index, item in enumerate(view):
        if is_selectable(item):
            return index
    return 0


def derive_active_index(view: Sequence[Item], active_value: Any) -> int:
    """
    Resolve the stored active value to a position in *view*.

    Falls back to the first selectable item when nothing is stored or the
    stored value has been filtered out.
    """
    if active_value is NO_ACTIVE:
        return first_selectable_index(view)

    for index, item in enumerate(view):
        if not Separator.is_separator(item) and same_value(item.value, active_value):
            return index

    return first_selectable_index(view)


def sync_active_value(view: Sequence[Item], active_value: Any) -> tuple[int, Any]:
    """
    Derive the active index and re-pin the stored value to it.

    Returns ``(index, value)``.  The value only changes when the item at the
    derived index is selectable and carries a different value.
    """
    index = derive_active_index(view, active_value)
    if 0 <= index < len(view):
        item = view[index]
        if is_selectable(item) and (
            active_value is NO_ACTIVE or not same_value(item.value, active_value)
        ):
            return index, item.value
    return index, active_value


def navigate(
    view: Sequence[Item],
    active_index: int,
    direction: int,
    loop: bool = True,
) -> Any:
    """
    Move focus by one selectable item.

    Parameters
    ----------
    view:
        The current display list.
    active_index:
        Position derived by :func:`derive_active_index`.
    direction:
        ``-1`` for up, ``+1`` for down.
    loop:
        Wrap around at either end instead of stopping.

    Returns
    -------
    Any
        The value of the newly focused item, or :data:`NO_ACTIVE` when the
        view holds nothing selectable.
    """
    selectable = [index for index, item in enumerate(view) if is_selectable(item)]
    if not selectable:
        return NO_ACTIVE

    current = next(
        (pos for pos, index in enumerate(selectable) if index >= active_index),
        -1,
    )
    target = current + direction

    if loop:
        if target < 0:
            target = len(selectable) - 1
        elif target >= len(selectable):
            target = 0
    else:
        target = max(0, min(target, len(selectable) - 1))

    return view[selectable[target]].value
