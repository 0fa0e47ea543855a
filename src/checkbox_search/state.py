"""
Prompt state and its transition function.

:class:`PromptState` is an immutable snapshot.  :func:`reduce` applies one
action and then runs a single post-pass that re-derives the active index and
pins the active value to it, so every state a caller can observe is
consistent.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cached_property
from typing import Any

from checkbox_search.active import NO_ACTIVE, navigate, sync_active_value
from checkbox_search.choices import (
    Item,
    NormalizedChoice,
    Separator,
    is_checked,
    is_selectable,
    same_value,
    toggle,
)
from checkbox_search.filtering import FilterFn, filter_items


class Status(str, Enum):
    """Lifecycle of a prompt."""

    IDLE = "idle"
    LOADING = "loading"
    DONE = "done"


@dataclass(frozen=True)
class PromptState:
    """
    Snapshot of a prompt.

    Attributes
    ----------
    items:
        The master list.  It owns every choice object and their checked flags.
    search_term:
        Current search text.
    active_value:
        Value of the focused choice, or :data:`NO_ACTIVE`.
    status:
        ``idle``, ``loading`` or ``done``.
    search_error:
        Message of the last failed source request.
    validation_error:
        Message of the last refused submission.
    retained_checked:
        Checked values that are not present in the current master list.
    source_driven:
        Whether the master list comes from an async source.
    predicate:
        Custom filter used in static mode.
    """

    items: tuple[Item, ...] = ()
    search_term: str = ""
    active_value: Any = NO_ACTIVE
    status: Status = Status.IDLE
    search_error: str | None = None
    validation_error: str | None = None
    retained_checked: tuple[Any, ...] = ()
    source_driven: bool = False
    predicate: FilterFn | None = field(default=None, compare=False)

    @cached_property
    def view(self) -> list[Item]:
        """The filtered display list, derived from the master list."""
        return filter_items(
            self.items,
            self.search_term,
            source_driven=self.source_driven,
            predicate=self.predicate,
        )

    @cached_property
    def active_index(self) -> int:
        index, _ = sync_active_value(self.view, self.active_value)
        return index

    @property
    def active_item(self) -> Item | None:
        view = self.view
        if 0 <= self.active_index < len(view):
            return view[self.active_index]
        return None

    @property
    def error(self) -> str | None:
        """The single error line to show; validation errors take precedence."""
        if self.validation_error:
            return self.validation_error
        if self.search_error:
            return f"Error: {self.search_error}"
        return None

    def selected_choices(self) -> list[NormalizedChoice]:
        """Checked choices in master-list order, regardless of the filter."""
        return [item for item in self.items if is_checked(item)]

    def selected_values(self) -> list[Any]:
        return [choice.value for choice in self.selected_choices()]


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SetSearchTerm:
    term: str


@dataclass(frozen=True)
class Navigate:
    direction: int
    loop: bool = True


@dataclass(frozen=True)
class ToggleActive:
    pass


@dataclass(frozen=True)
class SetValidationError:
    message: str | None


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    items: tuple[Item, ...]


@dataclass(frozen=True)
class LoadFailed:
    message: str


@dataclass(frozen=True)
class MarkDone:
    pass


Action = (
    SetSearchTerm
    | Navigate
    | ToggleActive
    | SetValidationError
    | LoadStarted
    | LoadSucceeded
    | LoadFailed
    | MarkDone
)


# ---------------------------------------------------------------------------
# Transition
# ---------------------------------------------------------------------------

def _contains(values: tuple[Any, ...] | list[Any], value: Any) -> bool:
    return any(same_value(value, other) for other in values)


def _toggle_active(state: PromptState) -> PromptState:
    item = state.active_item
    if item is None or not is_selectable(item):
        return state

    value = item.value
    items = tuple(
        toggle(entry)
        if not Separator.is_separator(entry) and same_value(entry.value, value)
        else entry
        for entry in state.items
    )
    return replace(state, items=items, active_value=value)


def _replace_items(state: PromptState, new_items: tuple[Item, ...]) -> PromptState:
    """Swap in a freshly loaded master list, carrying checked values over."""
    carried = [item.value for item in state.items if is_checked(item)]
    carried.extend(v for v in state.retained_checked if not _contains(carried, v))

    items: list[Item] = []
    for item in new_items:
        if is_selectable(item) and not item.checked and _contains(carried, item.value):
            item = replace(item, checked=True)
        items.append(item)

    present = [item.value for item in items if not Separator.is_separator(item)]
    retained = tuple(v for v in carried if not _contains(present, v))

    return replace(
        state,
        items=tuple(items),
        retained_checked=retained,
        status=Status.IDLE,
    )


def _apply(state: PromptState, action: Action) -> PromptState:
    if isinstance(action, SetSearchTerm):
        return replace(state, search_term=action.term)

    if isinstance(action, Navigate):
        value = navigate(state.view, state.active_index, action.direction, action.loop)
        if value is NO_ACTIVE:
            return state
        return replace(state, active_value=value)

    if isinstance(action, ToggleActive):
        return _toggle_active(state)

    if isinstance(action, SetValidationError):
        return replace(state, validation_error=action.message)

    if isinstance(action, LoadStarted):
        return replace(state, status=Status.LOADING, search_error=None)

    if isinstance(action, LoadSucceeded):
        return _replace_items(state, action.items)

    if isinstance(action, LoadFailed):
        return replace(state, search_error=action.message, status=Status.IDLE)

    if isinstance(action, MarkDone):
        return replace(state, status=Status.DONE, validation_error=None)

    raise TypeError(f"Unknown action: {action!r}")


def reduce(state: PromptState, action: Action) -> PromptState:
    """
    Apply *action* to *state* and return the resulting state.

    The input state is never modified.  After the action, the active value
    is re-synchronised from the derived active index.
    """
    new_state = _apply(state, action)
    if new_state is state:
        return state

    _, value = sync_active_value(new_state.view, new_state.active_value)
    if value is not new_state.active_value:
        new_state = replace(new_state, active_value=value)
    return new_state


def initial_state(
    items: list[Item] | tuple[Item, ...] = (),
    *,
    source_driven: bool = False,
    predicate: FilterFn | None = None,
    retained_checked: tuple[Any, ...] = (),
) -> PromptState:
    """Build the first state of a prompt with its active value synchronised."""
    state = PromptState(
        items=tuple(items),
        source_driven=source_driven,
        predicate=predicate,
        retained_checked=retained_checked,
    )
    _, value = sync_active_value(state.view, state.active_value)
    if value is not state.active_value:
        state = replace(state, active_value=value)
    return state
