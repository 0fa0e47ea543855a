"""
Prompt rendering.

Pure functions from a :class:`~checkbox_search.state.PromptState` to the
multi-line text the host writes to the terminal.
"""

from __future__ import annotations

from checkbox_search.choices import Item, Separator
from checkbox_search.state import PromptState, Status
from checkbox_search.tui.ansi import hide_cursor, show_cursor
from checkbox_search.tui.theme.models import CheckboxSearchTheme

DEFAULT_HELP_TIPS = ("Tab to select", "Enter to submit")
PAGINATION_HINT = "(Use arrow keys to reveal more choices)"
LOADING_BODY = "Loading choices..."
EMPTY_BODY = "No choices available"


def paginate(total: int, active: int, page_size: int, offset: int = 0) -> int:
    """
    Scroll offset that keeps *active* inside a window of *page_size* rows.

    The previous *offset* is kept whenever the active row is still visible,
    so the list only scrolls when the cursor reaches an edge.
    """
    if total <= page_size:
        return 0
    if active < offset:
        offset = active
    elif active >= offset + page_size:
        offset = active - page_size + 1
    return max(0, min(offset, total - page_size))


def render_item(item: Item, *, active: bool, theme: CheckboxSearchTheme) -> str:
    """Render one row: cursor, checkbox, name and an optional disabled reason."""
    if Separator.is_separator(item):
        return theme.style.separator(item.separator)

    name = item.name
    checkbox = (theme.icon.checked if item.checked else theme.icon.unchecked).resolve(name)
    cursor = (theme.icon.cursor if active else theme.icon.nocursor).resolve(name)

    if active:
        text = theme.style.highlight(name)
    elif item.disabled:
        text = theme.style.disabled(name)
    elif item.checked:
        text = theme.style.checked(name)
    else:
        text = name

    parts = [cursor, checkbox, text]
    if item.disabled:
        reason = item.disabled if isinstance(item.disabled, str) else "disabled"
        parts.append(theme.style.disabled(f"({reason})"))
    return " ".join(parts)


def _help_line(instructions: str | bool, theme: CheckboxSearchTheme) -> str | None:
    if instructions is False:
        return None
    if isinstance(instructions, str):
        return theme.style.help(f"({instructions})")
    return theme.style.help(f"({', '.join(DEFAULT_HELP_TIPS)})")


def render_done(state: PromptState, *, message: str, theme: CheckboxSearchTheme) -> str:
    """Collapsed frame shown once the selection has been submitted."""
    answer = ", ".join(choice.short for choice in state.selected_choices())
    line = f"{theme.prefix_for(Status.DONE.value)} {theme.style.message(message)}"
    if answer:
        line = f"{line} {theme.style.highlight(answer)}"
    return f"{line}{show_cursor()}"


def render_prompt(
    state: PromptState,
    *,
    message: str,
    theme: CheckboxSearchTheme,
    page_size: int,
    instructions: str | bool = True,
    show_help: bool = True,
    scroll_offset: int = 0,
) -> str:
    """
    Render the full prompt frame.

    Layout, top to bottom: prefix and message, help tip, search line, at
    most one error line, the paginated rows (or a loading / empty notice),
    the active choice's description.  The frame ends with a hide-cursor
    sequence.
    """
    if state.status is Status.DONE:
        return render_done(state, message=message, theme=theme)

    lines = [f"{theme.prefix_for(state.status.value)} {theme.style.message(message)}"]

    if show_help and theme.help_mode != "never":
        help_line = _help_line(instructions, theme)
        if help_line is not None:
            lines.append(help_line)

    search_label = "Loading..." if state.status is Status.LOADING else "Search:"
    term = theme.style.search_term(state.search_term) if state.search_term else ""
    lines.append(f"{search_label} {term}")

    if state.error:
        lines.append(theme.style.error(state.error))

    view = state.view
    if state.status is Status.LOADING:
        lines.append(LOADING_BODY)
    elif not view:
        lines.append(EMPTY_BODY)
    else:
        active = state.active_index
        window = view[scroll_offset:scroll_offset + page_size]
        for offset, item in enumerate(window):
            lines.append(render_item(item, active=scroll_offset + offset == active, theme=theme))
        if len(view) > page_size:
            lines.append(theme.style.help(PAGINATION_HINT))

    item = state.active_item
    if item is not None and not Separator.is_separator(item) and item.description:
        lines.append(theme.style.description(item.description))

    return "\n".join(lines) + hide_cursor()
