"""
The checkbox-search prompt.

:class:`CheckboxSearch` interprets one decoded key per turn against the
prompt state: typing edits the search term, arrows move focus, Tab toggles
the focused choice, Escape clears the search and Enter validates and
submits.  :func:`run_prompt` adapts it to an async stream of key events.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Sequence
from typing import Any

from checkbox_search.choices import NormalizedChoice, apply_defaults, normalize_choices
from checkbox_search.config import PromptConfig, ValidateResult
from checkbox_search.logging import get_logger
from checkbox_search.page_size import calculate_dynamic_page_size, resolve_page_size
from checkbox_search.render import paginate, render_prompt
from checkbox_search.source import SourceLoader
from checkbox_search.state import (
    Action,
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    MarkDone,
    Navigate,
    PromptState,
    SetSearchTerm,
    SetValidationError,
    Status,
    ToggleActive,
    initial_state,
    reduce,
)
from checkbox_search.tui.keybindings import KeybindingsManager
from checkbox_search.tui.keys import Key
from checkbox_search.tui.theme import CheckboxSearchTheme, make_theme

logger = get_logger("prompt")

REQUIRED_MESSAGE = "At least one choice must be selected"
INVALID_MESSAGE = "Invalid selection"
VALIDATION_FAILED_MESSAGE = "Validation failed"


class PromptAbortedError(Exception):
    """Raised when the key stream ends before the prompt is submitted."""

    pass


class LineBuffer:
    """
    The host line editor's current line.

    The host edits :attr:`text` as the user types and hands the buffer to
    the prompt with each key; the prompt reads it for search input and
    overwrites it when it must undo the editor's own handling of a key.
    """

    def __init__(self, text: str = "") -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"LineBuffer({self.text!r})"


class CheckboxSearch:
    """
    Multi-select prompt with incremental search.

    Parameters
    ----------
    config:
        Prompt options.
    line:
        Line buffer used by :meth:`handle_input` when the host does not
        pass one per key.
    keybindings:
        Action to key mapping, defaults to :data:`DEFAULT_KEYBINDINGS`.
    on_submit:
        Called with the selected values once the prompt completes.
    on_change:
        Render trigger, called with the prompt after every state change.
    """

    def __init__(
        self,
        config: PromptConfig,
        *,
        line: LineBuffer | None = None,
        keybindings: KeybindingsManager | None = None,
        on_submit: Callable[[list[Any]], None] | None = None,
        on_change: Callable[[CheckboxSearch], None] | None = None,
    ) -> None:
        self.config = config
        self.line = line if line is not None else LineBuffer()
        self._keybindings = keybindings or KeybindingsManager()
        self._on_submit = on_submit
        self._on_change = on_change

        theme = make_theme(config.theme)
        if config.prefix is not None:
            theme = make_theme({"prefix": config.prefix}, base=theme)
        self.theme: CheckboxSearchTheme = theme

        self._loader: SourceLoader | None = None
        if config.source is not None:
            self._state = initial_state(
                source_driven=True,
                retained_checked=tuple(config.default),
            )
            self._loader = SourceLoader(
                config.source,
                on_start=lambda: self.dispatch(LoadStarted()),
                on_success=lambda items: self.dispatch(LoadSucceeded(tuple(items))),
                on_error=lambda message: self.dispatch(LoadFailed(message)),
            )
        else:
            items = apply_defaults(normalize_choices(config.choices or ()), config.default)
            self._state = initial_state(items, predicate=config.filter)

        self._scroll_offset = 0
        self._interacted = False
        self._dirty = True
        self._submit_task: asyncio.Task[None] | None = None
        self._result: list[Any] | None = None
        self._result_future: asyncio.Future[list[Any]] | None = None

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> PromptState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state.status is Status.DONE

    @property
    def result(self) -> list[Any] | None:
        """Selected values once submitted, else ``None``."""
        return self._result

    @property
    def dirty(self) -> bool:
        """Whether the state changed since the last :meth:`render`."""
        return self._dirty

    @property
    def submitting(self) -> bool:
        """Whether an asynchronous validation is outstanding."""
        return self._submit_task is not None and not self._submit_task.done()

    @property
    def loader(self) -> SourceLoader | None:
        return self._loader

    @property
    def page_size(self) -> int:
        """Rows to show, resolved against the current terminal on every call."""
        if self.config.page_size is None:
            return calculate_dynamic_page_size()
        return resolve_page_size(self.config.page_size, self._state.items)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def dispatch(self, *actions: Action) -> PromptState:
        """Apply *actions* in order and notify the render trigger once."""
        state = self._state
        for action in actions:
            state = reduce(state, action)
        if state is not self._state:
            self._state = state
            self._dirty = True
            if self._on_change is not None:
                self._on_change(self)
        return state

    def start(self) -> None:
        """Issue the initial source request (source mode only)."""
        if self._loader is not None:
            self._loader.load(None)

    def close(self) -> None:
        """Cancel outstanding source requests and pending validation."""
        if self._loader is not None:
            self._loader.cancel()
        if self._submit_task is not None and not self._submit_task.done():
            self._submit_task.cancel()

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def handle_input(self, key: Key) -> bool:
        """Handle *key* against the prompt's own :attr:`line`."""
        return self.handle_key(key, self.line)

    def handle_key(self, key: Key, line: LineBuffer) -> bool:
        """
        Handle one decoded key.

        Returns ``True`` when the key was consumed.  Action keys arriving
        while a load or a validation is in progress are swallowed; text
        keys still update the search term.
        """
        state = self._state
        if state.status is Status.DONE:
            return False

        action = self._keybindings.find_action(key)
        if action is not None and (state.status is not Status.IDLE or self.submitting):
            return True

        if not self._interacted:
            self._interacted = True
            self._dirty = True

        previous_term = state.search_term
        actions: list[Action] = []
        if state.validation_error is not None:
            actions.append(SetValidationError(None))

        if action == "clear_search":
            line.text = ""
            actions.append(SetSearchTerm(""))
        elif action in ("up", "down"):
            line.text = previous_term
            actions.append(Navigate(-1 if action == "up" else 1, self.config.loop))
        elif action == "toggle":
            actions.append(ToggleActive())
            # The host editor may have completed or inserted on Tab.
            line.text = previous_term
        elif action == "submit":
            self.dispatch(*actions)
            self._submit()
            return True
        else:
            actions.append(SetSearchTerm(line.text))

        self.dispatch(*actions)

        if self._loader is not None and self._state.search_term != previous_term:
            self._loader.load(self._state.search_term)
        return True

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def _submit(self) -> None:
        selected = self._state.selected_choices()

        if self.config.required and not selected:
            self.dispatch(SetValidationError(REQUIRED_MESSAGE))
            return

        result = self.config.validate(selected)
        if inspect.isawaitable(result):
            self._submit_task = asyncio.ensure_future(self._await_validation(result, selected))
            return

        self._apply_validation(result, selected)

    async def _await_validation(
        self,
        pending: Awaitable[ValidateResult],
        selected: Sequence[NormalizedChoice],
    ) -> None:
        try:
            result = await pending
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Validation raised: %s", exc)
            self.dispatch(SetValidationError(VALIDATION_FAILED_MESSAGE))
            return
        self._apply_validation(result, selected)

    def _apply_validation(self, result: ValidateResult, selected: Sequence[NormalizedChoice]) -> None:
        if isinstance(result, str):
            self.dispatch(SetValidationError(result))
        elif result is False:
            self.dispatch(SetValidationError(INVALID_MESSAGE))
        else:
            self._finish(selected)

    def _finish(self, selected: Sequence[NormalizedChoice]) -> None:
        values = [choice.value for choice in selected]
        self._result = values
        logger.debug("Submitted %d values", len(values))

        if self._loader is not None:
            self._loader.cancel()
        self.dispatch(MarkDone())

        if self._on_submit is not None:
            self._on_submit(values)
        if self._result_future is not None and not self._result_future.done():
            self._result_future.set_result(values)

    def result_future(self) -> asyncio.Future[list[Any]]:
        """Future resolved with the selected values on submission."""
        if self._result_future is None:
            self._result_future = asyncio.get_running_loop().create_future()
            if self._result is not None:
                self._result_future.set_result(self._result)
        return self._result_future

    async def settle(self) -> None:
        """Wait for an outstanding validation to finish."""
        if self._submit_task is not None:
            await asyncio.gather(self._submit_task, return_exceptions=True)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Render the current frame and clear the dirty flag."""
        state = self._state
        page_size = self.page_size
        self._scroll_offset = paginate(
            len(state.view), state.active_index, page_size, self._scroll_offset
        )
        show_help = self.theme.help_mode == "always" or (
            self.theme.help_mode == "auto" and not self._interacted
        )
        text = render_prompt(
            state,
            message=self.config.message,
            theme=self.theme,
            page_size=page_size,
            instructions=self.config.instructions,
            show_help=show_help,
            scroll_offset=self._scroll_offset,
        )
        self._dirty = False
        return text


# ---------------------------------------------------------------------------
# Host adapter
# ---------------------------------------------------------------------------

async def _next_event(iterator: AsyncIterator[tuple[Key, LineBuffer]]) -> tuple[Key, LineBuffer] | None:
    try:
        return await iterator.__anext__()
    except StopAsyncIteration:
        return None


async def run_prompt(
    config: PromptConfig,
    events: AsyncIterable[tuple[Key, LineBuffer]],
    *,
    render: Callable[[str], None] | None = None,
    keybindings: KeybindingsManager | None = None,
) -> list[Any]:
    """
    Run a prompt against a stream of ``(key, line_buffer)`` events.

    *render* is called with a fresh frame initially and after every state
    change.  Returns the selected values; raises :class:`PromptAbortedError`
    if the stream ends first.  Cancelling the calling task cancels the
    prompt.
    """

    def on_change(prompt: CheckboxSearch) -> None:
        if render is not None:
            render(prompt.render())

    prompt = CheckboxSearch(config, keybindings=keybindings, on_change=on_change)
    done = prompt.result_future()
    iterator = events.__aiter__()
    next_event: asyncio.Task[tuple[Key, LineBuffer] | None] | None = None

    if render is not None:
        render(prompt.render())
    prompt.start()

    try:
        while not done.done():
            next_event = asyncio.ensure_future(_next_event(iterator))
            await asyncio.wait({next_event, done}, return_when=asyncio.FIRST_COMPLETED)
            if done.done():
                break

            event = next_event.result()
            next_event = None
            if event is None:
                await prompt.settle()
                break
            key, line = event
            prompt.handle_key(key, line)
    finally:
        if next_event is not None and not next_event.done():
            next_event.cancel()
        prompt.close()

    if not done.done():
        raise PromptAbortedError("Key stream ended before the prompt was submitted")
    return done.result()
