"""
Checkbox Search - a searchable multi-select terminal prompt engine.

The engine turns one decoded key at a time into prompt state and renders
that state as text; reading the terminal and writing frames is left to the
host.  Choices come from a static list filtered locally, or from an async
source function re-queried on every search change.

Example:
    from checkbox_search import PromptConfig, run_prompt

    config = PromptConfig(
        message="Pick fruit",
        choices=["Apple", "Banana", "Cherry"],
        required=True,
    )

    # events yields (Key, LineBuffer) pairs decoded by the host
    values = await run_prompt(config, events, render=write_frame)
"""

from checkbox_search.active import NO_ACTIVE
from checkbox_search.choices import (
    Choice,
    NormalizedChoice,
    Separator,
    apply_defaults,
    is_checked,
    is_selectable,
    normalize_choices,
    same_value,
)
from checkbox_search.config import PromptConfig, PromptConfigError
from checkbox_search.filtering import default_filter, filter_items
from checkbox_search.logging import disable, enable, get_logger, set_level, setup_logging
from checkbox_search.page_size import (
    PageSizeConfig,
    PageSizeConfigError,
    calculate_dynamic_page_size,
    resolve_page_size,
)
from checkbox_search.prompt import CheckboxSearch, LineBuffer, PromptAbortedError, run_prompt
from checkbox_search.render import render_prompt
from checkbox_search.source import CancellationToken, SourceCancelledError, SourceLoader
from checkbox_search.state import PromptState, Status, initial_state, reduce
from checkbox_search.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from checkbox_search.tui.keys import Key
from checkbox_search.tui.theme import CheckboxSearchTheme, make_theme

__version__ = "0.1.0"

__all__ = [
    # Choices
    "Choice",
    "NormalizedChoice",
    "Separator",
    "apply_defaults",
    "is_checked",
    "is_selectable",
    "normalize_choices",
    "same_value",
    # Filtering and focus
    "NO_ACTIVE",
    "default_filter",
    "filter_items",
    # Page size
    "PageSizeConfig",
    "PageSizeConfigError",
    "calculate_dynamic_page_size",
    "resolve_page_size",
    # Async source
    "CancellationToken",
    "SourceCancelledError",
    "SourceLoader",
    # State
    "PromptState",
    "Status",
    "initial_state",
    "reduce",
    # Prompt
    "CheckboxSearch",
    "LineBuffer",
    "PromptAbortedError",
    "run_prompt",
    "render_prompt",
    # Config
    "PromptConfig",
    "PromptConfigError",
    # TUI
    "DEFAULT_KEYBINDINGS",
    "Key",
    "KeybindingsManager",
    "CheckboxSearchTheme",
    "make_theme",
    # Logging
    "disable",
    "enable",
    "get_logger",
    "set_level",
    "setup_logging",
]
