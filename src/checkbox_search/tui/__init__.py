"""
Terminal building blocks for the prompt: key model, keybindings, ANSI
helpers and theming.
"""
from __future__ import annotations

from checkbox_search.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from checkbox_search.tui.keys import Key

__all__ = [
    "DEFAULT_KEYBINDINGS",
    "Key",
    "KeybindingsManager",
]
