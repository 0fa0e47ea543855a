"""Theme system for the prompt."""
from __future__ import annotations

from checkbox_search.tui.theme.defaults import DEFAULT_THEME, make_theme
from checkbox_search.tui.theme.loader import load_theme, style_from_spec
from checkbox_search.tui.theme.models import (
    CheckboxSearchTheme,
    ComputedIcon,
    Icon,
    IconSet,
    StaticIcon,
    StyleSet,
    as_icon,
)
from checkbox_search.tui.theme.schema import validate_theme

__all__ = [
    "CheckboxSearchTheme",
    "ComputedIcon",
    "DEFAULT_THEME",
    "Icon",
    "IconSet",
    "StaticIcon",
    "StyleSet",
    "as_icon",
    "load_theme",
    "make_theme",
    "style_from_spec",
    "validate_theme",
]
