"""
Built-in default theme and theme merging.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, replace
from typing import Any

from checkbox_search.tui.ansi import FG, style
from checkbox_search.tui.theme.models import (
    HELP_MODES,
    CheckboxSearchTheme,
    IconSet,
    StaticIcon,
    StyleSet,
    as_icon,
)


def _cyan(text: str) -> str:
    return style(text, fg=FG.CYAN)


def _dim(text: str) -> str:
    return style(text, dim=True)


DEFAULT_THEME = CheckboxSearchTheme(
    prefix={
        "idle": style("?", fg=FG.BLUE, bold=True),
        "loading": style("⠋", fg=FG.YELLOW),
        "done": style("✔", fg=FG.GREEN),
    },
    icon=IconSet(
        checked=StaticIcon(style("◉", fg=FG.GREEN)),
        unchecked=StaticIcon("◯"),
        cursor=StaticIcon("❯"),
        nocursor=StaticIcon(" "),
    ),
    style=StyleSet(
        message=lambda text: style(text, bold=True),
        error=lambda text: style(f"> {text}", fg=FG.YELLOW),
        help=_dim,
        highlight=_cyan,
        search_term=_cyan,
        description=_cyan,
        disabled=_dim,
        checked=lambda text: style(text, fg=FG.GREEN),
        separator=_dim,
    ),
    help_mode="always",
)


def _merge_styles(base: StyleSet, overrides: Mapping[str, Any]) -> StyleSet:
    # Imported lazily: the loader depends on this module for the defaults.
    from checkbox_search.tui.theme.loader import style_from_spec

    known = {f.name for f in fields(StyleSet)}
    changes: dict[str, Any] = {}
    for name, value in overrides.items():
        if name not in known:
            raise ValueError(f"Unknown theme style: {name!r}")
        changes[name] = value if callable(value) else style_from_spec(value)
    return replace(base, **changes)


def make_theme(
    overrides: CheckboxSearchTheme | Mapping[str, Any] | None = None,
    base: CheckboxSearchTheme = DEFAULT_THEME,
) -> CheckboxSearchTheme:
    """
    Merge partial *overrides* over *base*.

    *overrides* mirrors the theme structure::

        {
            "prefix": "»",                       # or {"idle": "?", "done": "✔"}
            "icon": {"checked": "✅", "cursor": lambda name: "👉"},
            "style": {"highlight": lambda text: f"[{text}]"},
            "help_mode": "auto",
        }

    Unspecified fields keep the values from *base*.
    """
    if overrides is None:
        return base
    if isinstance(overrides, CheckboxSearchTheme):
        return overrides

    theme = base

    prefix = overrides.get("prefix")
    if isinstance(prefix, str):
        theme = replace(theme, prefix={status: prefix for status in ("idle", "loading", "done")})
    elif isinstance(prefix, Mapping):
        theme = replace(theme, prefix={**theme.prefix, **prefix})

    icons = overrides.get("icon")
    if icons:
        known = {f.name for f in fields(IconSet)}
        unknown = set(icons) - known
        if unknown:
            raise ValueError(f"Unknown theme icon: {sorted(unknown)[0]!r}")
        theme = replace(
            theme,
            icon=replace(theme.icon, **{name: as_icon(v) for name, v in icons.items()}),
        )

    styles = overrides.get("style")
    if styles:
        theme = replace(theme, style=_merge_styles(theme.style, styles))

    help_mode = overrides.get("help_mode")
    if help_mode is not None:
        if help_mode not in HELP_MODES:
            raise ValueError(f"Invalid help_mode: {help_mode!r}")
        theme = replace(theme, help_mode=help_mode)

    return theme
