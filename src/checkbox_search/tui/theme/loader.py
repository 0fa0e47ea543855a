"""Theme file loading."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from checkbox_search.tui.ansi import style
from checkbox_search.tui.theme.defaults import DEFAULT_THEME, make_theme
from checkbox_search.tui.theme.models import CheckboxSearchTheme, StyleFn
from checkbox_search.tui.theme.schema import validate_theme


def style_from_spec(spec: dict[str, Any]) -> StyleFn:
    """
    Build a style function from a declarative spec.

    ``{"fg": "#7aa2f7", "bold": True, "template": "> {text}"}`` formats the
    text through *template* first, then applies the colors and attributes.
    """
    if not isinstance(spec, dict):
        raise ValueError(f"Style spec must be a mapping, got: {type(spec).__name__}")

    template = spec.get("template", "{text}")
    attrs = {k: spec[k] for k in ("fg", "bg", "bold", "dim", "italic", "underline") if k in spec}

    def apply(text: str) -> str:
        return style(template.replace("{text}", text), **attrs)

    return apply


def read_theme_file(path: Path) -> dict[str, Any]:
    """Read raw theme data from a ``.json``, ``.yaml`` or ``.yml`` file."""
    with open(path, encoding="utf-8") as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    return data or {}


def load_theme(path: str | Path, base: CheckboxSearchTheme | None = None) -> CheckboxSearchTheme:
    """Load a theme file and merge it over *base* (the default theme)."""
    path = Path(path)
    data = read_theme_file(path)

    errors = validate_theme(data)
    if errors:
        raise ValueError(f"Invalid theme file {path}: " + "; ".join(errors))

    return make_theme(data, base=base or DEFAULT_THEME)
