"""Theme file validation."""
from __future__ import annotations

from typing import Any

from checkbox_search.tui.theme.models import HELP_MODES

ICON_KEYS = ("checked", "unchecked", "cursor", "nocursor")
STYLE_KEYS = (
    "message",
    "error",
    "help",
    "highlight",
    "search_term",
    "description",
    "disabled",
    "checked",
    "separator",
)
STYLE_SPEC_KEYS = ("fg", "bg", "bold", "dim", "italic", "underline", "template")
PREFIX_KEYS = ("idle", "loading", "done")


def _validate_color(owner: str, key: str, value: Any) -> list[str]:
    if not isinstance(value, str):
        return [f"'{key}' of style '{owner}' must be a string"]
    if value.startswith("#"):
        hex_part = value[1:]
        if len(hex_part) not in (3, 6) or not all(c in "0123456789abcdefABCDEF" for c in hex_part):
            return [f"Invalid hex color for style '{owner}': {value}"]
    return []


def validate_theme(data: dict[str, Any]) -> list[str]:
    """Validate theme file data.

    Returns a list of error messages (empty if valid).
    """
    if not isinstance(data, dict):
        return ["Theme must be a mapping"]

    errors: list[str] = []

    prefix = data.get("prefix")
    if prefix is not None and not isinstance(prefix, str):
        if not isinstance(prefix, dict):
            errors.append("'prefix' must be a string or a mapping")
        else:
            for key, value in prefix.items():
                if key not in PREFIX_KEYS:
                    errors.append(f"Unknown prefix status: '{key}'")
                elif not isinstance(value, str):
                    errors.append(f"Prefix for '{key}' must be a string")

    icons = data.get("icon", {})
    if not isinstance(icons, dict):
        errors.append("'icon' must be a mapping")
    else:
        for key, value in icons.items():
            if key not in ICON_KEYS:
                errors.append(f"Unknown icon: '{key}'")
            elif not isinstance(value, str):
                errors.append(f"Icon '{key}' must be a string, got: {type(value).__name__}")

    styles = data.get("style", {})
    if not isinstance(styles, dict):
        errors.append("'style' must be a mapping")
    else:
        for key, spec in styles.items():
            if key not in STYLE_KEYS:
                errors.append(f"Unknown style: '{key}'")
                continue
            if not isinstance(spec, dict):
                errors.append(f"Style '{key}' must be a mapping")
                continue
            for attr, value in spec.items():
                if attr not in STYLE_SPEC_KEYS:
                    errors.append(f"Unknown attribute '{attr}' in style '{key}'")
                elif attr in ("fg", "bg"):
                    errors.extend(_validate_color(key, attr, value))
                elif attr == "template":
                    if not isinstance(value, str) or "{text}" not in value:
                        errors.append(f"Template of style '{key}' must contain '{{text}}'")
                elif not isinstance(value, bool):
                    errors.append(f"'{attr}' of style '{key}' must be a boolean")

    help_mode = data.get("help_mode")
    if help_mode is not None and help_mode not in HELP_MODES:
        errors.append(f"Invalid help_mode: '{help_mode}'")

    return errors
