"""
ANSI escape helpers used by the prompt renderer and theme.
"""

from __future__ import annotations

import re

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

_ANSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")


class FG:
    """Standard ANSI foreground colors."""

    BLACK = f"{CSI}30m"
    RED = f"{CSI}31m"
    GREEN = f"{CSI}32m"
    YELLOW = f"{CSI}33m"
    BLUE = f"{CSI}34m"
    MAGENTA = f"{CSI}35m"
    CYAN = f"{CSI}36m"
    WHITE = f"{CSI}37m"


_NAMED_FG: dict[str, str] = {
    name.lower(): value for name, value in vars(FG).items() if name.isupper()
}

_STYLE_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
}


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert ``'#rgb'`` or ``'#rrggbb'`` to an ``(r, g, b)`` tuple."""
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = h[0] * 2 + h[1] * 2 + h[2] * 2
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def color_sequence(color: str, *, background: bool = False) -> str:
    """
    Escape sequence for *color*.

    Accepts a ready-made sequence (``FG.RED``), a basic color name
    (``"cyan"``) or a hex string (``"#7aa2f7"``).
    """
    if color.startswith(ESC):
        return color
    named = _NAMED_FG.get(color.lower())
    if named is not None:
        if background:
            code = int(named[len(CSI):-1]) + 10
            return f"{CSI}{code}m"
        return named
    r, g, b = _hex_to_rgb(color)
    return f"{CSI}{48 if background else 38};2;{r};{g};{b}m"


def style(
    text: str,
    *,
    fg: str | None = None,
    bg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    italic: bool = False,
    underline: bool = False,
) -> str:
    """Wrap *text* in the requested attributes followed by ``RESET``."""
    parts: list[str] = []
    if fg is not None:
        parts.append(color_sequence(fg))
    if bg is not None:
        parts.append(color_sequence(bg, background=True))

    flags = {"bold": bold, "dim": dim, "italic": italic, "underline": underline}
    parts.extend(f"{CSI}{_STYLE_CODES[name]}m" for name, on in flags.items() if on)

    if not parts:
        return text
    return f"{''.join(parts)}{text}{RESET}"


def strip_ansi(text: str) -> str:
    """Remove CSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"
