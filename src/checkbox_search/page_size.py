"""
Page-size resolution.

Turns a bare page size or a :class:`PageSizeConfig` policy into the number
of rows to show, taking terminal height and the space needed by the active
choice's description into account.
"""

from __future__ import annotations

import math
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

from rich.cells import cell_len

from checkbox_search.choices import Item, Separator

DEFAULT_FALLBACK_PAGE_SIZE = 7
DEFAULT_TERMINAL_WIDTH = 80

# Prompt message, help tip, search line, error line, description line and
# one spare row.
RESERVED_LINES = 6
MIN_DYNAMIC_PAGE_SIZE = 2
MAX_DYNAMIC_PAGE_SIZE = 50


class PageSizeConfigError(ValueError):
    """Raised when a :class:`PageSizeConfig` is internally inconsistent."""

    pass


@dataclass
class PageSizeConfig:
    """
    Declarative page-size policy.

    Attributes
    ----------
    base:
        Starting size.  ``None`` derives it from the terminal height.
    max, min:
        Bounds applied after the buffer is subtracted.
    buffer:
        Rows reserved below the list (ignored with auto-buffering).
    min_buffer:
        Lower bound on the reserved rows.
    auto_buffer_descriptions:
        Reserve as many rows as the tallest description needs.
    auto_buffer_counts_line_width:
        Count wrapped rows of long description lines too.
    """

    base: int | None = None
    max: int | None = None
    min: int | None = None
    buffer: int | None = None
    min_buffer: int | None = None
    auto_buffer_descriptions: bool = False
    auto_buffer_counts_line_width: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PageSizeConfig:
        """Create a config from a dictionary with snake_case keys."""
        return cls(
            base=data.get("base"),
            max=data.get("max"),
            min=data.get("min"),
            buffer=data.get("buffer"),
            min_buffer=data.get("min_buffer"),
            auto_buffer_descriptions=data.get("auto_buffer_descriptions", False),
            auto_buffer_counts_line_width=data.get("auto_buffer_counts_line_width", False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "base": self.base,
            "max": self.max,
            "min": self.min,
            "buffer": self.buffer,
            "min_buffer": self.min_buffer,
            "auto_buffer_descriptions": self.auto_buffer_descriptions,
            "auto_buffer_counts_line_width": self.auto_buffer_counts_line_width,
        }


PageSize = Union[int, PageSizeConfig]


# ---------------------------------------------------------------------------
# Terminal geometry
# ---------------------------------------------------------------------------

def get_terminal_size() -> os.terminal_size | None:
    """
    Current size of the terminal attached to stdout.

    Returns ``None`` when stdout is not a terminal or the size cannot be
    queried.  Never cached: the terminal may be resized between calls.
    """
    try:
        return os.get_terminal_size(sys.stdout.fileno())
    except (AttributeError, OSError, ValueError):
        return None


def _terminal_width() -> int:
    size = get_terminal_size()
    if size is None or size.columns < 1:
        return DEFAULT_TERMINAL_WIDTH
    return size.columns


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def validate_page_size_config(config: PageSizeConfig) -> None:
    """Raise :class:`PageSizeConfigError` if *config* is inconsistent."""
    if config.min is not None and config.min < 1:
        raise PageSizeConfigError("PageSize min cannot be less than 1")

    if config.base is not None and config.base < 1:
        raise PageSizeConfigError("PageSize base cannot be less than 1")

    if config.buffer is not None and config.buffer < 0:
        raise PageSizeConfigError("PageSize buffer cannot be negative")

    if config.min_buffer is not None and config.min_buffer < 0:
        raise PageSizeConfigError("PageSize minBuffer cannot be negative")

    if config.min is not None and config.max is not None and config.min > config.max:
        raise PageSizeConfigError(
            f"PageSize min ({config.min}) cannot be greater than max ({config.max})"
        )


def calculate_description_lines(
    items: Sequence[Item],
    count_line_width: bool = False,
) -> int:
    """
    Rows needed by the tallest description in *items*.

    Each newline-separated segment counts as one row.  With
    *count_line_width* a segment wider than the terminal counts as the
    number of rows it wraps onto (empty segments still count as one).
    """
    width = _terminal_width() if count_line_width else DEFAULT_TERMINAL_WIDTH
    max_lines = 0

    for item in items:
        if Separator.is_separator(item) or not item.description:
            continue

        segments = item.description.split("\n")
        if count_line_width:
            lines = sum(max(1, math.ceil(cell_len(segment) / width)) for segment in segments)
        else:
            lines = len(segments)

        max_lines = max(max_lines, lines)

    return max_lines


def calculate_dynamic_page_size(fallback_page_size: int = DEFAULT_FALLBACK_PAGE_SIZE) -> int:
    """Page size derived from the terminal height, clamped to ``[2, 50]``."""
    try:
        size = get_terminal_size()
        height = size.lines if size is not None else 0
    except (AttributeError, OSError, ValueError):
        height = 0

    if not height or height < 1:
        raw = fallback_page_size
    else:
        raw = height - RESERVED_LINES

    return max(MIN_DYNAMIC_PAGE_SIZE, min(raw, MAX_DYNAMIC_PAGE_SIZE))


def resolve_page_size(page_size: PageSize, items: Sequence[Item]) -> int:
    """
    Resolve *page_size* to a row count.

    A bare integer is returned unmodified.  A :class:`PageSizeConfig` is
    validated first, then resolved as ``base - buffer`` bounded by ``max``,
    then ``min``, then a floor of one row.
    """
    if isinstance(page_size, int) and not isinstance(page_size, bool):
        return page_size

    validate_page_size_config(page_size)

    if page_size.base is not None:
        base = page_size.base
    else:
        base = calculate_dynamic_page_size(DEFAULT_FALLBACK_PAGE_SIZE)

    if page_size.auto_buffer_descriptions:
        buffer = calculate_description_lines(items, page_size.auto_buffer_counts_line_width)
    else:
        buffer = page_size.buffer or 0

    if page_size.min_buffer is not None:
        buffer = max(buffer, page_size.min_buffer)

    size = base - buffer

    if page_size.max is not None:
        size = min(size, page_size.max)
    if page_size.min is not None:
        size = max(size, page_size.min)

    return max(1, size)
