"""
Command-line interface for checkbox-search.

Developer tooling for YAML-configured prompts: render the first frame of a
prompt, or show how its page size is computed for the current terminal.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from checkbox_search.config import PromptConfig, PromptConfigError
from checkbox_search.logging import disable, enable, set_level, setup_logging
from checkbox_search.page_size import (
    DEFAULT_FALLBACK_PAGE_SIZE,
    PageSizeConfig,
    PageSizeConfigError,
    calculate_description_lines,
    calculate_dynamic_page_size,
    get_terminal_size,
    resolve_page_size,
)
from checkbox_search.prompt import CheckboxSearch, LineBuffer
from checkbox_search.tui.keys import Key

console = Console()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Checkbox search prompt tooling",
        prog="checkbox-search",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress log output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Preview command
    preview_parser = subparsers.add_parser("preview", help="Print the first frame of a prompt")
    preview_parser.add_argument("config", help="Prompt config file (YAML)")
    preview_parser.add_argument(
        "-s",
        "--search",
        default="",
        help="Search term to type before rendering",
    )

    # Page-size command
    page_size_parser = subparsers.add_parser("page-size", help="Explain the resolved page size")
    page_size_parser.add_argument("config", help="Prompt config file (YAML)")

    args = parser.parse_args(argv)

    setup_logging("WARNING")
    if getattr(args, "quiet", False):
        disable()
    else:
        enable()
        if getattr(args, "verbose", False):
            set_level("DEBUG")

    if args.command == "preview":
        cmd_preview(args)
    elif args.command == "page-size":
        cmd_page_size(args)
    else:
        parser.print_help()


def _load_config(path: str) -> PromptConfig:
    """Load a prompt config, exiting with a message on failure."""
    config_path = Path(path)
    if not config_path.exists():
        console.print(f"[red]Config file not found: {config_path}[/red]")
        sys.exit(1)

    try:
        return PromptConfig.from_yaml(config_path)
    except (PromptConfigError, PageSizeConfigError, ValueError) as e:
        console.print(f"[red]Invalid config {config_path}: {e}[/red]")
        sys.exit(1)


def cmd_preview(args: argparse.Namespace) -> None:
    """Render the prompt after typing an optional search term."""
    config = _load_config(args.config)
    prompt = CheckboxSearch(config)

    line = LineBuffer()
    for ch in args.search:
        line.text += ch
        prompt.handle_key(Key.from_char(ch), line)

    try:
        frame = prompt.render()
    except PageSizeConfigError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(Text.from_ansi(frame))


def cmd_page_size(args: argparse.Namespace) -> None:
    """Show every input of the page-size computation."""
    config = _load_config(args.config)
    prompt = CheckboxSearch(config)
    items = prompt.state.items

    size = get_terminal_size()
    table = Table(title="Page Size")
    table.add_column("Input", style="cyan")
    table.add_column("Value")

    if size is not None:
        table.add_row("Terminal", f"{size.columns}x{size.lines}")
    else:
        table.add_row("Terminal", "[dim]unavailable[/dim]")
    table.add_row("Dynamic page size", str(calculate_dynamic_page_size(DEFAULT_FALLBACK_PAGE_SIZE)))

    page_size = config.page_size
    if page_size is None:
        table.add_row("Configured", "[dim]terminal height[/dim]")
    elif isinstance(page_size, PageSizeConfig):
        for key, value in page_size.to_dict().items():
            table.add_row(key, str(value))
        if page_size.auto_buffer_descriptions:
            lines = calculate_description_lines(items, page_size.auto_buffer_counts_line_width)
            table.add_row("Description lines", str(lines))
    else:
        table.add_row("Configured", str(page_size))

    try:
        resolved = prompt.page_size if page_size is None else resolve_page_size(page_size, items)
    except PageSizeConfigError as e:
        console.print(table)
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    table.add_row("Resolved", f"[bold]{resolved}[/bold]")
    console.print(table)


if __name__ == "__main__":
    main()
