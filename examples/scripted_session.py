#!/usr/bin/env python3
"""
Scripted checkbox-search session.

Drives a source-backed prompt with a canned key stream instead of a real
terminal, printing every frame the prompt renders.

Usage:
    python examples/scripted_session.py
"""

import asyncio

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from checkbox_search import Choice, LineBuffer, PromptConfig, run_prompt, setup_logging
from checkbox_search.tui.keys import KEY_DOWN, KEY_ENTER, KEY_ESCAPE, KEY_TAB, Key

console = Console()

PACKAGES = [
    Choice(value="httpx", description="Async HTTP client"),
    Choice(value="rich", description="Rich text and beautiful formatting"),
    Choice(value="pyyaml", description="YAML parser and emitter"),
    Choice(value="pytest", description="Testing framework"),
    Choice(value="uvicorn", description="ASGI server", disabled="pinned by platform"),
]


async def search_packages(term, token):
    """Pretend to query a package index."""
    await asyncio.sleep(0.05)
    token.raise_if_cancelled()
    if not term:
        return PACKAGES
    return [p for p in PACKAGES if term.lower() in p.value]


async def keystrokes():
    """Type 'py', toggle both matches, clear the search and submit."""
    line = LineBuffer()

    async def settle():
        await asyncio.sleep(0.1)

    await settle()
    for ch in "py":
        line.text += ch
        yield Key.from_char(ch), line
    await settle()
    yield KEY_TAB, line
    yield KEY_DOWN, line
    yield KEY_TAB, line
    yield KEY_ESCAPE, line
    await settle()
    yield KEY_ENTER, line


def show(frame: str) -> None:
    console.print(Rule(style="dim"))
    console.print(Text.from_ansi(frame))


async def main() -> None:
    setup_logging("WARNING")

    config = PromptConfig(
        message="Which packages should be installed?",
        source=search_packages,
        required=True,
        instructions="Type to search, Tab to select, Enter to install",
    )

    values = await run_prompt(config, keystrokes(), render=show)
    console.print(f"\n[green]Selected:[/green] {', '.join(values)}")


if __name__ == "__main__":
    asyncio.run(main())
