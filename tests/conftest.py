"""Shared pytest fixtures for checkbox-search tests."""

import os
from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest

from checkbox_search.choices import Choice, Separator


@pytest.fixture(autouse=True)
def terminal(monkeypatch) -> Callable[..., None]:
    """
    Control the terminal geometry seen by the page-size resolver.

    Starts out with no terminal attached; call the fixture value with
    ``(columns, lines)`` to attach one, or with ``None`` to detach again.
    """
    size: list[os.terminal_size | None] = [None]

    monkeypatch.setattr("checkbox_search.page_size.get_terminal_size", lambda: size[0])

    def set_size(columns: int | None = None, lines: int | None = None) -> None:
        size[0] = None if columns is None else os.terminal_size((columns, lines or 0))

    return set_size


@pytest.fixture
def fruits() -> list[str]:
    return ["Apple", "Banana", "Cherry"]


@pytest.fixture
def grouped_choices() -> list:
    """Choices with a separator, a disabled entry and descriptions."""
    return [
        Choice(value="apple", name="Apple", description="Crunchy"),
        Choice(value="banana", name="Banana", disabled="out of stock"),
        Separator(),
        Choice(value="cherry", name="Cherry", description="Small\nand red"),
        Choice(value="date", name="Date", short="D"),
    ]


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A YAML prompt config on disk."""
    path = tmp_path / "prompt.yaml"
    path.write_text(
        dedent(
            """\
            message: Pick toppings
            required: true
            default: [cheese]
            page_size:
              base: 10
              buffer: 2
            choices:
              - cheese
              - value: ham
                name: Ham
                description: Smoked
              - separator: "-- veggies --"
              - value: olives
                name: Olives
                disabled: out of stock
              - mushrooms
            """
        )
    )
    return path
