"""
Prompt configuration.

A :class:`PromptConfig` can be built programmatically or loaded from YAML.
Callables (``source``, ``filter``, ``validate``) can only be supplied from
code; everything else has a declarative form::

    message: Pick your toppings
    instructions: Tab toggles, Enter confirms
    required: true
    default: [cheese]
    page_size:
      base: 12
      auto_buffer_descriptions: true
    choices:
      - cheese
      - value: ham
        name: Ham
        description: Smoked
      - separator: "-- veggies --"
      - value: olives
        disabled: out of stock
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

from checkbox_search.choices import NormalizedChoice, RawChoice
from checkbox_search.filtering import FilterFn
from checkbox_search.page_size import PageSize, PageSizeConfig
from checkbox_search.source import SourceFn
from checkbox_search.tui.theme import CheckboxSearchTheme, load_theme

ValidateResult = Union[bool, str]
ValidateFn = Callable[
    [Sequence[NormalizedChoice]],
    Union[ValidateResult, Awaitable[ValidateResult]],
]


class PromptConfigError(ValueError):
    """Raised for an invalid prompt configuration."""

    pass


def _always_valid(choices: Sequence[NormalizedChoice]) -> bool:
    return True


@dataclass
class PromptConfig:
    """
    Options of a checkbox-search prompt.

    Exactly one of *choices* (static list, filtered locally) or *source*
    (async function of ``(term_or_none, token)``) must be given.
    """

    message: str
    choices: Sequence[RawChoice] | None = None
    source: SourceFn | None = None
    page_size: PageSize | None = None  # None derives it from the terminal height
    instructions: str | bool = True  # False hides the help tip
    filter: FilterFn | None = None  # Static mode only
    loop: bool = True
    required: bool = False
    validate: ValidateFn = _always_valid
    theme: CheckboxSearchTheme | dict[str, Any] | None = None
    default: Sequence[Any] = field(default_factory=tuple)
    prefix: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.message, str) or not self.message:
            raise PromptConfigError("A prompt message is required")
        if (self.choices is None) == (self.source is None):
            raise PromptConfigError("Provide exactly one of 'choices' or 'source'")
        if self.choices is not None and isinstance(self.choices, (str, bytes)):
            raise PromptConfigError("'choices' must be a sequence, not a string")

    @property
    def source_driven(self) -> bool:
        return self.source is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None, **overrides: Any) -> PromptConfig:
        """
        Create a config from a dictionary.

        *overrides* supplies the non-declarative options (``source``,
        ``filter``, ``validate``) and takes precedence over *data*.
        A ``theme`` given as a string is read as a theme file path relative
        to *base_dir*.
        """
        if not isinstance(data, dict):
            raise PromptConfigError("Prompt config must be a mapping")

        page_size = data.get("page_size")
        if isinstance(page_size, dict):
            page_size = PageSizeConfig.from_dict(page_size)
        elif page_size is not None and (isinstance(page_size, bool) or not isinstance(page_size, int)):
            raise PromptConfigError("'page_size' must be an integer or a mapping")

        theme = data.get("theme")
        if isinstance(theme, str):
            theme_path = Path(theme)
            if base_dir is not None and not theme_path.is_absolute():
                theme_path = base_dir / theme_path
            theme = load_theme(theme_path)

        kwargs: dict[str, Any] = {
            "message": data.get("message", ""),
            "choices": data.get("choices"),
            "page_size": page_size,
            "instructions": data.get("instructions", True),
            "loop": data.get("loop", True),
            "required": data.get("required", False),
            "theme": theme,
            "default": tuple(data.get("default") or ()),
            "prefix": data.get("prefix"),
        }
        kwargs.update(overrides)
        if kwargs.get("source") is not None and "choices" not in overrides:
            kwargs["choices"] = None
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path, **overrides: Any) -> PromptConfig:
        """Load config from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {}, base_dir=Path(path).parent, **overrides)

    @classmethod
    def from_yaml_string(cls, content: str, **overrides: Any) -> PromptConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {}, **overrides)
