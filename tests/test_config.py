"""Tests for prompt configuration."""

from pathlib import Path
from textwrap import dedent

import pytest

from checkbox_search.choices import Separator, normalize_choices
from checkbox_search.config import PromptConfig, PromptConfigError
from checkbox_search.page_size import PageSizeConfig
from checkbox_search.tui.theme import CheckboxSearchTheme


class TestPromptConfig:
    """Tests for PromptConfig."""

    def test_default_values(self) -> None:
        config = PromptConfig(message="Pick", choices=["a"])

        assert config.page_size is None
        assert config.instructions is True
        assert config.filter is None
        assert config.loop is True
        assert config.required is False
        assert config.validate([]) is True
        assert config.theme is None
        assert config.default == ()
        assert config.prefix is None
        assert config.source_driven is False

    def test_message_required(self) -> None:
        with pytest.raises(PromptConfigError, match="message"):
            PromptConfig(message="", choices=["a"])

    def test_needs_choices_or_source(self) -> None:
        with pytest.raises(PromptConfigError, match="exactly one"):
            PromptConfig(message="Pick")

    def test_rejects_choices_and_source(self) -> None:
        async def source(term, token):
            return []

        with pytest.raises(PromptConfigError, match="exactly one"):
            PromptConfig(message="Pick", choices=["a"], source=source)

    def test_rejects_string_choices(self) -> None:
        with pytest.raises(PromptConfigError):
            PromptConfig(message="Pick", choices="abc")

    def test_source_driven(self) -> None:
        async def source(term, token):
            return []

        assert PromptConfig(message="Pick", source=source).source_driven is True


class TestFromDict:
    """Tests for PromptConfig.from_dict."""

    def test_basic(self) -> None:
        config = PromptConfig.from_dict(
            {"message": "Pick", "choices": ["a", "b"], "loop": False, "required": True}
        )

        assert config.message == "Pick"
        assert list(config.choices) == ["a", "b"]
        assert config.loop is False
        assert config.required is True

    def test_page_size_mapping(self) -> None:
        config = PromptConfig.from_dict(
            {"message": "Pick", "choices": ["a"], "page_size": {"base": 12, "buffer": 2}}
        )

        assert config.page_size == PageSizeConfig(base=12, buffer=2)

    def test_page_size_integer(self) -> None:
        config = PromptConfig.from_dict({"message": "Pick", "choices": ["a"], "page_size": 5})

        assert config.page_size == 5

    @pytest.mark.parametrize("value", ["ten", True, [1]])
    def test_page_size_invalid(self, value) -> None:
        with pytest.raises(PromptConfigError, match="page_size"):
            PromptConfig.from_dict({"message": "Pick", "choices": ["a"], "page_size": value})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(PromptConfigError):
            PromptConfig.from_dict(["message"])

    def test_overrides_supply_callables(self) -> None:
        def validate(choices):
            return len(choices) > 1

        config = PromptConfig.from_dict({"message": "Pick", "choices": ["a"]}, validate=validate)

        assert config.validate is validate

    def test_source_override_drops_declared_choices(self) -> None:
        async def source(term, token):
            return []

        config = PromptConfig.from_dict({"message": "Pick", "choices": ["a"]}, source=source)

        assert config.choices is None
        assert config.source is source

    def test_theme_mapping_kept(self) -> None:
        config = PromptConfig.from_dict(
            {"message": "Pick", "choices": ["a"], "theme": {"help_mode": "never"}}
        )

        assert config.theme == {"help_mode": "never"}

    def test_theme_file_relative_to_base_dir(self, tmp_path: Path) -> None:
        (tmp_path / "theme.yaml").write_text("help_mode: auto\n")

        config = PromptConfig.from_dict(
            {"message": "Pick", "choices": ["a"], "theme": "theme.yaml"},
            base_dir=tmp_path,
        )

        assert isinstance(config.theme, CheckboxSearchTheme)
        assert config.theme.help_mode == "auto"


class TestFromYaml:
    """Tests for YAML loading."""

    def test_from_yaml_file(self, config_file: Path) -> None:
        config = PromptConfig.from_yaml(config_file)

        assert config.message == "Pick toppings"
        assert config.required is True
        assert config.default == ("cheese",)
        assert config.page_size == PageSizeConfig(base=10, buffer=2)

        items = normalize_choices(config.choices)
        assert [getattr(i, "value", None) for i in items] == ["cheese", "ham", None, "olives", "mushrooms"]
        assert Separator.is_separator(items[2])
        assert items[2].separator == "-- veggies --"
        assert items[3].disabled == "out of stock"

    def test_from_yaml_string(self) -> None:
        content = dedent(
            """
            message: Pick
            instructions: Tab toggles
            choices: [x, y]
            """
        )

        config = PromptConfig.from_yaml_string(content)

        assert config.instructions == "Tab toggles"
        assert list(config.choices) == ["x", "y"]

    def test_empty_yaml(self) -> None:
        with pytest.raises(PromptConfigError):
            PromptConfig.from_yaml_string("")
