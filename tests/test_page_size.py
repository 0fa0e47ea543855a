"""Tests for page-size resolution."""

import pytest

from checkbox_search.choices import Choice, Separator, normalize_choices
from checkbox_search.page_size import (
    PageSizeConfig,
    PageSizeConfigError,
    calculate_description_lines,
    calculate_dynamic_page_size,
    resolve_page_size,
    validate_page_size_config,
)


def _items(*descriptions):
    return normalize_choices(
        [Choice(value=f"v{i}", description=d) for i, d in enumerate(descriptions)]
    )


class TestValidatePageSizeConfig:
    """Tests for validate_page_size_config."""

    @pytest.mark.parametrize(
        ("config", "message"),
        [
            (PageSizeConfig(min=10, max=5), "PageSize min (10) cannot be greater than max (5)"),
            (PageSizeConfig(min=0), "PageSize min cannot be less than 1"),
            (PageSizeConfig(min_buffer=-1), "PageSize minBuffer cannot be negative"),
            (PageSizeConfig(buffer=-2), "PageSize buffer cannot be negative"),
            (PageSizeConfig(base=0), "PageSize base cannot be less than 1"),
        ],
    )
    def test_invalid_configs(self, config: PageSizeConfig, message: str) -> None:
        with pytest.raises(PageSizeConfigError) as exc_info:
            validate_page_size_config(config)

        assert str(exc_info.value) == message

    def test_valid_configs(self) -> None:
        validate_page_size_config(PageSizeConfig())
        validate_page_size_config(PageSizeConfig(base=10, min=2, max=20, buffer=0, min_buffer=0))

    def test_error_is_a_value_error(self) -> None:
        assert issubclass(PageSizeConfigError, ValueError)


class TestCalculateDescriptionLines:
    """Tests for calculate_description_lines."""

    def test_no_descriptions(self) -> None:
        items = normalize_choices(["a", "b", Separator()])

        assert calculate_description_lines(items) == 0

    def test_single_line_descriptions(self) -> None:
        assert calculate_description_lines(_items("Short", "Another short one")) == 1

    def test_tallest_description_wins(self) -> None:
        items = _items("Single", "Line 1\nLine 2\nLine 3", "Line 1\nLine 2")

        assert calculate_description_lines(items) == 3

    def test_empty_descriptions_ignored(self) -> None:
        assert calculate_description_lines(_items("", "Valid", None)) == 1

    def test_long_line_counts_once_without_width(self) -> None:
        assert calculate_description_lines(_items("x" * 200)) == 1

    def test_long_line_wraps_with_width(self, terminal) -> None:
        terminal(80, 24)

        assert calculate_description_lines(_items("x" * 161), count_line_width=True) == 3

    def test_width_falls_back_to_80_columns(self) -> None:
        assert calculate_description_lines(_items("x" * 81), count_line_width=True) == 2

    def test_wide_characters_count_double(self, terminal) -> None:
        terminal(10, 24)

        # Ten CJK characters occupy twenty cells.
        assert calculate_description_lines(_items("漢" * 10), count_line_width=True) == 2

    def test_empty_segments_count_with_width(self) -> None:
        assert calculate_description_lines(_items("\n\n\n"), count_line_width=True) == 4
        assert calculate_description_lines(_items("short\n\nother\n"), count_line_width=True) == 4


class TestCalculateDynamicPageSize:
    """Tests for calculate_dynamic_page_size."""

    def test_fallback_without_terminal(self) -> None:
        assert calculate_dynamic_page_size() == 7
        assert calculate_dynamic_page_size(10) == 10

    def test_terminal_height_minus_reserved_lines(self, terminal) -> None:
        terminal(80, 30)

        assert calculate_dynamic_page_size() == 24

    def test_clamped_low(self, terminal) -> None:
        terminal(80, 5)

        assert calculate_dynamic_page_size() == 2

    def test_clamped_high(self, terminal) -> None:
        terminal(80, 200)

        assert calculate_dynamic_page_size() == 50

    def test_zero_height_uses_fallback(self, terminal) -> None:
        terminal(80, 0)

        assert calculate_dynamic_page_size(8) == 8

    def test_small_fallback_still_clamped(self) -> None:
        assert calculate_dynamic_page_size(1) == 2


class TestResolvePageSize:
    """Tests for resolve_page_size."""

    def test_integer_returned_unmodified(self) -> None:
        assert resolve_page_size(10, _items(None)) == 10
        assert resolve_page_size(25, []) == 25

    def test_base(self) -> None:
        assert resolve_page_size(PageSizeConfig(base=15), _items(None)) == 15

    def test_base_from_terminal(self, terminal) -> None:
        terminal(80, 24)

        assert resolve_page_size(PageSizeConfig(), _items(None)) == 18

    def test_base_without_terminal(self) -> None:
        assert resolve_page_size(PageSizeConfig(), _items(None)) == 7

    def test_buffer(self) -> None:
        assert resolve_page_size(PageSizeConfig(base=20, buffer=3), []) == 17

    def test_min_buffer(self) -> None:
        assert resolve_page_size(PageSizeConfig(base=20, buffer=1, min_buffer=5), []) == 15

    def test_auto_buffer_descriptions(self) -> None:
        config = PageSizeConfig(base=20, auto_buffer_descriptions=True)

        assert resolve_page_size(config, _items("Line 1\nLine 2\nLine 3", "Single")) == 17

    def test_auto_buffer_supersedes_buffer(self) -> None:
        config = PageSizeConfig(base=20, auto_buffer_descriptions=True, buffer=10)

        assert resolve_page_size(config, _items("Single")) == 19

    def test_auto_buffer_with_min_buffer(self) -> None:
        config = PageSizeConfig(base=30, auto_buffer_descriptions=True, buffer=2, min_buffer=8)

        assert resolve_page_size(config, _items("Line 1\nLine 2")) == 22

    def test_auto_buffer_without_descriptions(self) -> None:
        config = PageSizeConfig(base=10, auto_buffer_descriptions=True)

        assert resolve_page_size(config, []) == 10
        assert resolve_page_size(config, _items(None, None)) == 10

    def test_min_bound(self) -> None:
        assert resolve_page_size(PageSizeConfig(base=10, buffer=8, min=5), []) == 5

    def test_max_bound(self) -> None:
        assert resolve_page_size(PageSizeConfig(base=50, max=25), []) == 25

    def test_both_bounds(self) -> None:
        config = PageSizeConfig(base=100, buffer=90, min=15, max=20)

        assert resolve_page_size(config, []) == 15

    def test_never_below_one(self) -> None:
        assert resolve_page_size(PageSizeConfig(base=5, buffer=10), []) == 1

    def test_invalid_config_raises(self) -> None:
        with pytest.raises(PageSizeConfigError):
            resolve_page_size(PageSizeConfig(min=3, max=2), [])


class TestPageSizeConfig:
    """Tests for PageSizeConfig dict conversion."""

    def test_from_dict(self) -> None:
        config = PageSizeConfig.from_dict({"base": 12, "min_buffer": 2, "auto_buffer_descriptions": True})

        assert config.base == 12
        assert config.min_buffer == 2
        assert config.auto_buffer_descriptions is True
        assert config.max is None

    def test_to_dict_round_trip(self) -> None:
        config = PageSizeConfig(base=10, max=20, buffer=1)

        assert PageSizeConfig.from_dict(config.to_dict()) == config
