"""Tests for choice normalisation."""

from checkbox_search.choices import (
    DEFAULT_SEPARATOR,
    Choice,
    NormalizedChoice,
    Separator,
    apply_defaults,
    is_checked,
    is_selectable,
    normalize_choices,
    same_value,
    toggle,
)


class TestNormalizeChoices:
    """Tests for normalize_choices."""

    def test_string_choice(self) -> None:
        [item] = normalize_choices(["Apple"])

        assert item.value == "Apple"
        assert item.name == "Apple"
        assert item.short == "Apple"
        assert item.disabled is False
        assert item.checked is False
        assert item.description is None

    def test_name_defaults_to_stringified_value(self) -> None:
        [item] = normalize_choices([Choice(value=42)])

        assert item.value == 42
        assert item.name == "42"
        assert item.short == "42"

    def test_short_defaults_to_name(self) -> None:
        [item] = normalize_choices([Choice(value="a", name="Alpha")])

        assert item.short == "Alpha"

    def test_explicit_fields_are_kept(self) -> None:
        [item] = normalize_choices(
            [Choice(value="a", name="Alpha", short="A", description="First", disabled="nope", checked=True)]
        )

        assert item.short == "A"
        assert item.description == "First"
        assert item.disabled == "nope"
        assert item.checked is True

    def test_empty_description_becomes_none(self) -> None:
        [item] = normalize_choices([Choice(value="a", description="")])

        assert item.description is None

    def test_mapping_choice(self) -> None:
        [item] = normalize_choices([{"value": "ham", "name": "Ham", "description": "Smoked"}])

        assert isinstance(item, NormalizedChoice)
        assert item.name == "Ham"
        assert item.description == "Smoked"

    def test_mapping_separator(self) -> None:
        [item] = normalize_choices([{"separator": "-- more --"}])

        assert Separator.is_separator(item)
        assert item.separator == "-- more --"

    def test_separator_passes_through_by_identity(self) -> None:
        separator = Separator()

        [item] = normalize_choices([separator])

        assert item is separator
        assert item.separator == DEFAULT_SEPARATOR

    def test_order_and_count_preserved(self) -> None:
        items = normalize_choices(["b", Separator(), "a", Choice(value="c")])

        assert len(items) == 4
        assert [getattr(i, "value", None) for i in items] == ["b", None, "a", "c"]

    def test_normalized_choices_compare_by_identity(self) -> None:
        first, second = normalize_choices(["a", "a"])

        assert first != second
        assert first == first


class TestPredicates:
    """Tests for selectable/checked predicates and value identity."""

    def test_disabled_is_not_selectable(self) -> None:
        [enabled, disabled] = normalize_choices(["a", Choice(value="b", disabled=True)])

        assert is_selectable(enabled)
        assert not is_selectable(disabled)
        assert not is_selectable(Separator())

    def test_checked_disabled_does_not_count(self) -> None:
        [item] = normalize_choices([Choice(value="b", disabled="locked", checked=True)])

        assert not is_checked(item)

    def test_same_value_primitives_by_type_and_equality(self) -> None:
        assert same_value(1, 1)
        assert same_value("a", "a")
        assert same_value(None, None)
        assert not same_value(1, 2)
        assert not same_value(1, True)
        assert not same_value(1, 1.0)

    def test_same_value_objects_by_identity(self) -> None:
        marker = object()
        value = {"id": 1}

        assert same_value(marker, marker)
        assert same_value(value, value)
        assert not same_value({"id": 1}, {"id": 1})

    def test_toggle_returns_new_object(self) -> None:
        [item] = normalize_choices(["a"])

        toggled = toggle(item)

        assert toggled is not item
        assert toggled.checked is True
        assert item.checked is False

    def test_toggle_disabled_is_noop(self) -> None:
        [item] = normalize_choices([Choice(value="a", disabled=True)])

        assert toggle(item) is item


class TestApplyDefaults:
    """Tests for default selections."""

    def test_matching_values_are_checked(self) -> None:
        items = normalize_choices(["a", "b", "c"])

        result = apply_defaults(items, ["b", "c"])

        assert [i.checked for i in result] == [False, True, True]

    def test_disabled_items_are_not_checked(self) -> None:
        items = normalize_choices([Choice(value="a", disabled=True)])

        [item] = apply_defaults(items, ["a"])

        assert item.checked is False

    def test_untouched_items_keep_identity(self) -> None:
        items = normalize_choices(["a", Separator(), "b"])

        result = apply_defaults(items, ["b"])

        assert result[0] is items[0]
        assert result[1] is items[1]
        assert result[2] is not items[2]
