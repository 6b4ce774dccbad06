"""Tests for the per-type operator catalog."""

import pytest

from cdpfilter.filters import (
    OPERATOR_LABELS,
    FieldType,
    FilterOperator,
    is_operator_allowed,
    operator_choices,
    operators_for_type,
)


class TestOperatorsForType:
    """Test cases for operators_for_type."""

    def test_string_operators_in_builder_order(self):
        """String fields offer the text operators in a fixed order."""
        assert [op.value for op in operators_for_type(FieldType.STRING)] == [
            "equals", "not_equals", "contains", "not_contains",
            "starts_with", "ends_with", "is_empty", "is_not_empty",
        ]

    def test_date_operators(self):
        assert [op.value for op in operators_for_type("date")] == [
            "equals", "not_equals", "before", "after",
            "between", "in_last", "in_next", "is_empty", "is_not_empty",
        ]

    def test_boolean_has_only_truth_operators(self):
        assert operators_for_type("boolean") == [FilterOperator.IS_TRUE, FilterOperator.IS_FALSE]

    def test_every_type_has_an_entry(self):
        for field_type in FieldType:
            assert operators_for_type(field_type)

    def test_returns_a_copy(self):
        """Mutating the returned list leaves the catalog untouched."""
        ops = operators_for_type("enum")
        ops.clear()
        assert len(operators_for_type("enum")) == 4

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            operators_for_type("currency")


class TestIsOperatorAllowed:
    """Test cases for is_operator_allowed."""

    def test_number_comparison_allowed(self):
        assert is_operator_allowed("number", "greater_than")

    def test_text_operator_rejected_for_number(self):
        assert not is_operator_allowed(FieldType.NUMBER, FilterOperator.CONTAINS)

    def test_enum_does_not_accept_contains(self):
        assert not is_operator_allowed("enum", "contains")

    def test_unknown_operator_string(self):
        assert not is_operator_allowed("string", "sounds_like")

    def test_unknown_type(self):
        assert not is_operator_allowed("currency", "equals")


class TestOperatorChoices:
    """Test cases for the labelled operator choices."""

    def test_labels_cover_every_operator(self):
        assert set(OPERATOR_LABELS) == set(FilterOperator)

    def test_choices_carry_labels(self):
        choices = operator_choices("array")
        assert choices[0] == {"value": "includes", "label": "includes"}
        assert {"value": "is_not_empty", "label": "is not empty"} in choices

    def test_negated_label(self):
        assert OPERATOR_LABELS[FilterOperator.NOT_EQUALS] == "does not equal"
