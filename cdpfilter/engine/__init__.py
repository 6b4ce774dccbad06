"""
Filter evaluation for the CDP filter service.

This module matches in-memory records against filter groups.
"""

from .evaluator import (
    apply_string_operator,
    apply_number_operator,
    apply_date_operator,
    apply_boolean_operator,
    apply_array_operator,
    resolve_field_type,
    evaluate_condition,
    evaluate,
    evaluate_group,
    evaluate_expression,
    filter_records,
    configured_groups,
)

__all__ = [
    "apply_string_operator",
    "apply_number_operator",
    "apply_date_operator",
    "apply_boolean_operator",
    "apply_array_operator",
    "resolve_field_type",
    "evaluate_condition",
    "evaluate",
    "evaluate_group",
    "evaluate_expression",
    "filter_records",
    "configured_groups",
]
