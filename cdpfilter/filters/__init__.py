"""
Filter system for the CDP filter service.

This module provides filter models, the per-type operator catalog, and JSON parsing.
"""

from .models import (
    FieldType,
    FilterOperator,
    GroupLogic,
    FieldOption,
    FieldValidation,
    FieldDefinition,
    FilterCondition,
    FilterGroup,
    FILTER_GROUPS_SCHEMA,
    parse_filter_groups_json,
)
from .operators import (
    OPERATORS_BY_TYPE,
    OPERATOR_LABELS,
    operators_for_type,
    is_operator_allowed,
    operator_choices,
)

__all__ = [
    "FieldType",
    "FilterOperator",
    "GroupLogic",
    "FieldOption",
    "FieldValidation",
    "FieldDefinition",
    "FilterCondition",
    "FilterGroup",
    "FILTER_GROUPS_SCHEMA",
    "parse_filter_groups_json",
    "OPERATORS_BY_TYPE",
    "OPERATOR_LABELS",
    "operators_for_type",
    "is_operator_allowed",
    "operator_choices",
]
