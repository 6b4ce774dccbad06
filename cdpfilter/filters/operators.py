from __future__ import annotations
from typing import Dict, List, Union

from .models import FieldType, FilterOperator

Op = FilterOperator

OPERATORS_BY_TYPE: Dict[FieldType, tuple] = {
    FieldType.STRING: (
        Op.EQUALS, Op.NOT_EQUALS, Op.CONTAINS, Op.NOT_CONTAINS,
        Op.STARTS_WITH, Op.ENDS_WITH, Op.IS_EMPTY, Op.IS_NOT_EMPTY,
    ),
    FieldType.NUMBER: (
        Op.EQUALS, Op.NOT_EQUALS, Op.GREATER_THAN, Op.LESS_THAN,
        Op.GREATER_EQUAL, Op.LESS_EQUAL, Op.IS_EMPTY, Op.IS_NOT_EMPTY,
    ),
    FieldType.DATE: (
        Op.EQUALS, Op.NOT_EQUALS, Op.BEFORE, Op.AFTER,
        Op.BETWEEN, Op.IN_LAST, Op.IN_NEXT, Op.IS_EMPTY, Op.IS_NOT_EMPTY,
    ),
    FieldType.BOOLEAN: (Op.IS_TRUE, Op.IS_FALSE),
    FieldType.ENUM: (Op.EQUALS, Op.NOT_EQUALS, Op.IS_EMPTY, Op.IS_NOT_EMPTY),
    FieldType.ARRAY: (Op.INCLUDES, Op.EXCLUDES, Op.IS_EMPTY, Op.IS_NOT_EMPTY),
}

OPERATOR_LABELS: Dict[FilterOperator, str] = {
    Op.EQUALS: "equals",
    Op.NOT_EQUALS: "does not equal",
    Op.CONTAINS: "contains",
    Op.NOT_CONTAINS: "does not contain",
    Op.STARTS_WITH: "starts with",
    Op.ENDS_WITH: "ends with",
    Op.IS_EMPTY: "is empty",
    Op.IS_NOT_EMPTY: "is not empty",
    Op.GREATER_THAN: "greater than",
    Op.LESS_THAN: "less than",
    Op.GREATER_EQUAL: "greater than or equal",
    Op.LESS_EQUAL: "less than or equal",
    Op.BEFORE: "before",
    Op.AFTER: "after",
    Op.BETWEEN: "between",
    Op.IN_LAST: "in last",
    Op.IN_NEXT: "in next",
    Op.IS_TRUE: "is true",
    Op.IS_FALSE: "is false",
    Op.INCLUDES: "includes",
    Op.EXCLUDES: "excludes",
}


def operators_for_type(field_type: Union[FieldType, str]) -> List[FilterOperator]:
    """
    Ordered operators the builder offers for a field type.
    Raises ValueError for an unknown type name.
    """
    return list(OPERATORS_BY_TYPE[FieldType(field_type)])


def is_operator_allowed(field_type: Union[FieldType, str], operator: Union[FilterOperator, str]) -> bool:
    try:
        return FilterOperator(operator) in OPERATORS_BY_TYPE[FieldType(field_type)]
    except ValueError:
        return False


def operator_choices(field_type: Union[FieldType, str]) -> List[Dict[str, str]]:
    return [{"value": op.value, "label": OPERATOR_LABELS[op]} for op in operators_for_type(field_type)]


__all__ = [
    "OPERATORS_BY_TYPE",
    "OPERATOR_LABELS",
    "operators_for_type",
    "is_operator_allowed",
    "operator_choices",
]
