import os
import re

from ..filters import FieldDefinition, FieldType, FilterGroup, FilterOperator, is_operator_allowed

MAX_FILTER_GROUPS = int(os.getenv("MAX_FILTER_GROUPS", "10"))

_VALUELESS = {
    FilterOperator.IS_EMPTY,
    FilterOperator.IS_NOT_EMPTY,
    FilterOperator.IS_TRUE,
    FilterOperator.IS_FALSE,
}


def _index(field_definitions: list[FieldDefinition]) -> dict[str, FieldDefinition]:
    return {fd.key: fd for fd in field_definitions}


def _assert_group_count_allowed(groups: list[FilterGroup], max_groups: int = MAX_FILTER_GROUPS) -> None:
    if len(groups) > max_groups:
        raise ValueError(f"Too many filter groups: {len(groups)} (maximum {max_groups})")


def _assert_conditions_allowed(
    set_name: str, groups: list[FilterGroup], field_definitions: list[FieldDefinition]
) -> None:
    allowed = _index(field_definitions)

    for group in groups:
        for c in group.conditions:
            if c.is_blank:
                continue
            fd = allowed.get(c.field)
            if fd is None:
                raise ValueError(f"Filter field not allowed for {set_name}: {c.field}")
            if not is_operator_allowed(fd.type, c.operator):
                op = getattr(c.operator, "value", c.operator)
                raise ValueError(
                    f"Operator {op} not allowed on field {c.field} of type {fd.type.value}"
                )
            if (
                fd.type == FieldType.ENUM
                and c.operator not in _VALUELESS
                and str(c.value).lower() not in {v.lower() for v in fd.option_values()}
            ):
                raise ValueError(
                    f"Value {c.value!r} is not an option of field {c.field}"
                )


def _advisory_issues(groups: list[FilterGroup], field_definitions: list[FieldDefinition]) -> list[str]:
    """
    Check values against each field's advisory constraints. Issues are
    reported back to the caller, never enforced.
    """
    allowed = _index(field_definitions)
    issues: list[str] = []

    for group in groups:
        for c in group.conditions:
            if c.is_blank or c.operator in _VALUELESS:
                continue
            fd = allowed.get(c.field)
            if fd is None or fd.validation is None:
                continue
            rules = fd.validation
            empty = c.value is None or (isinstance(c.value, str) and not c.value.strip())
            if empty:
                if rules.required:
                    issues.append(f"{fd.label}: a value is required")
                continue
            if fd.type == FieldType.NUMBER:
                try:
                    num = float(c.value)
                except (TypeError, ValueError):
                    issues.append(f"{fd.label}: {c.value!r} is not a number")
                    continue
                if rules.min is not None and num < rules.min:
                    issues.append(f"{fd.label}: {c.value} is below the minimum {rules.min}")
                if rules.max is not None and num > rules.max:
                    issues.append(f"{fd.label}: {c.value} is above the maximum {rules.max}")
            if rules.pattern and isinstance(c.value, str) and not re.search(rules.pattern, c.value):
                issues.append(f"{fd.label}: {c.value!r} does not match {rules.pattern}")
    return issues
