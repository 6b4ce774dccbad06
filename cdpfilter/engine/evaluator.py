from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union
import logging
import math

from dateutil import parser as date_parser

from ..filters import (
    FieldDefinition,
    FieldType,
    FilterCondition,
    FilterGroup,
    FilterOperator,
    is_operator_allowed,
)

log = logging.getLogger("filters")

Op = FilterOperator
FieldDefs = Union[Sequence[FieldDefinition], Mapping[str, FieldDefinition]]

_NAN = float("nan")

# ---------------------------------------------------------------------------
# Operand coercion
# ---------------------------------------------------------------------------

def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_number(value: Any) -> float:
    """
    NaN marks an empty number. Zero stays a real value.
    """
    if value is None:
        return _NAN
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return _NAN
        try:
            return float(s)
        except ValueError:
            return _NAN
    try:
        return float(value)
    except (TypeError, ValueError):
        return _NAN


def _as_datetime(value: Any) -> Optional[datetime]:
    """
    Parse a record or condition value into an aware UTC datetime.
    Returns None when the value is missing or unparsable.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, date):
            dt = datetime(value.year, value.month, value.day)
        elif isinstance(value, (int, float)):
            if math.isnan(value):
                return None
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        elif isinstance(value, str):
            if not value.strip():
                return None
            dt = date_parser.parse(value)
        else:
            return None
    except (ValueError, OverflowError, OSError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Type-specific comparators
# ---------------------------------------------------------------------------

def apply_string_operator(value: Any, operator: FilterOperator, condition_value: Any) -> bool:
    val = _as_text(value).lower()
    cond = _as_text(condition_value).lower()

    if operator == Op.EQUALS:        return val == cond
    if operator == Op.NOT_EQUALS:    return val != cond
    if operator == Op.CONTAINS:      return cond in val
    if operator == Op.NOT_CONTAINS:  return cond not in val
    if operator == Op.STARTS_WITH:   return val.startswith(cond)
    if operator == Op.ENDS_WITH:     return val.endswith(cond)
    if operator == Op.IS_EMPTY:      return val.strip() == ""
    if operator == Op.IS_NOT_EMPTY:  return val.strip() != ""

    log.warning("Unknown string operator %r (value=%r, condition=%r)", operator, value, condition_value)
    return False


def apply_number_operator(value: Any, operator: FilterOperator, condition_value: Any) -> bool:
    val = _as_number(value)
    cond = _as_number(condition_value)

    if operator == Op.EQUALS:         return val == cond
    if operator == Op.NOT_EQUALS:     return val != cond
    if operator == Op.GREATER_THAN:   return val > cond
    if operator == Op.LESS_THAN:      return val < cond
    if operator == Op.GREATER_EQUAL:  return val >= cond
    if operator == Op.LESS_EQUAL:     return val <= cond
    if operator == Op.IS_EMPTY:       return math.isnan(val)
    if operator == Op.IS_NOT_EMPTY:   return not math.isnan(val)

    log.warning("Unknown number operator %r (value=%r, condition=%r)", operator, value, condition_value)
    return False


def apply_date_operator(
    value: Any,
    operator: FilterOperator,
    condition_value: Any,
    *,
    now: Optional[datetime] = None,
) -> bool:
    val = _as_datetime(value)
    if val is None:
        return operator == Op.IS_EMPTY

    if operator == Op.IS_EMPTY:
        return False
    if operator == Op.IS_NOT_EMPTY:
        return True

    if operator == Op.BETWEEN:
        if not isinstance(condition_value, (list, tuple)) or len(condition_value) != 2:
            return False
        start, end = (_as_datetime(b) for b in condition_value)
        if start is None or end is None:
            return False
        return start <= val <= end

    if operator in (Op.IN_LAST, Op.IN_NEXT):
        days = _as_number(condition_value)
        if math.isnan(days) or days < 0:
            return False
        ref = _as_datetime(now) if now is not None else _utcnow()
        window = timedelta(days=days)
        if operator == Op.IN_LAST:
            return ref - window <= val <= ref
        return ref <= val <= ref + window

    cond = _as_datetime(condition_value)
    if cond is None:
        return False

    if operator == Op.EQUALS:      return val.date() == cond.date()
    if operator == Op.NOT_EQUALS:  return val.date() != cond.date()
    if operator == Op.BEFORE:      return val < cond
    if operator == Op.AFTER:       return val > cond

    log.warning("Unknown date operator %r (value=%r, condition=%r)", operator, value, condition_value)
    return False


def apply_boolean_operator(value: Any, operator: FilterOperator) -> bool:
    if operator == Op.IS_TRUE:   return bool(value)
    if operator == Op.IS_FALSE:  return not bool(value)

    log.warning("Unknown boolean operator %r (value=%r)", operator, value)
    return False


def apply_array_operator(value: Any, operator: FilterOperator, condition_value: Any) -> bool:
    # anything that is not a list counts as an empty one
    if not isinstance(value, (list, tuple)):
        return operator == Op.IS_EMPTY

    needle = _as_text(condition_value)
    if operator == Op.INCLUDES:      return needle in value
    if operator == Op.EXCLUDES:      return needle not in value
    if operator == Op.IS_EMPTY:      return len(value) == 0
    if operator == Op.IS_NOT_EMPTY:  return len(value) > 0

    log.warning("Unknown array operator %r (value=%r, condition=%r)", operator, value, condition_value)
    return False


# ---------------------------------------------------------------------------
# Condition / group / expression evaluation
# ---------------------------------------------------------------------------

def _index(field_definitions: Optional[FieldDefs]) -> Mapping[str, FieldDefinition]:
    if not field_definitions:
        return {}
    if isinstance(field_definitions, Mapping):
        return field_definitions
    return {d.key: d for d in field_definitions}


def resolve_field_type(condition: FilterCondition, field_definition: Optional[FieldDefinition] = None) -> FieldType:
    """
    Field definition type first, then the condition's own valueType, then string.
    """
    if field_definition is not None:
        return FieldType(field_definition.type)
    if condition.value_type:
        return FieldType(condition.value_type)
    return FieldType.STRING


def evaluate_condition(
    condition: FilterCondition,
    record: Mapping[str, Any],
    field_definition: Optional[FieldDefinition] = None,
    *,
    now: Optional[datetime] = None,
) -> bool:
    """
    Evaluate one condition against one record. Never raises: unknown operators
    and unexpected record shapes are logged and count as "no match".
    """
    field_value: Any = None
    field_type: Optional[FieldType] = None
    try:
        field_type = resolve_field_type(condition, field_definition)
        try:
            operator = FilterOperator(condition.operator)
        except ValueError:
            log.warning("Unknown operator %r on field %r", condition.operator, condition.field)
            return False
        if not is_operator_allowed(field_type, operator):
            log.warning(
                "Operator %s is not valid for %s field %r",
                operator.value, field_type.value, condition.field,
            )
            return False

        field_value = record.get(condition.field)

        if field_type in (FieldType.STRING, FieldType.ENUM):
            return apply_string_operator(field_value, operator, condition.value)
        if field_type == FieldType.NUMBER:
            return apply_number_operator(field_value, operator, condition.value)
        if field_type == FieldType.DATE:
            return apply_date_operator(field_value, operator, condition.value, now=now)
        if field_type == FieldType.BOOLEAN:
            return apply_boolean_operator(field_value, operator)
        if field_type == FieldType.ARRAY:
            return apply_array_operator(field_value, operator, condition.value)

        log.warning("Unknown field type %r for condition %r", field_type, condition)
        return False
    except Exception:
        log.exception(
            "Error evaluating filter condition %r (value=%r, type=%s)",
            condition, field_value, field_type,
        )
        return False


def evaluate(
    condition: FilterCondition,
    record: Mapping[str, Any],
    field_definitions: Optional[FieldDefs] = None,
    *,
    now: Optional[datetime] = None,
) -> bool:
    return evaluate_condition(condition, record, _index(field_definitions).get(condition.field), now=now)


def _group_matches(
    group: FilterGroup,
    record: Mapping[str, Any],
    by_key: Mapping[str, FieldDefinition],
    now: Optional[datetime],
) -> bool:
    # blank rows are mid-edit in the builder and do not constrain the group
    return all(
        c.is_blank or evaluate_condition(c, record, by_key.get(c.field), now=now)
        for c in group.conditions
    )


def evaluate_group(
    group: FilterGroup,
    record: Mapping[str, Any],
    field_definitions: Optional[FieldDefs] = None,
    *,
    now: Optional[datetime] = None,
) -> bool:
    """
    AND over the group's conditions. A group without conditions matches.
    """
    return _group_matches(group, record, _index(field_definitions), now)


def evaluate_expression(
    groups: Sequence[FilterGroup],
    record: Mapping[str, Any],
    field_definitions: Optional[FieldDefs] = None,
    *,
    now: Optional[datetime] = None,
) -> bool:
    """
    OR over groups. An empty expression matches every record.
    """
    if not groups:
        return True
    by_key = _index(field_definitions)
    return any(_group_matches(g, record, by_key, now) for g in groups)


def filter_records(
    records: Iterable[Mapping[str, Any]],
    groups: Sequence[FilterGroup],
    field_definitions: Optional[FieldDefs] = None,
    *,
    now: Optional[datetime] = None,
) -> List[Mapping[str, Any]]:
    """
    Return the records matching at least one group, in input order.
    Records are returned as-is, never copied or modified.
    """
    if not groups:
        return list(records)
    by_key = _index(field_definitions)
    ref = now or _utcnow()
    return [r for r in records if any(_group_matches(g, r, by_key, ref) for g in groups)]


def configured_groups(groups: Sequence[FilterGroup]) -> List[FilterGroup]:
    """
    Drop groups with no usable condition, as the builder does before
    handing its state to a consumer.
    """
    kept = [g for g in groups if g.is_configured]
    if len(kept) != len(groups):
        log.debug("Filtered out unconfigured groups: total=%d valid=%d", len(groups), len(kept))
    return kept


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
