from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union
import json
import uuid

import jsonschema

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"


class FilterOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_EQUAL = "greater_equal"
    LESS_EQUAL = "less_equal"
    BEFORE = "before"
    AFTER = "after"
    BETWEEN = "between"
    IN_LAST = "in_last"
    IN_NEXT = "in_next"
    IS_TRUE = "is_true"
    IS_FALSE = "is_false"
    INCLUDES = "includes"
    EXCLUDES = "excludes"


class GroupLogic(str, Enum):
    AND = "AND"
    OR = "OR"


def _coerce_operator(raw: Any) -> Union[FilterOperator, str]:
    """
    Map a raw operator string onto FilterOperator. Unknown strings are kept
    as-is so evaluation can reject them instead of parsing.
    """
    if isinstance(raw, FilterOperator):
        return raw
    if not raw:
        return ""
    try:
        return FilterOperator(raw)
    except ValueError:
        return str(raw)


def _json_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Field metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldOption:
    value: str
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "label": self.label}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldOption":
        value = str(data["value"])
        return cls(value=value, label=str(data.get("label", value)))


@dataclass(frozen=True)
class FieldValidation:
    """
    Advisory constraints shown by the builder. The evaluator ignores them.
    """
    required: bool = False
    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"required": self.required}
        if self.min is not None:
            out["min"] = self.min
        if self.max is not None:
            out["max"] = self.max
        if self.pattern is not None:
            out["pattern"] = self.pattern
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldValidation":
        return cls(
            required=bool(data.get("required", False)),
            min=data.get("min"),
            max=data.get("max"),
            pattern=data.get("pattern"),
        )


@dataclass(frozen=True)
class FieldDefinition:
    """
    A filterable attribute: the record key it reads, how it is shown, and the
    semantic type that picks the comparison routine.
    """
    key: str
    label: str
    type: FieldType = FieldType.STRING
    options: tuple = ()
    validation: Optional[FieldValidation] = None

    def option_values(self) -> List[str]:
        return [o.value for o in self.options]

    # camelCase JSON helpers
    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "key": self.key,
            "label": self.label,
            "type": self.type.value,
        }
        if self.options:
            out["options"] = [o.to_dict() for o in self.options]
        if self.validation is not None:
            out["validation"] = self.validation.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldDefinition":
        validation = data.get("validation")
        return cls(
            key=data["key"],
            label=data.get("label", data["key"]),
            type=FieldType(data.get("type", FieldType.STRING.value)),
            options=tuple(FieldOption.from_dict(o) for o in data.get("options", [])),
            validation=FieldValidation.from_dict(validation) if validation else None,
        )


# ---------------------------------------------------------------------------
# Core filter models
# ---------------------------------------------------------------------------

@dataclass
class FilterCondition:
    """
    One atomic predicate: a record field, an operator and a comparison value.
    """
    field: str
    operator: Union[FilterOperator, str] = FilterOperator.EQUALS
    value: Any = ""
    value_type: Optional[FieldType] = None

    @property
    def is_blank(self) -> bool:
        """A row still being edited in the builder."""
        return not self.field or not self.operator

    # camelCase JSON helpers
    def to_dict(self) -> Dict[str, Any]:
        op = self.operator.value if isinstance(self.operator, FilterOperator) else self.operator
        out: Dict[str, Any] = {
            "field": self.field,
            "operator": op,
            "value": _json_value(self.value),
        }
        if self.value_type is not None:
            out["valueType"] = self.value_type.value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterCondition":
        value_type = data.get("valueType")
        return cls(
            field=data.get("field", ""),
            operator=_coerce_operator(data.get("operator", "")),
            value=data.get("value", ""),
            value_type=FieldType(value_type) if value_type else None,
        )


@dataclass
class FilterGroup:
    """
    Conditions that must all hold for a record to match the group.
    """
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    conditions: List[FilterCondition] = field(default_factory=list)
    logic: GroupLogic = GroupLogic.AND

    @property
    def is_configured(self) -> bool:
        return any(not c.is_blank for c in self.conditions)

    # camelCase JSON helpers
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "conditions": [c.to_dict() for c in self.conditions],
            "logic": self.logic.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterGroup":
        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            conditions=[FilterCondition.from_dict(c) for c in data.get("conditions", [])],
            logic=GroupLogic(data.get("logic") or GroupLogic.AND.value),
        )


# ---------------------------------------------------------------------------
# JSON Schemas
# ---------------------------------------------------------------------------

FILTER_GROUPS_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://example.com/filter-groups.schema.json",
    "title": "Filter Groups",
    "$defs": {
        "FilterCondition": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "field": {"type": "string"},
                "operator": {
                    "type": "string",
                    "enum": [""] + [op.value for op in FilterOperator],
                },
                "value": {
                    "oneOf": [
                        {"type": "array", "items": {"type": ["string", "number", "null"]}},
                        {"type": "string"},
                        {"type": "number"},
                        {"type": "boolean"},
                        {"type": "null"},
                    ]
                },
                "valueType": {"type": "string", "enum": [t.value for t in FieldType]},
            },
            "required": ["field", "operator"],
        },
        "FilterGroup": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "id": {"type": "string"},
                "conditions": {"type": "array", "items": {"$ref": "#/$defs/FilterCondition"}},
                "logic": {"type": "string", "enum": [l.value for l in GroupLogic]},
            },
            "required": ["conditions"],
        },
    },
    "type": "array",
    "items": {"$ref": "#/$defs/FilterGroup"},
}


def parse_filter_groups_json(
    payload: Union[str, List[Dict[str, Any]]],
    *,
    validate: bool = True,
) -> List[FilterGroup]:
    """
    Accept a JSON string or a decoded list and return FilterGroups.
    """
    data = json.loads(payload) if isinstance(payload, str) else payload
    if validate:
        jsonschema.validate(instance=data, schema=FILTER_GROUPS_SCHEMA)
    return [FilterGroup.from_dict(g) for g in data]


# ---------------------------------------------------------------------------
# Public exports
# ---------------------------------------------------------------------------

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
]
