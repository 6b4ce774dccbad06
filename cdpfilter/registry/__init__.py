"""
Field registry for the CDP filter service.

This module holds the named sets of filterable field definitions.
"""

from .fields import (
    FieldRegistry,
    get_field_definition,
    create_custom_field_definition,
    merge_field_definitions,
)

__all__ = [
    "FieldRegistry",
    "get_field_definition",
    "create_custom_field_definition",
    "merge_field_definitions",
]
