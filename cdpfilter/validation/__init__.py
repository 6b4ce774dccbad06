"""
Validation module for the CDP filter service.

This module checks submitted filter groups against a field set.
"""

from .rules import (
    MAX_FILTER_GROUPS,
    _assert_group_count_allowed,
    _assert_conditions_allowed,
    _advisory_issues,
)

__all__ = [
    "MAX_FILTER_GROUPS",
    "_assert_group_count_allowed",
    "_assert_conditions_allowed",
    "_advisory_issues",
]
