"""Builders for filter conditions and groups used across tests."""

from cdpfilter.filters import FilterCondition, FilterGroup


def group(*conditions, id="g"):
    return FilterGroup(id=id, conditions=list(conditions))


def cond(field, operator, value="", value_type=None):
    return FilterCondition(field=field, operator=operator, value=value, value_type=value_type)
