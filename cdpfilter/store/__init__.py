"""
Saved filter storage for the CDP filter service.

This module persists users' named filter expressions.
"""

from .saved_filters import (
    SavedFilter,
    SavedFilterStore,
)

__all__ = [
    "SavedFilter",
    "SavedFilterStore",
]
