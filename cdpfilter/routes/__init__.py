"""
API routes for the CDP filter service.

This module provides the saved filter routes.
"""

from .saved_filters import router, store, get_store

__all__ = [
    "router",
    "store",
    "get_store",
]
