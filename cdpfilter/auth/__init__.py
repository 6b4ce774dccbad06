"""
Authentication module for the CDP filter service.

This module provides FastAPI dependencies that check bearer tokens and roles.
"""

from .require import (
    require_auth,
    require_roles_access,
)

__all__ = [
    "require_auth",
    "require_roles_access",
]
