"""
Session tokens for the CDP filter service.

This module issues and verifies JWT access tokens.
"""

from .jwt import (
    issue_access_token,
    verify_access,
)

__all__ = [
    "issue_access_token",
    "verify_access",
]
