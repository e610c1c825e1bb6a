"""IAM presentation layer - aggregate-based organization.

Each aggregate package contains its own routes and models.
"""

from __future__ import annotations

from iam.presentation import users

router = users.router

__all__ = ["router"]
