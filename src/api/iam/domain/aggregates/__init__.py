"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.user import (
    NO_EMAIL_PROVIDED,
    UNNAMED_USER,
    User,
    preferred_display_name,
)

__all__ = [
    "NO_EMAIL_PROVIDED",
    "UNNAMED_USER",
    "User",
    "preferred_display_name",
]
