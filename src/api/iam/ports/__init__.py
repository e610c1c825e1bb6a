"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details, keeping the domain and application layers
independent of infrastructure.
"""

from iam.ports.exceptions import (
    AuthenticationRequiredError,
    DuplicateUserError,
    ExternalSubjectConflictError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    DuplicateUsersDetected,
    IUserRepository,
    UserAbsent,
    UserFound,
    UserLookup,
)

__all__ = [
    "AuthenticationRequiredError",
    "DuplicateUserError",
    "DuplicateUsersDetected",
    "ExternalSubjectConflictError",
    "IUserRepository",
    "UserAbsent",
    "UserFound",
    "UserLookup",
    "UserNotFoundError",
]
