"""Dependency injection for IAM bounded context.

Composes infrastructure resources (database sessions, token validation)
with IAM-specific components (repositories, services).
"""

from iam.dependencies.authentication import (
    bearer_scheme,
    get_authentication_probe,
    get_jwt_validator,
)
from iam.dependencies.user import (
    get_identity_assertion,
    get_user_query_service,
    get_user_repository,
    get_user_service,
    get_user_service_probe,
)

__all__ = [
    "bearer_scheme",
    "get_authentication_probe",
    "get_identity_assertion",
    "get_jwt_validator",
    "get_user_query_service",
    "get_user_repository",
    "get_user_service",
    "get_user_service_probe",
]
