from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from iam.application.services import UserService
from iam.application.value_objects import IdentityAssertion
from iam.dependencies.authentication import (
    bearer_scheme,
    get_authentication_probe,
    get_jwt_validator,
)
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_read_session, get_write_session
from shared_kernel.auth import InvalidTokenError, JWTValidator


async def get_identity_assertion(
    validator: Annotated[JWTValidator, Depends(get_jwt_validator)],
    auth_probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> IdentityAssertion | None:
    """Derive the caller's identity assertion from the bearer token.

    Runs for every request; the result is passed explicitly into the
    services, which decide for themselves whether an identity is required.

    Args:
        validator: JWT validator for token validation
        auth_probe: Authentication probe for observability
        credentials: Bearer credentials from the Authorization header

    Returns:
        IdentityAssertion for a valid token, None when no token was sent

    Raises:
        HTTPException 401: If a token was sent but is not valid
    """
    if credentials is None:
        auth_probe.anonymous_request()
        return None

    try:
        claims = await validator.validate_token(credentials.credentials)
    except InvalidTokenError as e:
        auth_probe.authentication_failed(reason=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    auth_probe.user_authenticated(subject=claims.sub)
    return IdentityAssertion(
        subject=claims.sub,
        name=claims.name,
        email=claims.email,
    )


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance.

    Returns:
        DefaultUserServiceProbe instance for observability
    """
    return DefaultUserServiceProbe()


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> UserRepository:
    """Get UserRepository instance.

    Args:
        session: Async database session

    Returns:
        UserRepository instance
    """
    return UserRepository(session=session)


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Args:
        user_repo: User repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(
        user_repository=user_repo,
        session=session,
        probe=probe,
    )


def get_user_query_service(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get a UserService bound to the read session.

    For the advisory current-user lookup, which never writes.

    Args:
        session: Read-only database session
        probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(
        user_repository=UserRepository(session=session),
        session=session,
        probe=probe,
    )
