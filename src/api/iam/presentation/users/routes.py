"""HTTP routes for the caller's own user record."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import UserService
from iam.application.value_objects import IdentityAssertion
from iam.dependencies.user import (
    get_identity_assertion,
    get_user_query_service,
    get_user_service,
)
from iam.ports.exceptions import AuthenticationRequiredError, DuplicateUserError
from iam.presentation.users.models import UserResponse

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.post("/me/sync", status_code=status.HTTP_200_OK)
async def sync_current_user(
    assertion: Annotated[IdentityAssertion | None, Depends(get_identity_assertion)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Find or create the caller's local user and refresh its display name.

    Clients call this once whenever their sign-in state changes; repeated
    calls with an unchanged identity do not write.

    Args:
        assertion: Identity derived from the bearer token
        service: User service for identity sync

    Returns:
        UserResponse for the existing, renamed or newly created user

    Raises:
        HTTPException: 401 if no bearer token was sent
        HTTPException: 500 if several users carry the caller's subject
    """
    try:
        user = await service.resolve_current_user(assertion)
        return UserResponse.from_domain(user)

    except AuthenticationRequiredError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except DuplicateUserError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sync user",
        ) from e


@router.get("/me", status_code=status.HTTP_200_OK)
async def get_current_user(
    assertion: Annotated[IdentityAssertion | None, Depends(get_identity_assertion)],
    service: Annotated[UserService, Depends(get_user_query_service)],
) -> UserResponse | None:
    """Return the caller's local user without creating one.

    Answers ``null`` for anonymous callers, for subjects that have not
    been synced yet and for subjects with duplicate rows (logged).

    Args:
        assertion: Identity derived from the bearer token
        service: User service for identity lookups

    Returns:
        UserResponse, or None when there is no unambiguous local user
    """
    try:
        user = await service.get_current_user_optional(assertion)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to look up user",
        ) from e

    if user is None:
        return None
    return UserResponse.from_domain(user)
