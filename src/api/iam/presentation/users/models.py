"""Pydantic models for user responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.domain.aggregates import User


class UserResponse(BaseModel):
    """Response model for the caller's local user record."""

    id: str = Field(..., description="User ID (ULID format)")
    external_subject: str = Field(
        ..., description="Subject identifier issued by the identity provider"
    )
    email: str = Field(..., description="Email address or placeholder")
    name: str = Field(..., description="Display name")
    created_at: datetime = Field(..., description="When the user was provisioned")

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response.

        Args:
            user: User domain aggregate

        Returns:
            UserResponse with user details
        """
        return cls(
            id=user.id.value,
            external_subject=user.external_subject,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
        )
