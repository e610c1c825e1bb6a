"""Repository protocols (ports) for IAM bounded context.

Lookups by external subject return a tagged result rather than raising,
so callers branch explicitly on found, absent and duplicated rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId


@dataclass(frozen=True)
class UserFound:
    """Exactly one User carries the subject."""

    user: User


@dataclass(frozen=True)
class UserAbsent:
    """No User carries the subject yet."""

    external_subject: str


@dataclass(frozen=True)
class DuplicateUsersDetected:
    """More than one User carries the subject (uniqueness was violated)."""

    external_subject: str
    user_ids: tuple[UserId, ...]


UserLookup = UserFound | UserAbsent | DuplicateUsersDetected


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Implementations do not manage transactions; the calling service does.
    """

    async def save(self, user: User) -> None:
        """Persist a user aggregate.

        Inserts a new user or writes the mutable fields of an existing one.

        Args:
            user: The User aggregate to persist

        Raises:
            ExternalSubjectConflictError: If another user already holds the
                same external subject
        """
        ...

    async def find_by_external_subject(self, external_subject: str) -> UserLookup:
        """Look a user up by the identity provider's subject.

        Must detect, rather than hide, more than one matching row.

        Args:
            external_subject: Subject identifier issued by the identity provider

        Returns:
            UserFound, UserAbsent or DuplicateUsersDetected
        """
        ...
