"""PostgreSQL implementation of IUserRepository.

Users are provisioned from the identity provider's assertions; this
repository persists the local record and answers lookups by external
subject.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import ExternalSubjectConflictError
from iam.ports.repositories import (
    DuplicateUsersDetected,
    IUserRepository,
    UserAbsent,
    UserFound,
    UserLookup,
)


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates.

    Does not open transactions; the user service wraps each use case in
    ``session.begin()``.
    """

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def save(self, user: User) -> None:
        """Persist a user aggregate.

        New users are inserted with all fields. For existing users only the
        display name is written; subject, email and creation time are
        fixed at provisioning.

        Args:
            user: The User aggregate to persist

        Raises:
            ExternalSubjectConflictError: If the insert hits the unique
                external subject index
        """
        stmt = select(UserModel).where(UserModel.id == user.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.name = user.name
        else:
            model = UserModel(
                id=user.id.value,
                external_subject=user.external_subject,
                email=user.email,
                name=user.name,
                created_at=user.created_at,
            )
            self._session.add(model)

        # Flush so a lost first-sign-in race surfaces here, not at commit
        try:
            await self._session.flush()
        except IntegrityError as e:
            self._probe.external_subject_conflict(user.external_subject)
            raise ExternalSubjectConflictError(user.external_subject) from e

        self._probe.user_saved(user.id.value, user.external_subject)

    async def find_by_external_subject(self, external_subject: str) -> UserLookup:
        """Look a user up by the identity provider's subject.

        Fetches at most two rows: enough to tell a unique match from a
        violated uniqueness invariant without loading every twin.

        Args:
            external_subject: Subject identifier issued by the identity provider

        Returns:
            UserFound, UserAbsent or DuplicateUsersDetected
        """
        stmt = (
            select(UserModel)
            .where(UserModel.external_subject == external_subject)
            .order_by(UserModel.created_at, UserModel.id)
            .limit(2)
        )
        result = await self._session.execute(stmt)
        models = list(result.scalars().all())

        if not models:
            self._probe.user_not_found(external_subject)
            return UserAbsent(external_subject=external_subject)

        if len(models) > 1:
            self._probe.duplicate_external_subject(external_subject, len(models))
            return DuplicateUsersDetected(
                external_subject=external_subject,
                user_ids=tuple(UserId(value=model.id) for model in models),
            )

        self._probe.user_retrieved(models[0].id)
        return UserFound(user=self._to_domain(models[0]))

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(
            id=UserId(value=model.id),
            external_subject=model.external_subject,
            email=model.email,
            name=model.name,
            created_at=model.created_at,
        )
