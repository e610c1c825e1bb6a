"""User application service for IAM bounded context.

Keeps the local User table in step with the identity provider: one row per
external subject, created on first sign-in and renamed when the provider's
display name drifts.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.application.value_objects import IdentityAssertion
from iam.domain.aggregates import User
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
)


class UserService:
    """Application service for identity sync and current-user resolution.

    Every method takes the caller's identity assertion explicitly and
    re-checks it; nothing is trusted from an earlier call.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._probe = probe or DefaultUserServiceProbe()
        self._session = session

    async def resolve_current_user(
        self, assertion: IdentityAssertion | None
    ) -> User:
        """Find or create the local user for the caller (JIT provisioning).

        Safe to call repeatedly: an unchanged identity performs no writes.
        When a concurrent first sign-in of the same subject wins the insert,
        the unique index rejects ours and the winner's row is read instead.

        Args:
            assertion: The caller's identity, or None when unauthenticated

        Returns:
            The existing, renamed or newly created User

        Raises:
            AuthenticationRequiredError: If no identity is present
            DuplicateUserError: If several users carry the caller's subject
        """
        if assertion is None:
            self._probe.authentication_required(operation="resolve_current_user")
            raise AuthenticationRequiredError("Authentication required")

        try:
            try:
                return await self._ensure_user(assertion)
            except ExternalSubjectConflictError:
                self._probe.first_sign_in_conflict(subject=assertion.subject)
                return await self._ensure_user(assertion)
        except Exception as e:
            self._probe.user_provision_failed(
                subject=assertion.subject,
                error=str(e),
            )
            raise

    async def get_current_user_optional(
        self, assertion: IdentityAssertion | None
    ) -> User | None:
        """Look up the caller's user without creating one.

        Advisory lookup used to decide whether onboarding is needed:
        duplicates are reported to the probe and answered with None instead
        of failing.

        Args:
            assertion: The caller's identity, or None when unauthenticated

        Returns:
            The User, or None if unauthenticated, not provisioned or ambiguous
        """
        if assertion is None:
            return None

        match await self._user_repository.find_by_external_subject(
            assertion.subject
        ):
            case UserFound(user=user):
                return user
            case UserAbsent():
                return None
            case DuplicateUsersDetected(user_ids=user_ids):
                self._probe.duplicate_users_detected(
                    subject=assertion.subject,
                    count=len(user_ids),
                )
                return None

    async def require_user(self, assertion: IdentityAssertion | None) -> User:
        """Resolve the caller's existing user for an operation that needs one.

        Does not provision; callers are expected to have synced first.

        Args:
            assertion: The caller's identity, or None when unauthenticated

        Returns:
            The caller's User

        Raises:
            AuthenticationRequiredError: If no identity is present
            UserNotFoundError: If the subject has no local user yet
            DuplicateUserError: If several users carry the subject
        """
        if assertion is None:
            self._probe.authentication_required(operation="require_user")
            raise AuthenticationRequiredError("Authentication required")

        match await self._user_repository.find_by_external_subject(
            assertion.subject
        ):
            case UserFound(user=user):
                return user
            case UserAbsent():
                self._probe.user_not_provisioned(subject=assertion.subject)
                raise UserNotFoundError(assertion.subject)
            case DuplicateUsersDetected(user_ids=user_ids):
                self._probe.duplicate_users_detected(
                    subject=assertion.subject,
                    count=len(user_ids),
                )
                raise DuplicateUserError(assertion.subject, len(user_ids))

    async def _ensure_user(self, assertion: IdentityAssertion) -> User:
        """Run one find-or-create attempt in its own transaction."""
        was_created = False
        was_updated = False

        async with self._session.begin():
            match await self._user_repository.find_by_external_subject(
                assertion.subject
            ):
                case UserFound(user=user):
                    if user.sync_name(assertion.name, assertion.email):
                        await self._user_repository.save(user)
                        was_updated = True
                case UserAbsent():
                    user = User.provision(
                        external_subject=assertion.subject,
                        name=assertion.name,
                        email=assertion.email,
                    )
                    await self._user_repository.save(user)
                    was_created = True
                case DuplicateUsersDetected(user_ids=user_ids):
                    self._probe.duplicate_users_detected(
                        subject=assertion.subject,
                        count=len(user_ids),
                    )
                    raise DuplicateUserError(assertion.subject, len(user_ids))

        self._probe.user_ensured(
            user_id=user.id.value,
            subject=assertion.subject,
            was_created=was_created,
            was_updated=was_updated,
        )
        return user
