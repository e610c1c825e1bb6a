"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for identity sync operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_ensured(
        self,
        user_id: str,
        subject: str,
        was_created: bool,
        was_updated: bool,
    ) -> None:
        """Record that a user was ensured to exist (found or created)."""
        ...

    def user_provision_failed(self, subject: str, error: str) -> None:
        """Record that user provisioning failed."""
        ...

    def first_sign_in_conflict(self, subject: str) -> None:
        """Record that a concurrent first sign-in inserted the user first."""
        ...

    def duplicate_users_detected(self, subject: str, count: int) -> None:
        """Record that more than one user carries the same subject."""
        ...

    def user_not_provisioned(self, subject: str) -> None:
        """Record that an authenticated caller has no local user yet."""
        ...

    def authentication_required(self, operation: str) -> None:
        """Record that an operation was attempted without an identity."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_ensured(
        self,
        user_id: str,
        subject: str,
        was_created: bool,
        was_updated: bool,
    ) -> None:
        """Record that a user was ensured to exist."""
        self._logger.info(
            "user_ensured",
            user_id=user_id,
            subject=subject,
            was_created=was_created,
            was_updated=was_updated,
            **self._get_context_kwargs(),
        )

    def user_provision_failed(self, subject: str, error: str) -> None:
        """Record that user provisioning failed."""
        self._logger.error(
            "user_provision_failed",
            subject=subject,
            error=error,
            **self._get_context_kwargs(),
        )

    def first_sign_in_conflict(self, subject: str) -> None:
        self._logger.warning(
            "user_first_sign_in_conflict",
            subject=subject,
            **self._get_context_kwargs(),
        )

    def duplicate_users_detected(self, subject: str, count: int) -> None:
        self._logger.error(
            "duplicate_users_detected",
            subject=subject,
            count=count,
            **self._get_context_kwargs(),
        )

    def user_not_provisioned(self, subject: str) -> None:
        self._logger.info(
            "user_not_provisioned",
            subject=subject,
            **self._get_context_kwargs(),
        )

    def authentication_required(self, operation: str) -> None:
        self._logger.warning(
            "authentication_required",
            operation=operation,
            **self._get_context_kwargs(),
        )
