"""Protocol for authentication observability.

Defines the interface for domain probes that capture authentication events
for the identity assertion dependency.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for authentication operations."""

    def user_authenticated(self, subject: str) -> None:
        """Record that a bearer token yielded a valid identity."""
        ...

    def authentication_failed(self, reason: str) -> None:
        """Record that a presented bearer token was rejected."""
        ...

    def anonymous_request(self) -> None:
        """Record a request that carried no bearer token."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def user_authenticated(self, subject: str) -> None:
        """Record successful user authentication via JWT."""
        self._logger.info(
            "user_authenticated",
            subject=subject,
            **self._get_context_kwargs(),
        )

    def authentication_failed(self, reason: str) -> None:
        """Record authentication failure."""
        self._logger.warning(
            "authentication_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def anonymous_request(self) -> None:
        self._logger.debug(
            "anonymous_request",
            **self._get_context_kwargs(),
        )
