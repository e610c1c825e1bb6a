"""Protocol for note application service observability.

Defines the interface for domain probes that capture application-level
domain events for note operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class NoteServiceProbe(Protocol):
    """Domain probe for note application service operations."""

    def note_created(self, note_id: str, user_id: str) -> None:
        """Record that a note was created."""
        ...

    def note_creation_failed(self, error: str) -> None:
        """Record that note creation failed."""
        ...

    def notes_listed(self, plan: str, count: int) -> None:
        """Record that notes were listed with the given plan."""
        ...

    def note_updated(self, note_id: str, user_id: str, fields: list[str]) -> None:
        """Record that a note was updated."""
        ...

    def note_deleted(self, note_id: str, user_id: str) -> None:
        """Record that a note was deleted."""
        ...

    def note_access_denied(self, note_id: str, user_id: str, action: str) -> None:
        """Record that a user tried to change a note they do not own."""
        ...

    def note_operation_failed(
        self, operation: str, error: str, note_id: str | None = None
    ) -> None:
        """Record that a note operation failed."""
        ...

    def with_context(self, context: ObservationContext) -> NoteServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultNoteServiceProbe:
    """Default implementation of NoteServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultNoteServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultNoteServiceProbe(logger=self._logger, context=context)

    def note_created(self, note_id: str, user_id: str) -> None:
        """Record that a note was created."""
        self._logger.info(
            "note_created",
            note_id=note_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def note_creation_failed(self, error: str) -> None:
        """Record that note creation failed."""
        self._logger.error(
            "note_creation_failed",
            error=error,
            **self._get_context_kwargs(),
        )

    def notes_listed(self, plan: str, count: int) -> None:
        self._logger.debug(
            "notes_listed",
            plan=plan,
            count=count,
            **self._get_context_kwargs(),
        )

    def note_updated(self, note_id: str, user_id: str, fields: list[str]) -> None:
        self._logger.info(
            "note_updated",
            note_id=note_id,
            user_id=user_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def note_deleted(self, note_id: str, user_id: str) -> None:
        self._logger.info(
            "note_deleted",
            note_id=note_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def note_access_denied(self, note_id: str, user_id: str, action: str) -> None:
        """Record that a user tried to change a note they do not own."""
        self._logger.warning(
            "note_access_denied",
            note_id=note_id,
            user_id=user_id,
            action=action,
            **self._get_context_kwargs(),
        )

    def note_operation_failed(
        self, operation: str, error: str, note_id: str | None = None
    ) -> None:
        self._logger.error(
            "note_operation_failed",
            operation=operation,
            error=error,
            note_id=note_id,
            **self._get_context_kwargs(),
        )
