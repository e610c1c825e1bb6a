"""Domain probe for note repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to note persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class NoteRepositoryProbe(Protocol):
    """Domain probe for note repository operations."""

    def note_saved(self, note_id: str, created_by: str) -> None:
        """Record that a note was successfully saved."""
        ...

    def note_retrieved(self, note_id: str) -> None:
        """Record that a note was retrieved."""
        ...

    def note_not_found(self, note_id: str) -> None:
        """Record that a note was not found."""
        ...

    def note_removed(self, note_id: str) -> None:
        """Record that a note row was deleted."""
        ...

    def notes_scanned(
        self, owner_id: str | None, bill_status: str | None, count: int
    ) -> None:
        """Record that a listing scan completed."""
        ...

    def with_context(self, context: ObservationContext) -> NoteRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultNoteRepositoryProbe:
    """Default implementation of NoteRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultNoteRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultNoteRepositoryProbe(logger=self._logger, context=context)

    def note_saved(self, note_id: str, created_by: str) -> None:
        """Record that a note was successfully saved."""
        self._logger.info(
            "note_saved",
            note_id=note_id,
            created_by=created_by,
            **self._get_context_kwargs(),
        )

    def note_retrieved(self, note_id: str) -> None:
        """Record that a note was retrieved."""
        self._logger.debug(
            "note_retrieved",
            note_id=note_id,
            **self._get_context_kwargs(),
        )

    def note_not_found(self, note_id: str) -> None:
        """Record that a note was not found."""
        self._logger.debug(
            "note_not_found",
            note_id=note_id,
            **self._get_context_kwargs(),
        )

    def note_removed(self, note_id: str) -> None:
        self._logger.info(
            "note_removed",
            note_id=note_id,
            **self._get_context_kwargs(),
        )

    def notes_scanned(
        self, owner_id: str | None, bill_status: str | None, count: int
    ) -> None:
        self._logger.debug(
            "notes_scanned",
            owner_id=owner_id,
            bill_status=bill_status,
            count=count,
            **self._get_context_kwargs(),
        )
