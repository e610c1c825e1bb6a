"""Repository protocols (ports) for the Notes bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.value_objects import UserId
from notes.domain.aggregates import Note
from notes.domain.value_objects import BillStatus, NoteId


@runtime_checkable
class INoteRepository(Protocol):
    """Repository for Note aggregate persistence.

    Implementations do not manage transactions; the calling service does.
    """

    async def save(self, note: Note) -> None:
        """Insert a new note or write the mutable fields of an existing one.

        ``created_by`` and ``created_at`` are never rewritten.

        Args:
            note: The Note aggregate to persist
        """
        ...

    async def get_by_id(self, note_id: NoteId) -> Note | None:
        """Retrieve a note by its ID.

        Args:
            note_id: The unique identifier of the note

        Returns:
            The Note aggregate, or None if not found
        """
        ...

    async def list(
        self,
        owner_id: UserId | None = None,
        bill_status: BillStatus | None = None,
    ) -> list[Note]:
        """List notes newest first.

        Each argument that is given narrows the scan; with neither, every
        note is returned.

        Args:
            owner_id: Only notes created by this user
            bill_status: Only notes in this billing state

        Returns:
            Notes ordered by creation time, newest first, ties broken by id
        """
        ...

    async def delete(self, note: Note) -> bool:
        """Delete a note.

        Args:
            note: The Note aggregate to delete

        Returns:
            True if a row was removed, False if it no longer existed
        """
        ...
