"""PostgreSQL implementation of INoteRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import UserId
from notes.domain.aggregates import Note
from notes.domain.value_objects import BillStatus, NoteId
from notes.infrastructure.models import NoteModel
from notes.infrastructure.observability import (
    DefaultNoteRepositoryProbe,
    NoteRepositoryProbe,
)
from notes.ports.repositories import INoteRepository


class NoteRepository(INoteRepository):
    """PostgreSQL-backed repository for Note aggregates.

    Does not open transactions; the note service wraps each use case in
    ``session.begin()``.
    """

    def __init__(
        self, session: AsyncSession, probe: NoteRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultNoteRepositoryProbe()

    async def save(self, note: Note) -> None:
        """Insert a new note or write the mutable fields of an existing one.

        Args:
            note: The Note aggregate to persist
        """
        stmt = select(NoteModel).where(NoteModel.id == note.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.title = note.title
            model.content = note.content
            model.billable = note.billable
            model.duration = note.duration
            model.bill_status = note.bill_status.value
        else:
            model = NoteModel(
                id=note.id.value,
                title=note.title,
                content=note.content,
                created_by=note.created_by.value,
                billable=note.billable,
                duration=note.duration,
                bill_status=note.bill_status.value,
                created_at=note.created_at,
            )
            self._session.add(model)

        await self._session.flush()
        self._probe.note_saved(note.id.value, note.created_by.value)

    async def get_by_id(self, note_id: NoteId) -> Note | None:
        """Retrieve a note by its ID.

        Args:
            note_id: The unique identifier of the note

        Returns:
            The Note aggregate, or None if not found
        """
        stmt = select(NoteModel).where(NoteModel.id == note_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.note_not_found(note_id.value)
            return None

        self._probe.note_retrieved(note_id.value)
        return self._to_domain(model)

    async def list(
        self,
        owner_id: UserId | None = None,
        bill_status: BillStatus | None = None,
    ) -> list[Note]:
        """List notes newest first, optionally narrowed by owner and status.

        Args:
            owner_id: Only notes created by this user
            bill_status: Only notes in this billing state

        Returns:
            Notes ordered by created_at descending, then id descending
        """
        stmt = select(NoteModel)
        if owner_id is not None:
            stmt = stmt.where(NoteModel.created_by == owner_id.value)
        if bill_status is not None:
            stmt = stmt.where(NoteModel.bill_status == bill_status.value)
        stmt = stmt.order_by(NoteModel.created_at.desc(), NoteModel.id.desc())

        result = await self._session.execute(stmt)
        notes = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.notes_scanned(
            owner_id.value if owner_id else None,
            bill_status.value if bill_status else None,
            len(notes),
        )
        return notes

    async def delete(self, note: Note) -> bool:
        """Delete a note.

        Args:
            note: The Note aggregate to delete

        Returns:
            True if deleted, False if not found
        """
        stmt = select(NoteModel).where(NoteModel.id == note.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.note_removed(note.id.value)
        return True

    @staticmethod
    def _to_domain(model: NoteModel) -> Note:
        return Note(
            id=NoteId(value=model.id),
            title=model.title,
            content=model.content,
            created_by=UserId(value=model.created_by),
            billable=model.billable,
            duration=model.duration,
            bill_status=BillStatus(model.bill_status),
            created_at=model.created_at,
        )
