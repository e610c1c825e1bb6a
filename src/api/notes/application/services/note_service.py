"""Note application service for the Notes bounded context.

Orchestrates validated creation, filtered listing and owner-only changes
of notes. Every operation takes the caller's identity assertion and
resolves the local user itself; nothing is trusted from an earlier call.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import UserService
from iam.application.value_objects import IdentityAssertion
from iam.domain.aggregates import User
from iam.ports.exceptions import AuthenticationRequiredError
from notes.application.observability import (
    DefaultNoteServiceProbe,
    NoteServiceProbe,
)
from notes.application.query_plan import NoteFilters, plan_listing
from notes.domain.aggregates import Note, NoteChanges
from notes.domain.value_objects import NoteId
from notes.ports.exceptions import NoteAccessDeniedError, NoteNotFoundError
from notes.ports.repositories import INoteRepository


class NoteService:
    """Application service for note management."""

    def __init__(
        self,
        note_repository: INoteRepository,
        user_service: UserService,
        session: AsyncSession,
        probe: NoteServiceProbe | None = None,
    ):
        """Initialize NoteService with dependencies.

        Args:
            note_repository: Repository for note persistence
            user_service: Resolves the calling user from an identity assertion
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._note_repository = note_repository
        self._user_service = user_service
        self._session = session
        self._probe = probe or DefaultNoteServiceProbe()

    async def create_note(
        self,
        assertion: IdentityAssertion | None,
        title: str,
        content: str,
        billable: bool,
        duration: float | None = None,
    ) -> NoteId:
        """Create an open note owned by the caller.

        Args:
            assertion: The caller's identity, or None when unauthenticated
            title: Note title (1-200 characters after trimming)
            content: Note body (1-5000 characters after trimming)
            billable: Whether the work is billable
            duration: Optional duration in minutes (0-1440)

        Returns:
            The ID of the new note

        Raises:
            AuthenticationRequiredError: If no identity is present
            UserNotFoundError: If the caller has not been synced yet
            DuplicateUserError: If several users carry the caller's subject
            NoteValidationError: If any input is out of bounds
        """
        try:
            async with self._session.begin():
                user = await self._user_service.require_user(assertion)
                note = Note.create(
                    created_by=user.id,
                    title=title,
                    content=content,
                    billable=billable,
                    duration=duration,
                )
                await self._note_repository.save(note)
        except Exception as e:
            self._probe.note_creation_failed(error=str(e))
            raise

        self._probe.note_created(note_id=note.id.value, user_id=user.id.value)
        return note.id

    async def get_notes(
        self,
        assertion: IdentityAssertion | None,
        filters: NoteFilters | None = None,
    ) -> list[Note]:
        """List notes, newest first.

        Any authenticated caller may list. Without the
        ``created_by_current_user`` filter the listing spans every owner.
        When that filter is set and the caller has no local user yet, the
        result is empty rather than an error.

        Args:
            assertion: The caller's identity, or None when unauthenticated
            filters: Optional filters; None means no restriction

        Returns:
            Matching notes ordered by creation time, newest first

        Raises:
            AuthenticationRequiredError: If no identity is present
        """
        plan = plan_listing(filters)
        filters = filters or NoteFilters()

        try:
            if assertion is None:
                raise AuthenticationRequiredError("Authentication required")

            owner: User | None = None
            if plan.scope_to_caller:
                owner = await self._user_service.get_current_user_optional(
                    assertion
                )
                if owner is None:
                    self._probe.notes_listed(plan=plan.name, count=0)
                    return []

            notes = await self._note_repository.list(
                owner_id=owner.id if owner else None,
                bill_status=filters.bill_status if plan.match_status else None,
            )
        except Exception as e:
            self._probe.note_operation_failed(operation="get_notes", error=str(e))
            raise

        self._probe.notes_listed(plan=plan.name, count=len(notes))
        return notes

    async def update_note(
        self,
        assertion: IdentityAssertion | None,
        note_id: NoteId,
        changes: NoteChanges,
    ) -> Note:
        """Apply a partial update to a note the caller owns.

        Fields absent from ``changes`` keep their values. Present fields
        are validated as on creation; one invalid field rejects the whole
        update.

        Args:
            assertion: The caller's identity, or None when unauthenticated
            note_id: The note to update
            changes: The fields to change

        Returns:
            The updated Note

        Raises:
            AuthenticationRequiredError: If no identity is present
            UserNotFoundError: If the caller has not been synced yet
            NoteNotFoundError: If the note does not exist
            NoteAccessDeniedError: If the caller does not own the note
            NoteValidationError: If any present field is out of bounds
        """
        try:
            async with self._session.begin():
                user = await self._user_service.require_user(assertion)
                note = await self._get_owned_note(note_id, user, action="update")
                note.apply(changes)
                await self._note_repository.save(note)
        except Exception as e:
            self._probe.note_operation_failed(
                operation="update_note",
                error=str(e),
                note_id=note_id.value,
            )
            raise

        self._probe.note_updated(
            note_id=note_id.value,
            user_id=user.id.value,
            fields=changes.present_fields(),
        )
        return note

    async def delete_note(
        self,
        assertion: IdentityAssertion | None,
        note_id: NoteId,
    ) -> None:
        """Delete a note the caller owns. There is no soft delete.

        Raises:
            AuthenticationRequiredError: If no identity is present
            UserNotFoundError: If the caller has not been synced yet
            NoteNotFoundError: If the note does not exist
            NoteAccessDeniedError: If the caller does not own the note
        """
        try:
            async with self._session.begin():
                user = await self._user_service.require_user(assertion)
                note = await self._get_owned_note(note_id, user, action="delete")
                if not await self._note_repository.delete(note):
                    raise NoteNotFoundError(note_id.value)
        except Exception as e:
            self._probe.note_operation_failed(
                operation="delete_note",
                error=str(e),
                note_id=note_id.value,
            )
            raise

        self._probe.note_deleted(note_id=note_id.value, user_id=user.id.value)

    async def _get_owned_note(self, note_id: NoteId, user: User, action: str) -> Note:
        note = await self._note_repository.get_by_id(note_id)
        if note is None:
            raise NoteNotFoundError(note_id.value)

        if not note.is_owned_by(user.id):
            self._probe.note_access_denied(
                note_id=note_id.value,
                user_id=user.id.value,
                action=action,
            )
            raise NoteAccessDeniedError(note_id.value, action)

        return note
