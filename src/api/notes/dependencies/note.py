from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.services import UserService
from iam.dependencies.user import get_user_query_service, get_user_service
from infrastructure.database.dependencies import get_read_session, get_write_session
from notes.application.observability import (
    DefaultNoteServiceProbe,
    NoteServiceProbe,
)
from notes.application.services import NoteService
from notes.infrastructure.note_repository import NoteRepository


def get_note_service_probe() -> NoteServiceProbe:
    """Get NoteServiceProbe instance.

    Returns:
        DefaultNoteServiceProbe instance for observability
    """
    return DefaultNoteServiceProbe()


def get_note_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> NoteRepository:
    """Get NoteRepository instance.

    Args:
        session: Async database session

    Returns:
        NoteRepository instance
    """
    return NoteRepository(session=session)


def get_note_service(
    note_repo: Annotated[NoteRepository, Depends(get_note_repository)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[NoteServiceProbe, Depends(get_note_service_probe)],
) -> NoteService:
    """Get NoteService instance.

    The note repository and the user service share one session via
    FastAPI dependency caching, so user resolution runs inside the same
    transaction as the note change.

    Args:
        note_repo: Note repository
        user_service: User service resolving the caller
        session: Database session for transaction management
        probe: Note service probe for observability

    Returns:
        NoteService instance
    """
    return NoteService(
        note_repository=note_repo,
        user_service=user_service,
        session=session,
        probe=probe,
    )


def get_note_query_service(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    user_service: Annotated[UserService, Depends(get_user_query_service)],
    probe: Annotated[NoteServiceProbe, Depends(get_note_service_probe)],
) -> NoteService:
    """Get a NoteService bound to the read session, for listings.

    Args:
        session: Read-only database session
        user_service: User service on the same read session
        probe: Note service probe for observability

    Returns:
        NoteService instance
    """
    return NoteService(
        note_repository=NoteRepository(session=session),
        user_service=user_service,
        session=session,
        probe=probe,
    )
