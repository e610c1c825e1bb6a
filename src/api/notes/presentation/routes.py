"""HTTP routes for notes.

Every route derives the caller's identity assertion from the bearer token
and passes it into the service, which re-checks it.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.value_objects import IdentityAssertion
from iam.dependencies.user import get_identity_assertion
from iam.ports.exceptions import (
    AuthenticationRequiredError,
    DuplicateUserError,
    UserNotFoundError,
)
from notes.application.query_plan import NoteFilters
from notes.application.services import NoteService
from notes.dependencies.note import get_note_query_service, get_note_service
from notes.domain.exceptions import NoteValidationError
from notes.domain.value_objects import BillStatus, NoteId
from notes.ports.exceptions import NoteAccessDeniedError, NoteNotFoundError
from notes.presentation.models import (
    CreateNoteRequest,
    CreateNoteResponse,
    NoteResponse,
    UpdateNoteRequest,
)

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
)


def _to_http_exception(error: Exception, fallback_detail: str) -> HTTPException:
    """Map a note or identity error onto the HTTP response it stands for."""
    match error:
        case AuthenticationRequiredError():
            return HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(error),
                headers={"WWW-Authenticate": "Bearer"},
            )
        case UserNotFoundError():
            return HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{error}; sync the current user first",
            )
        case NoteValidationError():
            return HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
                detail=str(error),
            )
        case NoteNotFoundError():
            return HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=str(error),
            )
        case NoteAccessDeniedError():
            return HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=str(error),
            )
        case DuplicateUserError():
            return HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(error),
            )
        case _:
            return HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=fallback_detail,
            )


def _parse_note_id(note_id: str) -> NoteId:
    # Malformed ids cannot exist, so they are answered like unknown ones
    try:
        return NoteId.from_string(note_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Note not found",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    request: CreateNoteRequest,
    assertion: Annotated[IdentityAssertion | None, Depends(get_identity_assertion)],
    service: Annotated[NoteService, Depends(get_note_service)],
) -> CreateNoteResponse:
    """Create a new open note owned by the caller.

    Args:
        request: Note creation request
        assertion: Identity derived from the bearer token
        service: Note service for orchestration

    Returns:
        CreateNoteResponse with the new note's ID

    Raises:
        HTTPException: 401 if no bearer token was sent
        HTTPException: 409 if the caller has not been synced yet
        HTTPException: 422 if a field is out of bounds
        HTTPException: 500 for unexpected errors
    """
    try:
        note_id = await service.create_note(
            assertion,
            title=request.title,
            content=request.content,
            billable=request.billable,
            duration=request.duration,
        )
    except Exception as e:
        raise _to_http_exception(e, "Failed to create note") from e

    return CreateNoteResponse(id=note_id.value)


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Notes matching the filters, newest first",
            "model": list[NoteResponse],
        },
        401: {"description": "No bearer token was sent"},
    },
)
async def list_notes(
    assertion: Annotated[IdentityAssertion | None, Depends(get_identity_assertion)],
    service: Annotated[NoteService, Depends(get_note_query_service)],
    created_by_current_user: Annotated[
        bool | None, Query(description="Only the caller's own notes")
    ] = None,
    bill_status: Annotated[
        BillStatus | None, Query(description="Only notes in this billing state")
    ] = None,
) -> list[NoteResponse]:
    """List notes, newest first.

    Without ``created_by_current_user`` the listing spans every owner.

    Args:
        assertion: Identity derived from the bearer token
        service: Note service for orchestration
        created_by_current_user: Restrict to the caller's own notes
        bill_status: Restrict to one billing state

    Returns:
        List of NoteResponse objects
    """
    filters = NoteFilters(
        created_by_current_user=created_by_current_user,
        bill_status=bill_status,
    )
    try:
        notes = await service.get_notes(assertion, filters)
    except Exception as e:
        raise _to_http_exception(e, "Failed to list notes") from e

    return [NoteResponse.from_domain(note) for note in notes]


@router.patch("/{note_id}", status_code=status.HTTP_200_OK)
async def update_note(
    note_id: str,
    request: UpdateNoteRequest,
    assertion: Annotated[IdentityAssertion | None, Depends(get_identity_assertion)],
    service: Annotated[NoteService, Depends(get_note_service)],
) -> NoteResponse:
    """Update the fields of a note that are present in the request body.

    Args:
        note_id: Note ID (ULID format)
        request: Partial update; omitted fields are left unchanged
        assertion: Identity derived from the bearer token
        service: Note service for orchestration

    Returns:
        NoteResponse with the updated note

    Raises:
        HTTPException: 401 if no bearer token was sent
        HTTPException: 403 if the caller does not own the note
        HTTPException: 404 if the note does not exist
        HTTPException: 422 if a field is out of bounds
        HTTPException: 500 for unexpected errors
    """
    note_id_obj = _parse_note_id(note_id)

    try:
        note = await service.update_note(
            assertion,
            note_id=note_id_obj,
            changes=request.to_changes(),
        )
    except Exception as e:
        raise _to_http_exception(e, "Failed to update note") from e

    return NoteResponse.from_domain(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    assertion: Annotated[IdentityAssertion | None, Depends(get_identity_assertion)],
    service: Annotated[NoteService, Depends(get_note_service)],
) -> None:
    """Delete a note the caller owns.

    Args:
        note_id: Note ID (ULID format)
        assertion: Identity derived from the bearer token
        service: Note service for orchestration

    Returns:
        None (204 No Content on success)

    Raises:
        HTTPException: 401 if no bearer token was sent
        HTTPException: 403 if the caller does not own the note
        HTTPException: 404 if the note does not exist
        HTTPException: 500 for unexpected errors
    """
    note_id_obj = _parse_note_id(note_id)

    try:
        await service.delete_note(assertion, note_id=note_id_obj)
    except Exception as e:
        raise _to_http_exception(e, "Failed to delete note") from e
