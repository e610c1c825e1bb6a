"""Pydantic models for note requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from notes.domain.aggregates import Note, NoteChanges
from notes.domain.value_objects import BillStatus


class CreateNoteRequest(BaseModel):
    """Request model for creating a note.

    Length and range bounds are checked by the domain after trimming, so
    they are not repeated here.
    """

    title: str = Field(..., description="Note title (1-200 characters)")
    content: str = Field(..., description="Note body (1-5000 characters)")
    billable: bool = Field(..., description="Whether the work is billable")
    duration: float | None = Field(
        None, description="Duration of the work in minutes (0-1440)"
    )


class CreateNoteResponse(BaseModel):
    """Response model for a created note."""

    id: str = Field(..., description="Note ID (ULID format)")


class UpdateNoteRequest(BaseModel):
    """Request model for a partial note update.

    Only the fields present in the JSON body are applied; omitted fields
    keep their stored values. An explicit ``null`` counts as omitted.
    """

    title: str | None = Field(None, description="New title")
    content: str | None = Field(None, description="New body")
    billable: bool | None = Field(None, description="New billable flag")
    duration: float | None = Field(None, description="New duration in minutes")
    bill_status: BillStatus | None = Field(None, description="New billing state")

    def to_changes(self) -> NoteChanges:
        """Convert the fields present in the request into a NoteChanges."""
        return NoteChanges(**self.model_dump(exclude_unset=True, exclude_none=True))


class NoteResponse(BaseModel):
    """Response model for a note."""

    id: str = Field(..., description="Note ID (ULID format)")
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note body")
    created_by: str = Field(..., description="User ID of the owner")
    billable: bool = Field(..., description="Whether the work is billable")
    duration: float | None = Field(None, description="Duration in minutes")
    bill_status: BillStatus = Field(..., description="Billing state")
    created_at: datetime = Field(..., description="When the note was created")

    @classmethod
    def from_domain(cls, note: Note) -> NoteResponse:
        """Convert domain Note aggregate to API response.

        Args:
            note: Note domain aggregate

        Returns:
            NoteResponse with note details
        """
        return cls(
            id=note.id.value,
            title=note.title,
            content=note.content,
            created_by=note.created_by.value,
            billable=note.billable,
            duration=note.duration,
            bill_status=note.bill_status,
            created_at=note.created_at,
        )
